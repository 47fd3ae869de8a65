"""
Configuration loader for ngdp.

This module provides functionality for loading and managing
configuration settings.

"""

from __future__ import annotations

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from ngdp.config import DEFAULT_CONFIG
from ngdp.errors import ConfigError

# Set up logger
logger = logging.getLogger(__name__)

# Type variable for config values with better type safety
T = TypeVar("T")

# Constant for minimum number of parts in environment variable
MIN_ENV_VAR_PARTS = 2

# Prefix of environment variables overriding configuration values
ENV_PREFIX = "NGDP_"

# Type for configuration values
ConfigValue = str | int | float | bool | dict[str, Any] | list[Any] | None


class ConfigLoader:
	"""
	Loads and manages configuration for ngdp.

	This class handles loading configuration from files, environment
	variables, and default values, with proper error handling and path
	resolution.

	"""

	_instance = None  # For singleton pattern

	@classmethod
	def get_instance(cls, config_file: str | None = None, reload: bool = False) -> ConfigLoader:
		"""
		Get the singleton instance of ConfigLoader.

		Args:
		        config_file: Path to configuration file (optional)
		        reload: Whether to reload config even if already loaded

		Returns:
		        ConfigLoader: Singleton instance

		"""
		if cls._instance is None or reload:
			cls._instance = cls(config_file)
		return cls._instance

	def __init__(self, config_file: str | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Path to configuration file (optional)

		Raises:
		        ConfigError: If the configuration cannot be loaded or is invalid

		"""
		self.config: dict[str, Any] = {}
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.ngdp.yml in the current directory
		2. $XDG_CONFIG_HOME/ngdp/config.yml
		3. ~/.ngdp/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Optional[Path]: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if path.exists():
				return path
			logger.warning("Specified config file not found: %s", path)
			return path  # Return it anyway, we'll handle the missing file in load_config

		# Try current directory
		local_config = Path(".ngdp.yml")
		if local_config.exists():
			return local_config

		# Try XDG config path
		xdg_config_file = Path(xdg_config_home) / "ngdp" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		# As a last resort, try the ~/.ngdp location
		home_config = Path.home() / ".ngdp" / "config.yml"
		if home_config.exists():
			return home_config

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        Dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If configuration file exists but cannot be loaded,
		                or if the loaded configuration is invalid

		"""
		# Start with default configuration
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		# Try to load from file if available
		if self.config_file:
			try:
				if self.config_file.exists():
					with self.config_file.open(encoding="utf-8") as f:
						file_config = yaml.safe_load(f)
						if file_config:
							if not isinstance(file_config, dict):
								msg = f"Configuration in {self.config_file} must be a mapping"
								raise ConfigError(msg)
							self._merge_configs(self.config, file_config)
					logger.info("Loaded configuration from %s", self.config_file)
				else:
					logger.warning("Configuration file not found: %s", self.config_file)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

		# Apply environment variable overrides
		self._apply_env_overrides()

		self._validate()

		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""
		Recursively merge two configuration dictionaries.

		Args:
		        base: Base configuration dictionary to merge into
		        override: Override configuration to apply

		"""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	@staticmethod
	def _convert_env_value(value: str) -> ConfigValue:
		"""Convert an environment variable value to an int, float, bool or str."""
		try:
			return int(value)
		except ValueError:
			pass
		try:
			return float(value)
		except ValueError:
			pass
		if value.lower() in ("true", "yes", "on"):
			return True
		if value.lower() in ("false", "no", "off"):
			return False
		return value

	def _apply_env_overrides(self) -> None:
		"""Apply environment variable overrides to configuration."""
		# Look for environment variables in the form NGDP_SECTION_KEY
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue

			parts = env_var.lower().split("_")[1:]
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue

			section, key = parts[0], "_".join(parts[1:])
			# Only sections of the default configuration can be overridden
			if section not in DEFAULT_CONFIG or not isinstance(self.config.get(section), dict):
				continue

			typed_value = self._convert_env_value(value)
			self.config[section][key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def _validate(self) -> None:
		"""
		Check the types of the known configuration values.

		Raises:
		        ConfigError: If a value has the wrong type

		"""
		order = self.config.get("order")
		if not isinstance(order, dict):
			msg = "order must be a mapping"
			raise ConfigError(msg)

		for key in ("base_path", "css_prefix", "js_prefix"):
			if not isinstance(order.get(key), str):
				msg = f"order.{key} must be a string"
				raise ConfigError(msg)

		for key in ("script_extensions", "style_extensions"):
			extensions = order.get(key)
			if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
				msg = f"order.{key} must be a list of strings"
				raise ConfigError(msg)

		if not isinstance(order.get("fail_on_syntax_error"), bool):
			msg = "order.fail_on_syntax_error must be a boolean"
			raise ConfigError(msg)

		max_workers = order.get("max_workers")
		if not isinstance(max_workers, int) or isinstance(max_workers, bool):
			msg = "order.max_workers must be an integer"
			raise ConfigError(msg)
		if max_workers < 1:
			msg = "order.max_workers must be at least 1"
			raise ConfigError(msg)

		targets = self.config.get("targets")
		if not isinstance(targets, dict):
			msg = "targets must be a mapping"
			raise ConfigError(msg)

		for name, target in targets.items():
			if not isinstance(target, dict):
				msg = f"targets.{name} must be a mapping"
				raise ConfigError(msg)
			sources = target.get("src")
			if isinstance(sources, str):
				target["src"] = [sources]
			elif not isinstance(sources, list) or not all(isinstance(src, str) for src in sources):
				msg = f"targets.{name}.src must be a string or a list of strings"
				raise ConfigError(msg)
			if not isinstance(target.get("dest"), str):
				msg = f"targets.{name}.dest must be a string"
				raise ConfigError(msg)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value, optionally with a section.

		Examples:
		        # Get a top-level key
		        config.get("order")

		        # Get a nested key with dot notation
		        config.get("order.base_path")

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        T: Configuration value or default

		"""
		parts = key.split(".")

		# Start with the whole config
		current = self.config

		# Traverse the parts
		for part in parts:
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default

		return cast("T", current)

	def set(self, key: str, value: ConfigValue) -> None:
		"""
		Set a configuration value.

		Args:
		        key: Configuration key, can include dots for nested access
		        value: Value to set

		"""
		parts = key.split(".")

		# Start with the whole config
		current = self.config

		# Traverse to the parent of the leaf
		for part in parts[:-1]:
			if part not in current or not isinstance(current[part], dict):
				current[part] = {}
			current = current[part]

		# Set the leaf value
		current[parts[-1]] = value

	def save(self, config_file: str | None = None) -> None:
		"""
		Save the current configuration to a file.

		Args:
		        config_file: Path to save configuration to (optional, defaults to current config_file)

		Raises:
		        ConfigError: If configuration cannot be saved

		"""
		save_path = Path(config_file) if config_file else self.config_file

		if not save_path:
			error_msg = "No configuration file specified for saving"
			logger.error(error_msg)
			raise ConfigError(error_msg)

		# Ensure parent directory exists
		save_path.parent.mkdir(parents=True, exist_ok=True)

		try:
			with save_path.open("w", encoding="utf-8") as f:
				yaml.dump(self.config, f, default_flow_style=False)
			logger.info("Configuration saved to %s", save_path)
		except OSError as e:
			error_msg = f"Error saving configuration to {save_path}: {e}"
			logger.exception(error_msg)
			raise ConfigError(error_msg) from e

	# Helper methods for specific configuration sections
	def get_order_config(self) -> dict[str, Any]:
		"""
		Get the ordering configuration.

		Returns:
		        Dict[str, Any]: Ordering configuration

		"""
		return dict(self.get("order", {}))

	def get_targets(self) -> dict[str, dict[str, Any]]:
		"""
		Get the named ordering targets.

		Returns:
		        Dict[str, Dict[str, Any]]: Targets by name, each with "src" and "dest"

		"""
		return dict(self.get("targets", {}))
