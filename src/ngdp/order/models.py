"""Models for the order command."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from ngdp.config import DEFAULT_CONFIG
from ngdp.errors import ConfigError

if TYPE_CHECKING:
	from collections.abc import Mapping

_ORDER_DEFAULTS = DEFAULT_CONFIG["order"]


@dataclass
class OrderConfig:
	"""Configuration for the order command."""

	base_path: str = _ORDER_DEFAULTS["base_path"]
	css_prefix: str = _ORDER_DEFAULTS["css_prefix"]
	js_prefix: str = _ORDER_DEFAULTS["js_prefix"]
	script_extensions: tuple[str, ...] = tuple(_ORDER_DEFAULTS["script_extensions"])
	style_extensions: tuple[str, ...] = tuple(_ORDER_DEFAULTS["style_extensions"])
	fail_on_syntax_error: bool = _ORDER_DEFAULTS["fail_on_syntax_error"]
	max_workers: int = _ORDER_DEFAULTS["max_workers"]

	def __post_init__(self) -> None:
		"""Normalize extension lists to lowercase tuples."""
		self.script_extensions = tuple(ext.lower() for ext in self.script_extensions)
		self.style_extensions = tuple(ext.lower() for ext in self.style_extensions)

	@classmethod
	def from_config(cls, config: Mapping[str, Any], **overrides: Any) -> OrderConfig:  # noqa: ANN401
		"""
		Create the configuration from the "order" section of the configuration.

		Args:
		    config: The "order" configuration section
		    **overrides: Values taking precedence over the section, None values
		        are ignored

		Returns:
		    The order configuration

		"""
		names = {config_field.name for config_field in fields(cls)}
		values = {name: value for name, value in config.items() if name in names}
		values.update({name: value for name, value in overrides.items() if value is not None})
		return cls(**values)


@dataclass(frozen=True)
class Target:
	"""A named set of source patterns ordered into one destination file."""

	name: str
	src: list[str] = field(default_factory=list)
	dest: str = ""

	@classmethod
	def from_config(cls, name: str, config: Mapping[str, Any]) -> Target:
		"""
		Create a target from its configuration.

		Args:
		    name: Name of the target
		    config: Mapping with "src" (pattern or list of patterns) and "dest"

		Returns:
		    The target

		Raises:
		    ConfigError: If "src" or "dest" is missing

		"""
		sources = config.get("src")
		destination = config.get("dest")
		if isinstance(sources, str):
			sources = [sources]
		if not sources or not destination:
			msg = f'Target "{name}" requires "src" and "dest"'
			raise ConfigError(msg)
		return cls(name=name, src=list(sources), dest=str(destination))
