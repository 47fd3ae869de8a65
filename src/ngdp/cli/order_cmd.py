"""
Implementation of the order command.

This module implements the 'order' command, which writes the load order of
the scripts and styles of an AngularJS application to a JSON topology file.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)

# Command line argument annotations
SourcesArg = Annotated[
	list[str] | None,
	typer.Argument(
		help="Files, directories or glob patterns of the scripts and styles. "
		"Without sources, every target of the configuration is run.",
		show_default=False,
	),
]

DestOpt = Annotated[
	Path | None,
	typer.Option(
		"--dest",
		"-d",
		help="Path of the JSON topology file to write",
	),
]

BasePathOpt = Annotated[
	str | None,
	typer.Option(
		"--base-path",
		help="Part of the source paths replaced by the prefixes (overrides config)",
	),
]

CssPrefixOpt = Annotated[
	str | None,
	typer.Option(
		"--css-prefix",
		help="Replacement of the base path in style paths (overrides config)",
	),
]

JsPrefixOpt = Annotated[
	str | None,
	typer.Option(
		"--js-prefix",
		help="Replacement of the base path in script paths (overrides config)",
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]


def register_command(app: typer.Typer) -> None:
	"""Register the order command with the CLI app."""

	@app.command(name="order")
	def order_command(
		sources: SourcesArg = None,
		dest: DestOpt = None,
		base_path: BasePathOpt = None,
		css_prefix: CssPrefixOpt = None,
		js_prefix: JsPrefixOpt = None,
		config: ConfigOpt = None,
	) -> None:
		"""
		Order the scripts and styles of an AngularJS application.

		Scripts are ordered so that each script comes after the scripts
		defining the modules, components and services it depends on. Styles
		follow the first script of their directory.

		Examples:
		        ngdp order "app/**/*.*" -d app/topology.json
		        ngdp order app -d topology.json --base-path app/ --js-prefix /js/
		        ngdp order                       # Run the targets of .ngdp.yml

		"""
		# Defer heavy imports and logic to the implementation function
		_order_command_impl(
			sources=sources or [],
			dest=dest,
			base_path=base_path,
			css_prefix=css_prefix,
			js_prefix=js_prefix,
			config=config,
		)


# --- Implementation Function (Heavy imports deferred here) ---


def _order_command_impl(
	sources: list[str],
	dest: Path | None = None,
	base_path: str | None = None,
	css_prefix: str | None = None,
	js_prefix: str | None = None,
	config: Path | None = None,
) -> None:
	"""Implementation of the order command with heavy imports deferred."""
	from ngdp.errors import ConfigError, OrderError, ScriptParseError
	from ngdp.order import OrderCommand, OrderConfig, Target, collect_sources
	from ngdp.utils.cli_utils import (
		console,
		exit_with_error,
		handle_keyboard_interrupt,
		progress_indicator,
		show_warning,
	)
	from ngdp.utils.config_loader import ConfigLoader

	try:
		config_loader = ConfigLoader(str(config) if config else None)
		order_config = OrderConfig.from_config(
			config_loader.get_order_config(),
			base_path=base_path,
			css_prefix=css_prefix,
			js_prefix=js_prefix,
		)

		if sources:
			if dest is None:
				exit_with_error("A destination file (--dest) is required when sources are given.")
			targets = [Target(name=str(dest), src=sources, dest=str(dest))]
		else:
			targets = [Target.from_config(name, target) for name, target in config_loader.get_targets().items()]
			if not targets:
				exit_with_error("No sources given and no targets configured.")

		command = OrderCommand(order_config)
		for target in targets:
			paths = collect_sources(target.src)
			total = sum(1 for path in paths if path.suffix.lower() in order_config.script_extensions)

			with progress_indicator(f"Ordering {target.name}", total=total, transient=True) as advance:
				resources = command.execute(paths, target.dest, on_progress=advance)

			if command.cycles:
				cycles = "\n".join(f"- {', '.join(cycle)}" for cycle in command.cycles)
				show_warning(f"Circular dependencies between scripts of {target.name}:\n{cycles}")
			if command.orphan_styles:
				orphans = "\n".join(f"- {style}" for style in command.orphan_styles)
				show_warning(f"Styles without a script in their directory, loaded last:\n{orphans}")

			console.print(
				f"[green]Ordered {len(resources.js)} scripts and {len(resources.css)} styles "
				f"into {target.dest}[/green]"
			)

	except ConfigError as e:
		exit_with_error(f"Configuration error: {e!s}", exception=e)
	except ScriptParseError as e:
		exit_with_error(f"Could not parse script: {e!s}", exception=e)
	except OrderError as e:
		exit_with_error(f"Ordering failed: {e!s}", exception=e)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
