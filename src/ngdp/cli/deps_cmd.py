"""Implementation of the deps command, listing what AngularJS scripts define and require."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
	from rich.table import Table

	from ngdp.analyzer import Script

logger = logging.getLogger(__name__)

SourcesArg = Annotated[
	list[str],
	typer.Argument(help="Files, directories or glob patterns of the scripts"),
]

EdgesFlag = Annotated[
	bool,
	typer.Option(
		"--edges",
		help="List the dependency edges of each script instead of its definitions",
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
	"""Register the deps command with the CLI app."""

	@app.command(name="deps")
	def deps_command(
		sources: SourcesArg,
		edges: EdgesFlag = False,
		config: ConfigOpt = None,
	) -> None:
		"""Show the module, definitions and dependencies of AngularJS scripts."""
		_deps_command_impl(sources=sources, edges=edges, config=config)


def _build_summary_table(scripts: list[Script]) -> Table:
	from rich.table import Table

	table = Table(title="AngularJS dependencies")
	table.add_column("Script", style="cyan")
	table.add_column("Module", style="magenta")
	table.add_column("Definitions", style="green")
	table.add_column("Dependencies", style="yellow")

	for script in scripts:
		table.add_row(
			script.path,
			script.analysis.module or "",
			"\n".join(script.definitions),
			"\n".join(script.dependencies),
		)
	return table


def _build_edges_table(scripts: list[Script]) -> Table:
	from rich.table import Table

	table = Table(title="AngularJS dependency edges")
	table.add_column("Script", style="cyan")
	table.add_column("Definition", style="green")
	table.add_column("Depends on", style="yellow")

	for script in scripts:
		for edge in script.analysis.edges:
			table.add_row(script.path, edge.from_definition, edge.to_dependency)
	return table


def _deps_command_impl(sources: list[str], edges: bool = False, config: Path | None = None) -> None:
	"""Implementation of the deps command with heavy imports deferred."""
	from ngdp.errors import ConfigError, OrderError, ScriptParseError
	from ngdp.order import OrderCommand, OrderConfig
	from ngdp.utils.cli_utils import console, exit_with_error, handle_keyboard_interrupt
	from ngdp.utils.config_loader import ConfigLoader

	try:
		config_loader = ConfigLoader(str(config) if config else None)
		command = OrderCommand(OrderConfig.from_config(config_loader.get_order_config()))
		scripts, _ = command.analyse(sources)

		if not scripts:
			console.print("[yellow]No scripts found.[/yellow]")
			return

		table = _build_edges_table(scripts) if edges else _build_summary_table(scripts)
		console.print(table)

	except ConfigError as e:
		exit_with_error(f"Configuration error: {e!s}", exception=e)
	except ScriptParseError as e:
		exit_with_error(f"Could not parse script: {e!s}", exception=e)
	except OrderError as e:
		exit_with_error(f"Analysis failed: {e!s}", exception=e)
	except KeyboardInterrupt:
		handle_keyboard_interrupt()
