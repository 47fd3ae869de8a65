"""Command implementation for ordering AngularJS scripts and styles."""

from __future__ import annotations

import glob
import json
import logging
import posixpath
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING

from ngdp.analyzer import DependencyGraph, Resources, Script, ScriptParser, find_dependencies
from ngdp.errors import OrderError

from .models import OrderConfig

if TYPE_CHECKING:
	from collections.abc import Callable, Sequence

	from .models import Target

logger = logging.getLogger(__name__)


def collect_sources(patterns: Sequence[str | Path]) -> list[Path]:
	"""
	Expand source patterns into files.

	A pattern may be a file, a directory (all files below it) or a glob
	pattern, where "**" matches any number of directories.

	Args:
	    patterns: Files, directories or glob patterns

	Returns:
	    The files, in pattern order then sorted, without repeats

	"""
	sources: list[Path] = []
	seen: set[Path] = set()

	for pattern in patterns:
		path = Path(pattern)
		if path.is_file():
			matches = [path]
		elif path.is_dir():
			matches = sorted(child for child in path.rglob("*") if child.is_file())
		else:
			matches = sorted(Path(match) for match in glob.glob(str(pattern), recursive=True))
			matches = [match for match in matches if match.is_file()]

		if not matches:
			logger.warning("No source files match %s", pattern)

		for match in matches:
			if match not in seen:
				seen.add(match)
				sources.append(match)

	return sources


def analyse_script(path: Path, parser: ScriptParser) -> Script:
	"""
	Parse a script and find its definitions and dependencies.

	Args:
	    path: Path of the script
	    parser: The parser to use

	Returns:
	    The analysed script, without styles

	Raises:
	    OrderError: If the script cannot be read
	    ScriptParseError: If the script has syntax errors and the parser is strict

	"""
	try:
		program = parser.parse_file(path)
	except OSError as e:
		msg = f"Could not read {path}: {e}"
		logger.exception("Error reading script")
		raise OrderError(msg) from e

	script = Script(path=path.as_posix(), analysis=find_dependencies(program))
	logger.debug(
		"Analysed %s: defines %s, depends on %s",
		script.path,
		script.definitions,
		script.dependencies,
	)
	return script


def associate_styles(scripts: Sequence[Script], styles: Sequence[str]) -> list[str]:
	"""
	Attach each style to the first script of its directory.

	Args:
	    scripts: The scripts, in input order
	    styles: Style paths, in input order

	Returns:
	    The styles without a script in their directory

	"""
	orphans: list[str] = []
	for style in styles:
		directory = posixpath.dirname(style)
		owner = next((script for script in scripts if posixpath.dirname(script.path) == directory), None)
		if owner is None:
			orphans.append(style)
		elif style not in owner.styles:
			owner.styles.append(style)

	if orphans:
		logger.warning("Styles without a script in their directory: %s", ", ".join(orphans))
	return orphans


def rewrite_path(path: str, base_path: str, prefix: str) -> str:
	"""
	Replace the first occurrence of the base path by a prefix.

	Args:
	    path: The path to rewrite
	    base_path: The part of the path to replace, an empty base path puts
	        the prefix in front of the path
	    prefix: The replacement

	Returns:
	    The rewritten path

	"""
	return path.replace(base_path, prefix, 1)


def write_resources(resources: Resources, destination: Path) -> None:
	"""
	Write ordered resources as a JSON topology file.

	Args:
	    resources: The ordered resources
	    destination: Path of the file, parent directories are created

	Raises:
	    OrderError: If the file cannot be written

	"""
	try:
		destination.parent.mkdir(parents=True, exist_ok=True)
		with destination.open("w", encoding="utf-8") as f:
			json.dump(resources.to_dict(), f, indent=2)
			f.write("\n")
	except OSError as e:
		msg = f"Could not write {destination}: {e}"
		logger.exception("Error writing topology file")
		raise OrderError(msg) from e


class OrderCommand:
	"""Main implementation of the order command."""

	def __init__(self, config: OrderConfig | None = None) -> None:
		"""
		Initialize the order command.

		Args:
		    config: Order configuration, defaults are used if not set

		"""
		self.config = config or OrderConfig()
		self.parser = ScriptParser(fail_on_syntax_error=self.config.fail_on_syntax_error)
		# Findings of the last order() call, for reporting
		self.cycles: list[list[str]] = []
		self.orphan_styles: list[str] = []

	def analyse(
		self,
		sources: Sequence[str | Path],
		on_progress: Callable[[int], None] | None = None,
	) -> tuple[list[Script], list[str]]:
		"""
		Analyse the scripts of the sources and associate styles with them.

		Args:
		    sources: Files, directories or glob patterns
		    on_progress: Called with 1 after each analysed script

		Returns:
		    The analysed scripts in input order, and the styles without a script

		"""
		paths = collect_sources(sources)
		script_paths = [path for path in paths if path.suffix.lower() in self.config.script_extensions]
		styles = [path.as_posix() for path in paths if path.suffix.lower() in self.config.style_extensions]
		logger.info("Found %d scripts and %d styles", len(script_paths), len(styles))

		analyse = partial(analyse_script, parser=self.parser)
		scripts: list[Script] = []
		with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
			# map keeps input order whatever the completion order
			for script in executor.map(analyse, script_paths):
				scripts.append(script)
				if on_progress is not None:
					on_progress(1)

		orphans = associate_styles(scripts, styles)
		return scripts, orphans

	def order(
		self,
		sources: Sequence[str | Path],
		on_progress: Callable[[int], None] | None = None,
	) -> Resources:
		"""
		Order the scripts and styles of the sources.

		The cycles between scripts and the styles without a script are kept in
		the cycles and orphan_styles attributes.

		Args:
		    sources: Files, directories or glob patterns
		    on_progress: Called with 1 after each analysed script

		Returns:
		    Ordered styles and scripts with rewritten paths

		"""
		scripts, orphans = self.analyse(sources, on_progress)
		graph = DependencyGraph(scripts)
		self.cycles = graph.cycles()
		self.orphan_styles = orphans
		resources = graph.get_resources(orphans)

		base_path = self.config.base_path
		return Resources(
			css=[rewrite_path(style, base_path, self.config.css_prefix) for style in resources.css],
			js=[rewrite_path(script, base_path, self.config.js_prefix) for script in resources.js],
		)

	def execute(
		self,
		sources: Sequence[str | Path],
		destination: Path | str,
		on_progress: Callable[[int], None] | None = None,
	) -> Resources:
		"""
		Execute the order command.

		Args:
		    sources: Files, directories or glob patterns
		    destination: Path of the topology file to write
		    on_progress: Called with 1 after each analysed script

		Returns:
		    The written resources

		Raises:
		    OrderError: If a source cannot be read or the destination written
		    ScriptParseError: If a script has syntax errors and
		        fail_on_syntax_error is set

		"""
		resources = self.order(sources, on_progress)
		destination = Path(destination)
		write_resources(resources, destination)
		logger.info("Ordered styles and scripts have been saved in %s", destination)
		return resources

	def run_targets(self, targets: Sequence[Target]) -> dict[str, Resources]:
		"""
		Execute the command for each target, one after the other.

		Args:
		    targets: The targets to run

		Returns:
		    The written resources by target name

		"""
		results: dict[str, Resources] = {}
		for target in targets:
			logger.info("Running target %s", target.name)
			results[target.name] = self.execute(target.src, target.dest)
		return results
