"""Dependency graph and load order of AngularJS scripts."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import networkx as nx

from ngdp.analyzer.models import Resources, Script, join_unique

if TYPE_CHECKING:
	from collections.abc import Sequence

logger = logging.getLogger(__name__)


class DependencyGraph:
	"""
	Builds the dependency relationships between scripts and orders them.

	Each script is a node. For every dependency of a script, an edge goes from
	the script defining the name to the dependent script. Names nobody defines
	(AngularJS services, third party modules) are ignored.

	"""

	def __init__(self, scripts: Sequence[Script]) -> None:
		"""
		Initialize the dependency graph.

		Args:
		    scripts: The analysed scripts, in input order. Input order breaks
		        ties between scripts which could be loaded in any order.
		"""
		self.scripts = list(scripts)
		self.graph = nx.DiGraph()
		self._by_path = {script.path: script for script in self.scripts}
		self._positions = {script.path: position for position, script in enumerate(self.scripts)}
		self._definers: dict[str, str] = {}
		self.build_graph()

	def build_graph(self) -> None:
		"""Build the graph from the script definitions and dependencies."""
		# Add all scripts as nodes first
		for script in self.scripts:
			self.graph.add_node(script.path)

		# The first script defining a name provides it
		for script in self.scripts:
			for definition in script.definitions:
				self._definers.setdefault(definition, script.path)

		for script in self.scripts:
			for dependency in script.dependencies:
				# Satisfied within the script itself
				if dependency in script.definitions:
					continue

				definer = self._definers.get(dependency)
				if definer is None or definer == script.path:
					continue

				if self.graph.has_edge(definer, script.path):
					self.graph.edges[definer, script.path]["names"].append(dependency)
				else:
					self.graph.add_edge(definer, script.path, names=[dependency])

		logger.debug(
			"Built dependency graph with %d scripts and %d edges",
			self.graph.number_of_nodes(),
			self.graph.number_of_edges(),
		)

	def find_definer(self, name: str) -> Script | None:
		"""
		Get the script providing a name.

		Args:
		    name: A definition name

		Returns:
		    The first script defining the name, None if no script defines it

		"""
		path = self._definers.get(name)
		return self._by_path[path] if path is not None else None

	def cycles(self) -> list[list[str]]:
		"""
		Find groups of scripts depending on each other.

		Returns:
		    The paths of each group of mutually dependent scripts, in input order

		"""
		return [
			sorted(component, key=self._positions.__getitem__)
			for component in nx.strongly_connected_components(self.graph)
			if len(component) > 1
		]

	def order(self) -> list[Script]:
		"""
		Order the scripts so that every script comes after its dependencies.

		Scripts are grouped in generations: a script belongs to the generation
		equal to the length of its longest dependency chain. Mutually dependent
		scripts are treated as one node of the graph and keep their input order,
		as do scripts of the same generation.

		Returns:
		    The ordered scripts

		"""
		for cycle in self.cycles():
			logger.warning("Circular dependencies between scripts: %s", ", ".join(cycle))

		condensed = nx.condensation(self.graph)
		ordered: list[Script] = []

		for generation in nx.topological_generations(condensed):
			paths = [path for component in generation for path in condensed.nodes[component]["members"]]
			paths.sort(key=self._positions.__getitem__)
			ordered.extend(self._by_path[path] for path in paths)

		return ordered

	def get_resources(self, orphan_styles: Sequence[str] = ()) -> Resources:
		"""
		Get ordered scripts and styles.

		Args:
		    orphan_styles: Styles which do not belong to any script, appended
		        after the styles of the scripts

		Returns:
		    Script paths in load order, and styles in the order of their scripts

		"""
		resources = Resources()
		for script in self.order():
			join_unique(resources.js, [script.path])
			join_unique(resources.css, script.styles)
		join_unique(resources.css, list(orphan_styles))
		return resources
