"""Data models of the dependency analysis."""

from __future__ import annotations

from dataclasses import dataclass, field

from ngdp.analyzer.expressions import ExpressionKind


def join_unique(target: list[str], names: list[str] | tuple[str, ...]) -> None:
	"""Append the names missing from target, keeping their order."""
	for name in names:
		if name not in target:
			target.append(name)


@dataclass(frozen=True)
class DependencyEdge:
	"""A definition requiring another name to be loaded first."""

	from_definition: str
	to_dependency: str


@dataclass(frozen=True)
class Finding:
	"""What one valid AngularJS expression of a script defines and depends on."""

	kind: ExpressionKind
	line: int
	definitions: tuple[str, ...] = ()
	dependencies: tuple[str, ...] = ()


@dataclass
class ScriptAnalysis:
	"""Definitions and dependencies found in one script."""

	definitions: list[str] = field(default_factory=list)
	"""Names defined by the script, without repeats."""

	dependencies: list[str] = field(default_factory=list)
	"""Names the script depends on, without repeats."""

	module: str | None = None
	"""Name of the last module retrieved by the script."""

	findings: list[Finding] = field(default_factory=list)
	"""Every valid expression, in traversal order."""

	def add(self, finding: Finding) -> None:
		"""
		Merge the result of one expression.

		Args:
		    finding: The expression result

		"""
		self.findings.append(finding)
		join_unique(self.definitions, finding.definitions)
		join_unique(self.dependencies, finding.dependencies)

	@property
	def edges(self) -> list[DependencyEdge]:
		"""Dependency edges between the definitions and dependencies of each finding."""
		edges: list[DependencyEdge] = []
		for finding in self.findings:
			for definition in finding.definitions:
				for dependency in finding.dependencies:
					edge = DependencyEdge(definition, dependency)
					if dependency != definition and edge not in edges:
						edges.append(edge)
		return edges


@dataclass
class Script:
	"""An analysed script with its associated styles."""

	path: str
	analysis: ScriptAnalysis = field(default_factory=ScriptAnalysis)
	styles: list[str] = field(default_factory=list)

	@property
	def definitions(self) -> list[str]:
		"""Names defined by the script."""
		return self.analysis.definitions

	@property
	def dependencies(self) -> list[str]:
		"""Names the script depends on."""
		return self.analysis.dependencies


@dataclass
class Resources:
	"""Ordered styles and scripts, the content of a topology file."""

	css: list[str] = field(default_factory=list)
	js: list[str] = field(default_factory=list)

	def to_dict(self) -> dict[str, list[str]]:
		"""Convert to a JSON serializable dictionary."""
		return {"css": list(self.css), "js": list(self.js)}
