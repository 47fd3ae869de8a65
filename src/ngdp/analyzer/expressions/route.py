"""AngularJS route definitions."""

from __future__ import annotations

from ngdp.analyzer.estree import ArrayExpression, ObjectExpression

from .base import Expression, ExpressionKind, is_string_literal, iter_properties, string_elements

# Number of arguments of $routeProvider.when(path, route)
ROUTE_ARGUMENTS = 2


class RouteExpression(Expression):
	"""
	A ``$routeProvider.when(path, route)`` call.

	The route depends on its controller and on everything its resolve
	functions inject. Each resolve key becomes a definition, injectable into
	the route controller.

	"""

	default_kind = ExpressionKind.ROUTE

	def is_valid(self) -> bool:
		"""Check for a string path followed by a route object."""
		arguments = self.arguments
		return (
			len(arguments) == ROUTE_ARGUMENTS
			and is_string_literal(arguments[0])
			and isinstance(arguments[1], ObjectExpression)
		)

	def get_dependencies(self) -> list[str]:
		"""
		Get the route dependencies without repeats.

		Returns:
		    In route property order, the controller name and the strings of
		    every resolve array

		"""
		self._ensure_valid()
		dependencies: list[str] = []

		def add(name: str) -> None:
			if name not in dependencies:
				dependencies.append(name)

		for name, member in iter_properties(self.arguments[1]):
			if name == "resolve" and isinstance(member.value, ObjectExpression):
				for _, resolve_member in iter_properties(member.value):
					if isinstance(resolve_member.value, ArrayExpression):
						for dependency in string_elements(resolve_member.value):
							add(dependency)
			elif name == "controller" and is_string_literal(member.value):
				add(member.value.value)

		return dependencies

	def get_definitions(self) -> list[str]:
		"""Get the keys of the resolve object, in order."""
		self._ensure_valid()
		definitions: list[str] = []
		for name, member in iter_properties(self.arguments[1]):
			if name == "resolve" and isinstance(member.value, ObjectExpression):
				definitions.extend(key for key, _ in iter_properties(member.value))
		return definitions
