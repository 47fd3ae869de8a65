"""Runtime filter lookups."""

from __future__ import annotations

from .base import Expression, ExpressionKind, is_string_literal


class FilterExpression(Expression):
	"""A ``$filter('name')`` call, which depends on filter "name"."""

	default_kind = ExpressionKind.FILTER_CALL

	def is_valid(self) -> bool:
		"""Check for a single string argument."""
		arguments = self.arguments
		return len(arguments) == 1 and is_string_literal(arguments[0])

	def get_dependency(self) -> str:
		"""Get the name of the looked up filter."""
		self._ensure_valid()
		return self.arguments[0].value

	def get_dependencies(self) -> list[str]:
		"""Get the looked up filter as the only dependency."""
		return [self.get_dependency()]
