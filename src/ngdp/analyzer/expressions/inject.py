"""Explicit ``$inject`` annotations."""

from __future__ import annotations

from ngdp.analyzer.estree import ArrayExpression, AssignmentExpression

from .base import Expression, ExpressionKind, string_elements


class InjectExpression(Expression):
	"""An assignment like ``Controller.$inject = ['$scope', 'Service']``."""

	default_kind = ExpressionKind.INJECT

	def is_valid(self) -> bool:
		"""Check for an array assigned to the annotation."""
		return isinstance(self.node, AssignmentExpression) and isinstance(self.node.right, ArrayExpression)

	def get_dependencies(self) -> list[str]:
		"""Get the annotated dependencies, in order."""
		self._ensure_valid()
		return string_elements(self.node.right)
