"""AngularJS configuration and run blocks."""

from __future__ import annotations

from ngdp.analyzer.estree import ArrayExpression

from .base import Expression, ExpressionKind, string_elements


class ConfigExpression(Expression):
	"""
	A ``module.config(...)`` or ``module.run(...)`` block.

	Blocks only consume injected dependencies, they define nothing.

	"""

	default_kind = ExpressionKind.CONFIG

	# Node types accepted as the block
	BLOCK_TYPES = frozenset({"ArrayExpression", "FunctionExpression", "Identifier"})

	def is_valid(self) -> bool:
		"""Check for a single array, function or identifier argument."""
		arguments = self.arguments
		return len(arguments) == 1 and arguments[0].type in self.BLOCK_TYPES

	def get_dependencies(self) -> list[str]:
		"""Get the dependencies injected with strict dependency injection, in order."""
		self._ensure_valid()
		block = self.arguments[0]
		if isinstance(block, ArrayExpression):
			return string_elements(block)
		return []
