"""Creation of expressions from syntax nodes."""

from __future__ import annotations

from ngdp.analyzer.estree import AssignmentExpression, CallExpression, Identifier, MemberExpression, SyntaxNode
from ngdp.errors import ExpressionTypeError

from .base import ELEMENT_TAGS, ELEMENTS, Expression, ExpressionKind
from .config import ConfigExpression
from .element import (
	ComponentExpression,
	ConstantExpression,
	DirectiveExpression,
	ElementExpression,
	ModuleExpression,
	ValueExpression,
)
from .filter import FilterExpression
from .inject import InjectExpression
from .route import RouteExpression

# Element kinds with their own validation or extraction rules, the other
# element kinds use ElementExpression as is
SPECIALIZED_ELEMENTS: dict[ExpressionKind, type[ElementExpression]] = {
	ExpressionKind.COMPONENT: ComponentExpression,
	ExpressionKind.MODULE: ModuleExpression,
	ExpressionKind.DIRECTIVE: DirectiveExpression,
	ExpressionKind.VALUE: ValueExpression,
	ExpressionKind.CONSTANT: ConstantExpression,
}

BLOCK_TAGS = frozenset({ExpressionKind.CONFIG.value, ExpressionKind.RUN.value})


def get_element_expression(kind_tag: str | ExpressionKind, node: SyntaxNode | None) -> ElementExpression:
	"""
	Create the expression of an AngularJS element.

	Args:
	    kind_tag: The element kind, e.g. "controller"
	    node: The call expression registering the element

	Returns:
	    The specialized expression of the kind, or a generic ElementExpression
	    for kinds without specific rules

	Raises:
	    ExpressionTypeError: If the kind is empty or unknown, or the node is missing

	"""
	if not kind_tag or node is None:
		msg = "Invalid expression definition"
		raise ExpressionTypeError(msg)

	try:
		kind = ExpressionKind(kind_tag)
	except ValueError:
		kind = None

	if kind not in ELEMENTS:
		msg = f'Unknown definition expression type "{kind_tag}"'
		raise ExpressionTypeError(msg)

	expression_class = SPECIALIZED_ELEMENTS.get(kind, ElementExpression)
	return expression_class(node, kind)


def create_expression(node: SyntaxNode) -> Expression | None:
	"""
	Recognize the AngularJS expression of a syntax node.

	Recognized shapes:
	    - ``<any>.<element>(...)`` with an element kind (module, controller...)
	    - ``<any>.config(...)`` and ``<any>.run(...)``
	    - ``<any>.when(...)`` route definitions
	    - ``$filter(...)`` filter lookups
	    - ``<any>.$inject = ...`` annotations

	Recognized expressions may still be invalid, check is_valid() before
	extracting data.

	Args:
	    node: Any syntax node

	Returns:
	    The expression, None if the node is not an AngularJS expression

	"""
	if isinstance(node, CallExpression):
		callee = node.callee

		if isinstance(callee, MemberExpression) and not callee.computed and isinstance(callee.property, Identifier):
			name = callee.property.name
			if name in ELEMENT_TAGS:
				return get_element_expression(name, node)
			if name in BLOCK_TAGS:
				return ConfigExpression(node, ExpressionKind(name))
			if name == ExpressionKind.ROUTE.value:
				return RouteExpression(node)

		if isinstance(callee, Identifier) and callee.name == ExpressionKind.FILTER_CALL.value:
			return FilterExpression(node)

	elif isinstance(node, AssignmentExpression):
		target = node.left
		if (
			isinstance(target, MemberExpression)
			and not target.computed
			and isinstance(target.property, Identifier)
			and target.property.name == ExpressionKind.INJECT.value
		):
			return InjectExpression(node)

	return None
