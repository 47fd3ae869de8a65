"""Base class and shared helpers of AngularJS expressions."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

from ngdp.analyzer.estree import (
	ArrayExpression,
	ArrowFunctionExpression,
	BlockStatement,
	CallExpression,
	FunctionExpression,
	Identifier,
	Literal,
	ObjectExpression,
	Property,
	ReturnStatement,
	SyntaxNode,
)
from ngdp.errors import ExpressionTypeError, InvalidExpressionError

if TYPE_CHECKING:
	from collections.abc import Iterator


class ExpressionKind(str, Enum):
	"""
	Kinds of AngularJS expressions.

	Each value is the JavaScript name the expression is recognized by.

	"""

	MODULE = "module"
	COMPONENT = "component"
	DIRECTIVE = "directive"
	CONTROLLER = "controller"
	FACTORY = "factory"
	SERVICE = "service"
	CONSTANT = "constant"
	DECORATOR = "decorator"
	FILTER = "filter"
	PROVIDER = "provider"
	VALUE = "value"
	CONFIG = "config"
	RUN = "run"
	ROUTE = "when"
	FILTER_CALL = "$filter"
	INJECT = "$inject"


# Kinds registered on an AngularJS module with module(...).xxx(name, ...)
ELEMENTS = frozenset(
	{
		ExpressionKind.MODULE,
		ExpressionKind.COMPONENT,
		ExpressionKind.DIRECTIVE,
		ExpressionKind.CONTROLLER,
		ExpressionKind.FACTORY,
		ExpressionKind.SERVICE,
		ExpressionKind.CONSTANT,
		ExpressionKind.DECORATOR,
		ExpressionKind.FILTER,
		ExpressionKind.PROVIDER,
		ExpressionKind.VALUE,
	}
)

ELEMENT_TAGS = frozenset(kind.value for kind in ELEMENTS)


def is_string_literal(node: SyntaxNode | None) -> bool:
	"""Tell if a node is a string literal."""
	return isinstance(node, Literal) and isinstance(node.value, str)


def string_elements(array: ArrayExpression) -> list[str]:
	"""
	Get the string literals of an array, in order.

	Elements which are not string literals (functions, identifiers, computed
	values) cannot be resolved statically and are skipped.

	Args:
	    array: The array expression

	Returns:
	    The string values, duplicates included

	"""
	return [element.value for element in array.elements if is_string_literal(element)]


def property_key_name(node: SyntaxNode) -> str | None:
	"""
	Get the static name of an object property.

	Args:
	    node: A member of ObjectExpression.properties

	Returns:
	    The identifier or string key of the property, None for spread elements
	    and computed keys

	"""
	if not isinstance(node, Property) or node.computed:
		return None
	if isinstance(node.key, Identifier):
		return node.key.name
	if is_string_literal(node.key):
		return node.key.value
	return None


def iter_properties(node: ObjectExpression) -> Iterator[tuple[str, Property]]:
	"""Yield (key name, property) pairs of the statically named properties of an object."""
	for member in node.properties:
		name = property_key_name(member)
		if name is not None and isinstance(member, Property):
			yield name, member


def controller_names(node: ObjectExpression) -> list[str]:
	"""Get the string values of the "controller" properties of a definition object."""
	return [
		member.value.value
		for name, member in iter_properties(node)
		if name == "controller" and is_string_literal(member.value)
	]


def returned_object(function: SyntaxNode) -> ObjectExpression | None:
	"""
	Find the object literal returned by a function.

	Only the top level statements of the function body are searched: the first
	return statement decides.

	Args:
	    function: A function or arrow function expression

	Returns:
	    The returned object literal, None if the function returns something else

	"""
	if isinstance(function, ArrowFunctionExpression) and isinstance(function.body, ObjectExpression):
		return function.body

	if not isinstance(function, FunctionExpression | ArrowFunctionExpression):
		return None
	if not isinstance(function.body, BlockStatement):
		return None

	for statement in function.body.body:
		if isinstance(statement, ReturnStatement):
			return statement.argument if isinstance(statement.argument, ObjectExpression) else None
	return None


class Expression:
	"""
	A JavaScript expression recognized as part of the AngularJS API.

	An expression wraps one syntax node without copying or modifying it.
	Validity and extracted data are computed from the node on each call.

	"""

	default_kind: ClassVar[ExpressionKind | None] = None

	def __init__(self, node: SyntaxNode, kind: ExpressionKind | None = None) -> None:
		"""
		Initialize the expression.

		Args:
		    node: The syntax node of the expression, usually a CallExpression
		    kind: The kind of the expression, defaults to the class default kind

		Raises:
		    ExpressionTypeError: If no kind is given and the class has no default

		"""
		resolved_kind = kind or self.default_kind
		if resolved_kind is None:
			msg = f"{type(self).__name__} requires an expression kind"
			raise ExpressionTypeError(msg)

		self._node = node
		self._kind = ExpressionKind(resolved_kind)

	def __repr__(self) -> str:
		"""Return a debug representation of the expression."""
		return f"{type(self).__name__}(kind={self._kind.value!r}, line={self._node.line})"

	@property
	def node(self) -> SyntaxNode:
		"""The wrapped syntax node."""
		return self._node

	@property
	def kind(self) -> ExpressionKind:
		"""The kind of the expression."""
		return self._kind

	@property
	def arguments(self) -> tuple[SyntaxNode, ...]:
		"""Arguments of the wrapped call, empty if the node is not a call."""
		if isinstance(self._node, CallExpression):
			return self._node.arguments
		return ()

	def is_valid(self) -> bool:
		"""
		Tell if the node has a shape this expression understands.

		Returns:
		    True if data can be extracted from the expression

		"""
		return True

	def get_definitions(self) -> list[str]:
		"""
		Get the names this expression defines.

		Returns:
		    The defined names

		"""
		self._ensure_valid()
		return []

	def get_dependencies(self) -> list[str]:
		"""
		Get the names this expression depends on.

		Returns:
		    The dependency names

		"""
		self._ensure_valid()
		return []

	def _ensure_valid(self) -> None:
		"""Raise InvalidExpressionError if the expression is not valid."""
		if not self.is_valid():
			msg = f"Invalid {self._kind.value} expression at line {self._node.line}"
			raise InvalidExpressionError(msg)
