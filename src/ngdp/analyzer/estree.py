"""
ESTree-shaped syntax nodes for JavaScript sources.

The AngularJS expressions read a small, fixed part of the syntax tree
(callees, arguments, literals, arrays and object properties). This module
turns tree-sitter concrete syntax trees into immutable nodes laid out the way
ESTree parsers (esprima, acorn) lay them out, so that the expressions can use
the familiar ``callee.property.name`` / ``arguments[0].value`` accessors.

Only the node types the analyzer inspects get a dedicated class. Every other
construct becomes an ``OpaqueNode`` which keeps its children so that the tree
can still be walked.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Iterator

	from tree_sitter import Node

logger = logging.getLogger(__name__)

LiteralValue = str | int | float | bool | None

# Single character escape sequences of JavaScript string literals
_SIMPLE_ESCAPES = {
	"n": "\n",
	"t": "\t",
	"r": "\r",
	"b": "\b",
	"f": "\f",
	"v": "\v",
	"0": "\0",
}

# tree-sitter node types of function expressions across grammar versions
_FUNCTION_TYPES = {"function_expression", "function", "generator_function"}


@dataclass(frozen=True, kw_only=True)
class SyntaxNode:
	"""Base class of all syntax nodes."""

	line: int = 0

	@property
	def type(self) -> str:
		"""The ESTree type of the node."""
		return type(self).__name__

	def children(self) -> Iterator[SyntaxNode]:
		"""Yield direct child nodes in source order."""
		for node_field in fields(self):
			value = getattr(self, node_field.name)
			if isinstance(value, SyntaxNode):
				yield value
			elif isinstance(value, tuple):
				for item in value:
					if isinstance(item, SyntaxNode):
						yield item


@dataclass(frozen=True, kw_only=True)
class Literal(SyntaxNode):
	"""A string, number, boolean, null or regular expression literal."""

	value: LiteralValue
	raw: str
	regex: str | None = None


@dataclass(frozen=True, kw_only=True)
class Identifier(SyntaxNode):
	name: str


@dataclass(frozen=True, kw_only=True)
class ArrayExpression(SyntaxNode):
	elements: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class Property(SyntaxNode):
	"""A key / value pair of an object literal."""

	key: SyntaxNode
	value: SyntaxNode
	computed: bool = False
	shorthand: bool = False
	method: bool = False


@dataclass(frozen=True, kw_only=True)
class ObjectExpression(SyntaxNode):
	# Property nodes, or OpaqueNode for spread elements
	properties: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class BlockStatement(SyntaxNode):
	body: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class FunctionExpression(SyntaxNode):
	id: Identifier | None = None
	params: tuple[SyntaxNode, ...] = ()
	body: BlockStatement


@dataclass(frozen=True, kw_only=True)
class ArrowFunctionExpression(SyntaxNode):
	params: tuple[SyntaxNode, ...] = ()
	body: SyntaxNode


@dataclass(frozen=True, kw_only=True)
class CallExpression(SyntaxNode):
	callee: SyntaxNode
	arguments: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class MemberExpression(SyntaxNode):
	object: SyntaxNode
	property: SyntaxNode
	computed: bool = False


@dataclass(frozen=True, kw_only=True)
class AssignmentExpression(SyntaxNode):
	operator: str
	left: SyntaxNode
	right: SyntaxNode


@dataclass(frozen=True, kw_only=True)
class ExpressionStatement(SyntaxNode):
	expression: SyntaxNode


@dataclass(frozen=True, kw_only=True)
class ReturnStatement(SyntaxNode):
	argument: SyntaxNode | None = None


@dataclass(frozen=True, kw_only=True)
class Program(SyntaxNode):
	body: tuple[SyntaxNode, ...] = ()


@dataclass(frozen=True, kw_only=True)
class OpaqueNode(SyntaxNode):
	"""Any construct the analyzer does not inspect, typed by its tree-sitter name."""

	kind: str
	nodes: tuple[SyntaxNode, ...] = ()

	@property
	def type(self) -> str:
		"""The tree-sitter type of the node."""
		return self.kind


def walk(root: SyntaxNode) -> Iterator[SyntaxNode]:
	"""
	Traverse a syntax tree in pre-order.

	Args:
	    root: The node to start from

	Yields:
	    The root node then all of its descendants, parents before children and
	    siblings in source order

	"""
	stack = [root]
	while stack:
		current = stack.pop()
		yield current
		stack.extend(reversed(tuple(current.children())))


def _decode_escape(sequence: str) -> str:
	"""Decode one JavaScript escape sequence (including its backslash)."""
	body = sequence[1:]
	if body in _SIMPLE_ESCAPES:
		return _SIMPLE_ESCAPES[body]

	try:
		if body.startswith("u{"):
			return chr(int(body[2:-1], 16))
		if body.startswith(("x", "u")):
			return chr(int(body[1:], 16))
	except ValueError:
		return body

	# Line continuation
	if body and body[0] in "\r\n\u2028\u2029":
		return ""

	return body


def _number_value(text: str) -> int | float | str:
	"""Convert the text of a JavaScript number literal."""
	cleaned = text.replace("_", "")
	if cleaned.endswith("n"):
		cleaned = cleaned[:-1]
	try:
		return int(cleaned, 0)
	except ValueError:
		pass
	try:
		return float(cleaned)
	except ValueError:
		return text


class EstreeBuilder:
	"""Converts tree-sitter JavaScript nodes to ESTree-shaped nodes."""

	def __init__(self, source: bytes) -> None:
		"""
		Initialize the builder.

		Args:
		    source: The bytes the tree-sitter tree was parsed from

		"""
		self.source = source
		# Converted nodes by tree-sitter node id, None for comments
		self._converted: dict[int, SyntaxNode | None] = {}

	def build(self, node: Node) -> SyntaxNode:
		"""
		Convert a tree-sitter node and all its descendants.

		Nodes are converted bottom-up from an explicit stack, children before
		their parent, so that deeply nested sources such as long string
		concatenations do not exhaust the Python call stack.

		Args:
		    node: The tree-sitter node, usually the root of a tree

		Returns:
		    The converted node

		"""
		self._converted = {}
		stack: list[tuple[Node, bool]] = [(node, False)]
		while stack:
			current, children_done = stack.pop()
			if children_done:
				self._converted[current.id] = self._convert_node(current)
			else:
				stack.append((current, True))
				stack.extend((child, False) for child in current.named_children)

		converted = self._converted[node.id]
		self._converted = {}
		if converted is None:
			# A lone comment
			return OpaqueNode(kind=node.type, line=self._line(node))
		return converted

	def _text(self, node: Node) -> str:
		return self.source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

	@staticmethod
	def _line(node: Node) -> int:
		return node.start_point[0] + 1

	@staticmethod
	def _significant_children(node: Node) -> list[Node]:
		return [child for child in node.named_children if child.type != "comment"]

	def _convert_all(self, nodes: list[Node]) -> tuple[SyntaxNode, ...]:
		converted = (self._convert(child) for child in nodes)
		return tuple(child for child in converted if child is not None)

	def _convert(self, node: Node) -> SyntaxNode | None:
		"""Get the conversion of a descendant of the node being converted."""
		if node.id in self._converted:
			return self._converted[node.id]
		# Anonymous field nodes are not pushed by build()
		return self._convert_node(node)

	def _convert_node(self, node: Node) -> SyntaxNode | None:
		node_type = node.type
		line = self._line(node)

		if node_type == "comment":
			return None

		if node_type == "program":
			return Program(body=self._convert_all(self._significant_children(node)), line=line)

		if node_type == "expression_statement":
			children = self._significant_children(node)
			if len(children) == 1:
				expression = self._convert(children[0])
				if expression is not None:
					return ExpressionStatement(expression=expression, line=line)

		if node_type == "statement_block":
			return BlockStatement(body=self._convert_all(self._significant_children(node)), line=line)

		if node_type == "return_statement":
			children = self._significant_children(node)
			argument = self._convert(children[0]) if children else None
			return ReturnStatement(argument=argument, line=line)

		if node_type == "parenthesized_expression":
			children = self._significant_children(node)
			if len(children) == 1:
				return self._convert(children[0])

		if node_type in {"identifier", "shorthand_property_identifier", "property_identifier", "undefined"}:
			return Identifier(name=self._text(node), line=line)

		if node_type == "string":
			return self._convert_string(node)

		if node_type == "number":
			text = self._text(node)
			return Literal(value=_number_value(text), raw=text, line=line)

		if node_type in {"true", "false"}:
			return Literal(value=node_type == "true", raw=node_type, line=line)

		if node_type == "null":
			return Literal(value=None, raw="null", line=line)

		if node_type == "regex":
			text = self._text(node)
			return Literal(value=None, raw=text, regex=text, line=line)

		if node_type == "array":
			return ArrayExpression(elements=self._convert_all(self._significant_children(node)), line=line)

		if node_type == "object":
			return self._convert_object(node)

		if node_type in _FUNCTION_TYPES:
			return self._convert_function(node)

		if node_type == "arrow_function":
			return self._convert_arrow_function(node)

		if node_type == "call_expression":
			return self._convert_call(node)

		if node_type == "member_expression":
			return self._convert_member(node)

		if node_type == "subscript_expression":
			index = node.child_by_field_name("index")
			target = node.child_by_field_name("object")
			if index is not None and target is not None:
				target_node = self._convert(target)
				index_node = self._convert(index)
				if target_node is not None and index_node is not None:
					return MemberExpression(object=target_node, property=index_node, computed=True, line=line)

		if node_type in {"assignment_expression", "augmented_assignment_expression"}:
			return self._convert_assignment(node)

		return OpaqueNode(kind=node_type, nodes=self._convert_all(self._significant_children(node)), line=line)

	def _convert_string(self, node: Node) -> Literal:
		text = self._text(node)
		if node.named_child_count == 0:
			value = text[1:-1]
		else:
			parts = []
			for child in node.named_children:
				if child.type == "escape_sequence":
					parts.append(_decode_escape(self._text(child)))
				elif child.type != "comment":
					parts.append(self._text(child))
			value = "".join(parts)
		return Literal(value=value, raw=text, line=self._line(node))

	def _convert_key(self, node: Node) -> tuple[SyntaxNode | None, bool]:
		"""Convert an object key, telling whether it is computed."""
		if node.type == "computed_property_name":
			children = self._significant_children(node)
			return (self._convert(children[0]) if children else None), True
		if node.type == "private_property_identifier":
			return Identifier(name=self._text(node), line=self._line(node)), False
		return self._convert(node), False

	def _convert_object(self, node: Node) -> ObjectExpression:
		properties: list[SyntaxNode] = []

		for child in self._significant_children(node):
			line = self._line(child)

			if child.type == "pair":
				key_node = child.child_by_field_name("key")
				value_node = child.child_by_field_name("value")
				if key_node is None or value_node is None:
					continue
				key, computed = self._convert_key(key_node)
				value = self._convert(value_node)
				if key is not None and value is not None:
					properties.append(Property(key=key, value=value, computed=computed, line=line))

			elif child.type == "shorthand_property_identifier":
				identifier = Identifier(name=self._text(child), line=line)
				properties.append(Property(key=identifier, value=identifier, shorthand=True, line=line))

			elif child.type == "method_definition":
				name_node = child.child_by_field_name("name")
				if name_node is None:
					continue
				key, computed = self._convert_key(name_node)
				if key is not None:
					method = self._convert_function(child)
					properties.append(Property(key=key, value=method, computed=computed, method=True, line=line))

			else:
				converted = self._convert(child)
				if converted is not None:
					properties.append(converted)

		return ObjectExpression(properties=tuple(properties), line=self._line(node))

	def _convert_params(self, node: Node | None) -> tuple[SyntaxNode, ...]:
		if node is None:
			return ()
		if node.type == "formal_parameters":
			return self._convert_all(self._significant_children(node))
		converted = self._convert(node)
		return (converted,) if converted is not None else ()

	def _convert_body(self, node: Node | None, line: int) -> BlockStatement:
		if node is None:
			return BlockStatement(line=line)
		body = self._convert(node)
		if isinstance(body, BlockStatement):
			return body
		return BlockStatement(body=(body,) if body is not None else (), line=line)

	def _convert_function(self, node: Node) -> FunctionExpression:
		line = self._line(node)
		name_node = node.child_by_field_name("name")
		name = None
		if name_node is not None and node.type != "method_definition":
			name = Identifier(name=self._text(name_node), line=self._line(name_node))
		return FunctionExpression(
			id=name,
			params=self._convert_params(node.child_by_field_name("parameters")),
			body=self._convert_body(node.child_by_field_name("body"), line),
			line=line,
		)

	def _convert_arrow_function(self, node: Node) -> ArrowFunctionExpression:
		line = self._line(node)
		parameters = node.child_by_field_name("parameters") or node.child_by_field_name("parameter")
		body_node = node.child_by_field_name("body")
		body = self._convert(body_node) if body_node is not None else None
		return ArrowFunctionExpression(
			params=self._convert_params(parameters),
			body=body if body is not None else BlockStatement(line=line),
			line=line,
		)

	def _convert_call(self, node: Node) -> SyntaxNode:
		line = self._line(node)
		function_node = node.child_by_field_name("function")
		arguments_node = node.child_by_field_name("arguments")
		callee = self._convert(function_node) if function_node is not None else None

		if callee is None or arguments_node is None or arguments_node.type != "arguments":
			# Tagged templates and malformed calls
			return OpaqueNode(kind=node.type, nodes=self._convert_all(self._significant_children(node)), line=line)

		return CallExpression(
			callee=callee,
			arguments=self._convert_all(self._significant_children(arguments_node)),
			line=line,
		)

	def _convert_member(self, node: Node) -> SyntaxNode:
		line = self._line(node)
		object_node = node.child_by_field_name("object")
		property_node = node.child_by_field_name("property")
		target = self._convert(object_node) if object_node is not None else None

		if target is None or property_node is None:
			return OpaqueNode(kind=node.type, nodes=self._convert_all(self._significant_children(node)), line=line)

		member = Identifier(name=self._text(property_node), line=self._line(property_node))
		return MemberExpression(object=target, property=member, line=line)

	def _convert_assignment(self, node: Node) -> SyntaxNode:
		line = self._line(node)
		left_node = node.child_by_field_name("left")
		right_node = node.child_by_field_name("right")
		left = self._convert(left_node) if left_node is not None else None
		right = self._convert(right_node) if right_node is not None else None

		if left is None or right is None:
			return OpaqueNode(kind=node.type, nodes=self._convert_all(self._significant_children(node)), line=line)

		operator_node = node.child_by_field_name("operator")
		operator = self._text(operator_node) if operator_node is not None else "="
		return AssignmentExpression(operator=operator, left=left, right=right, line=line)
