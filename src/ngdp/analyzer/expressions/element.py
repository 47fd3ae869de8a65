"""
AngularJS element expressions.

Elements are registered on a module with ``module(...).xxx(name, definition)``.
The definition accepts three calling conventions:

- a plain function, ``controller('Ctrl', function($scope) {})``
- a strict dependency injection array,
  ``controller('Ctrl', ['$scope', function($scope) {}])``
- an identifier bound elsewhere, ``controller('Ctrl', Ctrl)``

Only the array form exposes dependency names without executing code.

"""

from __future__ import annotations

from ngdp.analyzer.estree import (
	ArrayExpression,
	ArrowFunctionExpression,
	FunctionExpression,
	Identifier,
	MemberExpression,
	ObjectExpression,
)
from ngdp.errors import InvalidExpressionError

from .base import (
	Expression,
	ExpressionKind,
	controller_names,
	is_string_literal,
	returned_object,
	string_elements,
)

# Number of arguments of module(...).xxx(name, definition)
ELEMENT_ARGUMENTS = 2


class ElementExpression(Expression):
	"""An element definition: component, controller, factory, service and others."""

	# Node types accepted as the definition of an element
	DEFINITION_TYPES = frozenset({"Identifier", "ArrayExpression", "FunctionExpression"})

	def get_element_type(self) -> str:
		"""
		Get the element type as written in the source.

		Returns:
		    The property name of the callee, e.g. "controller"

		Raises:
		    InvalidExpressionError: If the callee is not a member expression

		"""
		callee = getattr(self.node, "callee", None)
		if isinstance(callee, MemberExpression) and isinstance(callee.property, Identifier):
			return callee.property.name
		msg = f"Expression at line {self.node.line} is not a method call"
		raise InvalidExpressionError(msg)

	def get_name(self) -> str:
		"""
		Get the name of the element.

		Returns:
		    The value of the first argument

		Raises:
		    InvalidExpressionError: If the expression is not valid

		"""
		self._ensure_valid()
		return self.arguments[0].value

	def is_valid(self) -> bool:
		"""Check for a string name followed by an identifier, array or function."""
		arguments = self.arguments
		return (
			len(arguments) == ELEMENT_ARGUMENTS
			and is_string_literal(arguments[0])
			and arguments[1].type in self.DEFINITION_TYPES
		)

	def is_definition(self) -> bool:
		"""Tell if the expression defines a new element."""
		return True

	def get_definitions(self) -> list[str]:
		"""Get the element name if the expression is a definition."""
		return [self.get_name()] if self.is_definition() else []

	def get_dependencies(self) -> list[str]:
		"""
		Get the dependencies injected with strict dependency injection.

		Returns:
		    The string elements of the definition array, in order with
		    duplicates, empty for functions and identifiers

		"""
		self._ensure_valid()
		definition = self.arguments[1]
		if isinstance(definition, ArrayExpression):
			return string_elements(definition)
		return []


class ModuleExpression(ElementExpression):
	"""
	An AngularJS module definition or retrieval.

	``module('app', ['dep'])`` defines module "app" while ``module('app')``
	retrieves it, which makes the retrieving code depend on "app".

	"""

	default_kind = ExpressionKind.MODULE

	def is_valid(self) -> bool:
		"""Check for module(name) or module(name, [dependencies])."""
		arguments = self.arguments
		if not arguments or not is_string_literal(arguments[0]):
			return False
		if len(arguments) == 1:
			return True
		return len(arguments) == ELEMENT_ARGUMENTS and isinstance(arguments[1], ArrayExpression)

	def is_definition(self) -> bool:
		"""Tell if the module is defined (two arguments) rather than retrieved."""
		arguments = self.arguments
		return len(arguments) == ELEMENT_ARGUMENTS and isinstance(arguments[1], ArrayExpression)

	def get_dependencies(self) -> list[str]:
		"""
		Get the module dependencies.

		Returns:
		    The required modules of a definition, or the name of the retrieved
		    module for a retrieval

		"""
		self._ensure_valid()
		if self.is_definition():
			return string_elements(self.arguments[1])
		return [self.get_name()]


class ComponentExpression(ElementExpression):
	"""A component defined with a definition object."""

	default_kind = ExpressionKind.COMPONENT

	def is_valid(self) -> bool:
		"""Check for a string name followed by an object literal."""
		arguments = self.arguments
		return (
			len(arguments) == ELEMENT_ARGUMENTS
			and is_string_literal(arguments[0])
			and isinstance(arguments[1], ObjectExpression)
		)

	def get_dependencies(self) -> list[str]:
		"""Get the named controller of the component definition, if any."""
		self._ensure_valid()
		return controller_names(self.arguments[1])


class DirectiveExpression(ElementExpression):
	"""
	A directive registration.

	Besides injected dependencies, a directive depends on the controller named
	in the definition object its factory returns.

	"""

	default_kind = ExpressionKind.DIRECTIVE

	def get_dependencies(self) -> list[str]:
		"""
		Get injected dependencies then the controller of the directive definition.

		The controller is added unless it is already injected.

		"""
		dependencies = super().get_dependencies()
		factory = self.arguments[1]

		if isinstance(factory, ArrayExpression) and factory.elements:
			factory = factory.elements[-1]

		if isinstance(factory, FunctionExpression | ArrowFunctionExpression):
			definition = returned_object(factory)
			if definition is not None:
				dependencies.extend(name for name in controller_names(definition) if name not in dependencies)

		return dependencies


class ValueExpression(ElementExpression):
	"""A value registration: any payload, never dependency injected."""

	default_kind = ExpressionKind.VALUE

	def is_valid(self) -> bool:
		"""Check for a string name followed by exactly one payload argument."""
		arguments = self.arguments
		return len(arguments) == ELEMENT_ARGUMENTS and is_string_literal(arguments[0])

	def get_dependencies(self) -> list[str]:
		"""Values have no dependencies, even when the payload is an array."""
		self._ensure_valid()
		return []


class ConstantExpression(ValueExpression):
	"""A constant registration, validated like a value."""

	default_kind = ExpressionKind.CONSTANT
