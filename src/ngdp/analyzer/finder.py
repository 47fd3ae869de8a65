"""Discovery of AngularJS definitions and dependencies in a syntax tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ngdp.analyzer.estree import walk
from ngdp.analyzer.expressions import ExpressionKind, ModuleExpression, create_expression
from ngdp.analyzer.models import Finding, ScriptAnalysis

if TYPE_CHECKING:
	from ngdp.analyzer.estree import SyntaxNode

logger = logging.getLogger(__name__)


def find_dependencies(root: SyntaxNode) -> ScriptAnalysis:
	"""
	Find AngularJS definitions and dependencies of a syntax tree.

	Definitions are identified by:
	    - angular.module('name', [...])
	    - module.component(), directive(), controller(), factory(), service(),
	      constant(), value(), decorator(), filter(), provider()
	    - the resolve keys of $routeProvider.when()

	Dependencies are identified by:
	    - strict dependency injection arrays of elements and config / run blocks
	    - Element.$inject = [...]
	    - angular.module('name', ['DependencyModule'])
	    - angular.module('name') which depends on module "name"
	    - controllers referenced by components, directives and routes
	    - $filter('name')

	Expressions which are recognized but do not have a valid shape are
	ignored.

	Args:
	    root: The syntax tree, usually a Program

	Returns:
	    The analysis of the tree

	"""
	analysis = ScriptAnalysis()

	for node in walk(root):
		expression = create_expression(node)
		if expression is None:
			continue

		if not expression.is_valid():
			logger.debug("Ignoring invalid %s expression at line %d", expression.kind.value, node.line)
			continue

		finding = Finding(
			kind=expression.kind,
			line=node.line,
			definitions=tuple(expression.get_definitions()),
			dependencies=tuple(expression.get_dependencies()),
		)
		analysis.add(finding)

		if (
			expression.kind is ExpressionKind.MODULE
			and isinstance(expression, ModuleExpression)
			and not expression.is_definition()
		):
			analysis.module = expression.get_name()

	logger.debug(
		"Found %d definitions and %d dependencies",
		len(analysis.definitions),
		len(analysis.dependencies),
	)
	return analysis
