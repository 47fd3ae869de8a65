"""AngularJS dependency analysis for the ngdp package."""

from .dependency_graph import DependencyGraph
from .estree import SyntaxNode, walk
from .expressions import ExpressionKind, create_expression, get_element_expression
from .finder import find_dependencies
from .models import DependencyEdge, Finding, Resources, Script, ScriptAnalysis
from .parser import ScriptParser

__all__ = [
	"DependencyEdge",
	"DependencyGraph",
	"ExpressionKind",
	"Finding",
	"Resources",
	"Script",
	"ScriptAnalysis",
	"ScriptParser",
	"SyntaxNode",
	"create_expression",
	"find_dependencies",
	"get_element_expression",
	"walk",
]
