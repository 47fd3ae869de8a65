"""ngdp - AngularJS dependency analysis and script load ordering."""

__version__ = "0.1.0"

from ngdp.analyzer import (
	DependencyEdge,
	DependencyGraph,
	ExpressionKind,
	ScriptAnalysis,
	ScriptParser,
	find_dependencies,
	get_element_expression,
)
from ngdp.errors import (
	ConfigError,
	ExpressionTypeError,
	InvalidExpressionError,
	NgDpError,
	OrderError,
	ScriptParseError,
)
from ngdp.order import OrderCommand, OrderConfig, Resources, Script

__all__ = [
	"ConfigError",
	"DependencyEdge",
	"DependencyGraph",
	"ExpressionKind",
	"ExpressionTypeError",
	"InvalidExpressionError",
	"NgDpError",
	"OrderCommand",
	"OrderConfig",
	"OrderError",
	"Resources",
	"Script",
	"ScriptAnalysis",
	"ScriptParseError",
	"ScriptParser",
	"__version__",
	"find_dependencies",
	"get_element_expression",
]
