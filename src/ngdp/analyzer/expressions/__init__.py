"""AngularJS expressions recognized in JavaScript syntax trees."""

from .base import ELEMENTS, Expression, ExpressionKind
from .config import ConfigExpression
from .element import (
	ComponentExpression,
	ConstantExpression,
	DirectiveExpression,
	ElementExpression,
	ModuleExpression,
	ValueExpression,
)
from .factory import create_expression, get_element_expression
from .filter import FilterExpression
from .inject import InjectExpression
from .route import RouteExpression

__all__ = [
	"ELEMENTS",
	"ComponentExpression",
	"ConfigExpression",
	"ConstantExpression",
	"DirectiveExpression",
	"ElementExpression",
	"Expression",
	"ExpressionKind",
	"FilterExpression",
	"InjectExpression",
	"ModuleExpression",
	"RouteExpression",
	"ValueExpression",
	"create_expression",
	"get_element_expression",
]
