"""Exceptions raised by ngdp."""

from __future__ import annotations


class NgDpError(Exception):
	"""Base class for all ngdp errors."""


class InvalidExpressionError(NgDpError, ValueError):
	"""Raised when data is extracted from an expression that is not valid."""


class ExpressionTypeError(NgDpError, TypeError):
	"""Raised when an expression cannot be built for the requested kind."""


class ScriptParseError(NgDpError):
	"""Raised when a JavaScript source file cannot be parsed."""

	def __init__(self, path: str, line: int | None = None, message: str | None = None) -> None:
		"""
		Initialize the parse error.

		Args:
		    path: Path of the script which failed to parse
		    line: 1-based line of the first syntax error, if known
		    message: Optional detail message

		"""
		self.path = path
		self.line = line
		location = f"{path}:{line}" if line is not None else path
		super().__init__(message or f"Syntax error in {location}")


class ConfigError(NgDpError):
	"""Exception raised for configuration errors."""


class OrderError(NgDpError):
	"""Raised when scripts and styles cannot be ordered or written."""
