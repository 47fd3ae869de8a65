"""JavaScript parsing using tree-sitter."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from tree_sitter import Language, Node, Parser
from tree_sitter_language_pack import SupportedLanguage, get_language

from ngdp.analyzer.estree import EstreeBuilder, Program
from ngdp.errors import ScriptParseError

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

# Language name for tree-sitter-language-pack
JAVASCRIPT: SupportedLanguage = "javascript"


@lru_cache(maxsize=1)
def _load_language() -> Language:
	"""Load the tree-sitter JavaScript grammar once per process."""
	logger.debug("Loading tree-sitter grammar for %s", JAVASCRIPT)
	return get_language(JAVASCRIPT)


def _first_error_line(root: Node) -> int | None:
	"""
	Find the line of the first syntax error of a tree.

	Args:
	    root: Root node of a tree-sitter tree

	Returns:
	    The 1-based line of the first ERROR or missing node, None if not found

	"""
	stack = [root]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			return node.start_point[0] + 1
		if node.has_error:
			stack.extend(reversed(node.children))
	return None


class ScriptParser:
	"""Parses JavaScript sources into ESTree-shaped syntax trees."""

	def __init__(self, *, fail_on_syntax_error: bool = True) -> None:
		"""
		Initialize the parser.

		Args:
		    fail_on_syntax_error: Raise ScriptParseError on syntax errors instead
		        of returning the partially parsed tree

		"""
		self.fail_on_syntax_error = fail_on_syntax_error
		self.language = _load_language()

	def parse(self, content: str | bytes, path: str = "<string>") -> Program:
		"""
		Parse JavaScript source code.

		A new tree-sitter parser is created for each call so that a single
		ScriptParser can be shared between threads.

		Args:
		    content: The source code
		    path: Path of the source, used in messages

		Returns:
		    The Program node of the source

		Raises:
		    ScriptParseError: If the source has syntax errors and
		        fail_on_syntax_error is set

		"""
		source = content.encode("utf-8") if isinstance(content, str) else content

		parser = Parser()
		parser.language = self.language
		tree = parser.parse(source)
		root = tree.root_node

		if root.has_error:
			line = _first_error_line(root)
			if self.fail_on_syntax_error:
				raise ScriptParseError(path, line)
			logger.warning("Syntax error in %s at line %s, analysing the partial tree", path, line)

		program = EstreeBuilder(source).build(root)
		if not isinstance(program, Program):
			# tree-sitter always roots JavaScript trees on a program node
			program = Program(body=(program,), line=1)
		return program

	def parse_file(self, file_path: Path) -> Program:
		"""
		Parse a JavaScript file.

		Args:
		    file_path: Path to the file

		Returns:
		    The Program node of the file

		Raises:
		    ScriptParseError: If the file has syntax errors and
		        fail_on_syntax_error is set
		    OSError: If the file cannot be read

		"""
		logger.debug("Parsing script: %s", file_path)
		return self.parse(file_path.read_bytes(), str(file_path))
