"""Tests for the tree-sitter based script parser."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from ngdp.analyzer.estree import CallExpression, Program, walk
from ngdp.analyzer.parser import ScriptParser
from ngdp.errors import NgDpError, ScriptParseError

if TYPE_CHECKING:
    from pathlib import Path

pytestmark = [pytest.mark.unit, pytest.mark.analyzer]

BROKEN_SOURCE = "angular.module('app', []);\n\nangular.module('app').controller('Ctrl', [;\n"


@pytest.fixture
def parser() -> ScriptParser:
    """Create a strict ScriptParser instance for testing."""
    return ScriptParser()


def test_parse_string_and_bytes(parser: ScriptParser) -> None:
    """Test that text and encoded sources give the same tree."""
    source = "angular.module('app', []);"

    assert parser.parse(source) == parser.parse(source.encode("utf-8"))
    assert isinstance(parser.parse(source), Program)


def test_parse_empty_source(parser: ScriptParser) -> None:
    """Test that an empty source is an empty program."""
    program = parser.parse("")

    assert isinstance(program, Program)
    assert program.body == ()


def test_syntax_error_raises(parser: ScriptParser) -> None:
    """Test that syntax errors fail a strict parser."""
    with pytest.raises(ScriptParseError) as excinfo:
        parser.parse(BROKEN_SOURCE, "app/broken.js")

    assert excinfo.value.path == "app/broken.js"
    assert excinfo.value.line is not None
    assert "app/broken.js" in str(excinfo.value)
    assert isinstance(excinfo.value, NgDpError)


def test_syntax_error_lenient(caplog: pytest.LogCaptureFixture) -> None:
    """Test that a lenient parser returns the partial tree and warns."""
    parser = ScriptParser(fail_on_syntax_error=False)

    with caplog.at_level(logging.WARNING):
        program = parser.parse(BROKEN_SOURCE, "app/broken.js")

    assert isinstance(program, Program)
    assert "Syntax error in app/broken.js" in caplog.text
    module_calls = [
        node
        for node in walk(program)
        if isinstance(node, CallExpression) and getattr(node.callee, "property", None) is not None
    ]
    assert module_calls


def test_parse_file(parser: ScriptParser, tmp_path: Path) -> None:
    """Test parsing a file from disk."""
    script = tmp_path / "app.js"
    script.write_text("angular.module('app', ['dep']);", encoding="utf-8")

    program = parser.parse_file(script)

    assert len(program.body) == 1


def test_parse_missing_file(parser: ScriptParser, tmp_path: Path) -> None:
    """Test that unreadable files raise OSError."""
    with pytest.raises(OSError):
        parser.parse_file(tmp_path / "missing.js")


def test_parser_is_reusable(parser: ScriptParser) -> None:
    """Test that one parser instance parses several sources."""
    first = parser.parse("a();")
    second = parser.parse("b(); c();")

    assert len(first.body) == 1
    assert len(second.body) == 2
