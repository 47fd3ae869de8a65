"""Global test fixtures and configuration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from ngdp.analyzer.estree import SyntaxNode, walk
from ngdp.analyzer.parser import ScriptParser
from ngdp.utils.config_loader import ConfigLoader

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ngdp.analyzer.estree import Program


@pytest.fixture(autouse=True)
def restore_root_logger() -> Iterator[None]:
    """Auto-use fixture restoring the root logger after tests configuring logging.

    The CLI replaces the handlers and the level of the root logger.
    """
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level

    yield

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def reset_config_singleton() -> Iterator[None]:
    """Auto-use fixture forgetting the configuration loaded by a test."""
    yield
    ConfigLoader._instance = None  # noqa: SLF001


@pytest.fixture
def parse() -> Callable[[str], Program]:
    """Parse JavaScript source into a Program node."""
    parser = ScriptParser()
    return parser.parse


@pytest.fixture
def first_node(parse: Callable[[str], Program]) -> Callable[..., SyntaxNode]:
    """Find the first node of a type in parsed JavaScript source, in pre-order."""

    def _first_node(source: str, node_type: type[SyntaxNode]) -> SyntaxNode:
        for node in walk(parse(source)):
            if isinstance(node, node_type):
                return node
        msg = f"No {node_type.__name__} in {source!r}"
        raise AssertionError(msg)

    return _first_node
