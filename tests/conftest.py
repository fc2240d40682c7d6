"""Shared pytest fixtures for the Noema test-suite."""

import io
import logging
import textwrap

import pytest

from noema.driver import run_source
from noema.lang.lexer import Lexer, TokenKind


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "cli: mark test as exercising the command line")


@pytest.fixture
def write_source(tmp_path):
    """Write dedented Noema source to a temporary file and return its path."""

    def _write(source: str, name: str = "program.noema"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(source), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def execute():
    """Run dedented source and return ``(result, stdout_text)``."""

    def _execute(source: str, **kwargs):
        out = io.StringIO()
        result = run_source(textwrap.dedent(source), "test.noema", output=out, **kwargs)
        return result, out.getvalue()

    return _execute


@pytest.fixture
def kinds():
    """Tokenize dedented source and return the list of token kind names."""

    def _kinds(source: str):
        lexer = Lexer(textwrap.dedent(source), "test.noema")
        return [token.kind.name for token in lexer]

    return _kinds


@pytest.fixture
def structural_counts():
    """Count INDENT and DEDENT tokens of a source string."""

    def _counts(source: str):
        tokens = list(Lexer(textwrap.dedent(source), "test.noema"))
        indents = sum(1 for t in tokens if t.kind is TokenKind.INDENT)
        dedents = sum(1 for t in tokens if t.kind is TokenKind.DEDENT)
        return indents, dedents

    return _counts


@pytest.fixture(autouse=True)
def reset_noema_logging():
    """Undo logger configuration done by CLI runs."""
    yield
    for name in ("noema", "noema.runtime"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
