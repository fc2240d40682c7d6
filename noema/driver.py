"""Front-to-back execution of Noema programs.

``run_source``, ``run_stream`` and ``run_file`` tokenize, parse and
evaluate a program and report the outcome as a :class:`RunResult`.
Language errors never escape as exceptions: the first diagnostic from
whichever stage failed is returned in ``RunResult.message``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, TextIO, Union

from .config import NoemaConfig
from .errors import NoemaError
from .lang.lexer import Lexer, SourceInput
from .lang.parser import NoemaParser, ParseResult
from .runtime import Evaluator, VariableStore

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Outcome of a run: success flag plus the first diagnostic."""

    ok: bool
    message: str = ""
    error: Optional[NoemaError] = None

    def __bool__(self) -> bool:
        return self.ok


def make_lexer(source: SourceInput, path: Optional[str], config: NoemaConfig) -> Lexer:
    return Lexer(
        source,
        path or config.default_path,
        max_token_length=config.max_token_length,
        max_indent_depth=config.max_indent_depth,
        max_message_length=config.max_message_length,
    )


def parse(source: SourceInput, path: Optional[str] = None, config: Optional[NoemaConfig] = None) -> ParseResult:
    """Tokenize and parse ``source`` without executing it."""
    config = config or NoemaConfig()
    lexer = make_lexer(source, path, config)
    parser = NoemaParser(
        lexer,
        max_message_length=config.max_message_length,
        max_expression_depth=config.max_expression_depth,
    )
    return parser.parse_program()


def run_stream(
    source: SourceInput,
    path: Optional[str] = None,
    *,
    config: Optional[NoemaConfig] = None,
    output: Optional[TextIO] = None,
    store: Optional[VariableStore] = None,
) -> RunResult:
    """Parse and execute a program read from a string or text stream."""
    config = config or NoemaConfig()
    display_path = path or config.default_path

    parsed = parse(source, display_path, config)
    if not parsed.ok:
        logger.debug("Parse failed, evaluator not invoked: %s", parsed.message)
        return RunResult(ok=False, message=parsed.message, error=parsed.error)

    owns_store = store is None
    evaluator = Evaluator(
        VariableStore(config.max_variables) if owns_store else store,
        output=output,
        path=display_path,
    )
    try:
        evaluator.run(parsed.program)
    except NoemaError as exc:
        message = exc.format(config.max_message_length)
        logger.debug("Run failed: %s", message)
        return RunResult(ok=False, message=message, error=exc)
    finally:
        if owns_store:
            evaluator.store.clear()
    return RunResult(ok=True)


def run_source(source: str, path: Optional[str] = None, **kwargs) -> RunResult:
    return run_stream(source, path, **kwargs)


def run_file(
    path: Union[str, Path],
    *,
    config: Optional[NoemaConfig] = None,
    output: Optional[TextIO] = None,
) -> RunResult:
    """Execute the program stored at ``path``.

    An unreadable file is reported like any other failure.
    """
    display_path = str(path)
    try:
        handle = open(path, "r", encoding="utf-8", newline="")
    except OSError as exc:
        return RunResult(ok=False, message=f"noema: cannot open '{display_path}': {exc.strerror or exc}")
    with handle:
        return run_stream(handle, display_path, config=config, output=output)


__all__ = ["RunResult", "make_lexer", "parse", "run_stream", "run_source", "run_file"]
