"""
Noema programming language package.

Noema is a small, indentation-structured scripting language with Latin
keywords (``si`` / ``aliosi`` / ``alio``, ``verum`` / ``falsum`` /
``nulla``, ``et`` / ``aut`` / ``non``) and a single output primitive,
``sonus.dic``.

The code is organised into several modules:

* ``lang`` – the lexer, which rebuilds block structure from indentation,
  and the recursive descent parser.
* ``ast`` – dataclasses for statements and expressions.
* ``runtime`` – runtime values, the variable store and the tree-walking
  evaluator.
* ``driver`` – runs the whole pipeline and reports a ``RunResult``.
* ``debug`` – token and AST dumpers.
* ``cli`` – the ``noema`` command.
"""

import re
from pathlib import Path
from importlib import metadata as _metadata


def _local_version() -> str | None:
    # Only a source checkout has pyproject.toml beside the package; an
    # installed copy falls through to the distribution metadata.
    root = Path(__file__).resolve().parents[1]
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return None
    try:
        text = pyproject.read_text(encoding="utf-8")
    except OSError:  # pragma: no cover - IO errors should not break imports
        return None
    match = re.search(r"^version\s*=\s*\"([^\"]+)\"", text, flags=re.MULTILINE)
    if match:
        return match.group(1)
    return None


def _resolve_version() -> str:
    local = _local_version()
    if local:
        return local
    try:
        return _metadata.version("noema")
    except _metadata.PackageNotFoundError:  # pragma: no cover - source checkout without metadata
        return "0.0.0"


__version__ = _resolve_version()

from .driver import RunResult, run_file, run_source, run_stream  # noqa: E402
from .errors import LexerError, NoemaError, NoemaRuntimeError, ParseError  # noqa: E402

__all__ = [
    "__version__",
    "RunResult",
    "run_file",
    "run_source",
    "run_stream",
    "NoemaError",
    "LexerError",
    "ParseError",
    "NoemaRuntimeError",
]
