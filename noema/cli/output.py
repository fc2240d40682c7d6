"""
Output helpers for the Noema CLI.

Diagnostics go to stderr through a rich console: styled when attached to a
terminal, plain text otherwise. Messages are escaped so that brackets in
source snippets are never read as markup.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

stdout_console = Console(highlight=False, emoji=False, soft_wrap=True)
stderr_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def print_lines(lines: Iterable[str], console: Optional[Console] = None) -> None:
    """
    Print pre-rendered lines (token or AST dumps) verbatim.

    Args:
        lines: Lines without trailing newlines
        console: Target console (defaults to stdout)
    """
    console = console or stdout_console
    for line in lines:
        console.print(line, markup=False)


def print_error(message: str, console: Optional[Console] = None) -> None:
    """
    Print a single diagnostic line in red.

    Examples:
        >>> print_error("demo.noema:1:5: lexer error: unexpected '!'")  # doctest: +SKIP
        demo.noema:1:5: lexer error: unexpected '!'
    """
    console = console or stderr_console
    console.print(f"[red]{escape(message)}[/red]")


__all__ = ["stdout_console", "stderr_console", "print_lines", "print_error"]
