"""Shared console helpers for gcc2msvc.

Program output (usage text, the echoed command, output of delegated tools)
goes to stdout untouched.  Diagnostics go through a stderr rich console with
an ``error:`` / ``warning:`` prefix.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

_err_console = Console(stderr=True)


def error_msg(msg: str) -> None:
    """Print *msg* as an error on stderr."""
    _err_console.print(f"[red bold]error:[/red bold] {escape(msg)}", soft_wrap=True)


def warn_msg(msg: str) -> None:
    """Print *msg* as a warning on stderr."""
    _err_console.print(f"[yellow bold]warning:[/yellow bold] {escape(msg)}", soft_wrap=True)
