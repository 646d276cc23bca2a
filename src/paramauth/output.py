"""Terminal output for the ``paramauth`` command line.

Tokens and status documents go to stdout and nothing else does, so
``TOKEN=$(paramauth token blackboard)`` captures exactly the token.
Errors, warnings, and debug lines go to stderr.

Rich styling is used only when stdout is an interactive terminal and
colour has not been disabled with ``--no-color``, ``NO_COLOR`` or
``TERM=dumb``.

The root CLI callback installs one :class:`OutputManager` with
:func:`set_output`; commands reach it through the module-level helpers.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.text import Text


class OutputFormat(str, Enum):
    """How documents are printed. ``AUTO`` becomes ``RICH`` on a colour TTY, else ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# level -> (prefix, rich style)
_LEVELS: dict[str, tuple[str, str]] = {
    "info": ("", ""),
    "warning": ("Warning: ", "yellow"),
    "error": ("Error: ", "bold red"),
    "debug": ("[debug] ", "dim"),
}


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set to anything or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested != OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


class OutputManager:
    """Holds the output preferences chosen on the command line.

    Args:
        format: Document format.
        no_color: Disable Rich styling on both streams.
        quiet: Drop ``info`` lines. Warnings and errors are always shown.
        verbose: Show ``debug`` lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._format = _resolve_format(format, self._no_color)
        self._quiet = quiet
        self._verbose = verbose
        self._stderr = Console(file=sys.stderr, stderr=True, no_color=self._no_color)

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def is_verbose(self) -> bool:
        return self._verbose

    @property
    def stderr_console(self) -> Console:
        """Console the CLI's log handler writes through."""
        return self._stderr

    # --- stdout ---

    def print_data(self, text: str) -> None:
        sys.stdout.write(f"{text}\n")
        sys.stdout.flush()

    def print_document(self, document: dict[str, Any]) -> None:
        """Print a flat status document.

        ``JSON`` prints indented JSON, ``PLAIN`` prints one
        ``key<TAB>value`` line per field, and ``RICH`` prints highlighted JSON.
        """
        if self._format == OutputFormat.PLAIN:
            for key, value in document.items():
                self.print_data(f"{key}\t{value}")
            return

        rendered = json.dumps(document, indent=2, default=str)
        if self._format == OutputFormat.JSON:
            self.print_data(rendered)
        else:
            stdout = Console(file=sys.stdout, force_terminal=True)
            stdout.print(Syntax(rendered, "json", theme="monokai", word_wrap=True))

    # --- stderr ---

    def emit(self, level: str, message: str) -> None:
        """Write a diagnostic line to stderr, subject to quiet and verbose."""
        if level == "info" and self._quiet:
            return
        if level == "debug" and not self._verbose:
            return
        prefix, style = _LEVELS[level]
        if self._no_color:
            sys.stderr.write(f"{prefix}{message}\n")
            sys.stderr.flush()
        else:
            self._stderr.print(Text.assemble((prefix, style), message), soft_wrap=True)

    def info(self, message: str) -> None:
        self.emit("info", message)

    def warning(self, message: str) -> None:
        self.emit("warning", message)

    def error(self, message: str) -> None:
        self.emit("error", message)

    def debug(self, message: str) -> None:
        self.emit("debug", message)


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one if needed."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_document(document: dict[str, Any]) -> None:
    get_output().print_document(document)


def error(message: str) -> None:
    get_output().error(message)
