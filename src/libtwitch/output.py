"""Where libtwitch writes what it has to say.

Decoded API responses and authorization URLs go to stdout; everything else
(request traces, undecodable bodies, errors) goes to stderr so that
``libtwitch get /games/top --json | jq`` always sees clean JSON.

Library code reports through the module-level helpers (:func:`warning`,
:func:`debug`, ...).  They delegate to one global :class:`OutputManager`,
which the command line replaces with :func:`set_output` after parsing
``--quiet``, ``--verbose``, ``--no-color``, ``--json`` and ``--plain``.
``NO_COLOR`` and ``TERM=dumb`` turn colour off as well.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, NamedTuple, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How decoded responses are rendered.

    ``AUTO`` picks ``RICH`` for a colour terminal and ``PLAIN`` otherwise.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class _Level(NamedTuple):
    prefix: str
    style: str
    quiet_hides: bool
    needs_verbose: bool


_LEVELS = {
    "info": _Level("", "", True, False),
    "success": _Level("", "green", True, False),
    "warning": _Level("Warning: ", "yellow", False, False),
    "error": _Level("Error: ", "bold red", False, False),
    "debug": _Level("[debug] ", "dim", False, True),
}


def _colour_disabled_by_env() -> bool:
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


def _stdout_is_terminal() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    return bool(isatty and isatty())


class OutputManager:
    """Splits output between stdout (data) and stderr (diagnostics).

    Args:
        format: Rendering for :meth:`format_response`.
        no_color: Print diagnostics without Rich markup.
        quiet: Hide ``info`` and ``success`` lines.
        verbose: Show ``debug`` lines (one per request).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _colour_disabled_by_env()
        self._quiet = quiet
        self._verbose = verbose

        if format is OutputFormat.AUTO:
            rich_ok = _stdout_is_terminal() and not self._no_color
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._console = Console(no_color=self._no_color, force_terminal=True)
        self._err_console = Console(stderr=True, no_color=self._no_color)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # stdout

    def format_response(self, data: Any) -> None:
        """Render a decoded response body in the active format."""
        if self._format is OutputFormat.PLAIN:
            for line in _plain_lines(data):
                self.print_data(line)
            return
        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format is OutputFormat.JSON:
            self.print_data(text)
        else:
            self._console.print(Syntax(text, "json", theme="monokai", word_wrap=True))

    def print_data(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)

    # stderr

    def _emit(self, level_name: str, message: str) -> None:
        level = _LEVELS[level_name]
        if level.quiet_hides and self._quiet:
            return
        if level.needs_verbose and not self._verbose:
            return
        if self._no_color:
            print(f"{level.prefix}{message}", file=sys.stderr, flush=True)
            return
        # Response bodies and exception text may contain square brackets.
        line = f"{escape(level.prefix)}{escape(message)}"
        self._err_console.print(f"[{level.style}]{line}[/]" if level.style else line)

    def info(self, message: str) -> None:
        """Hint for the user. Hidden by ``--quiet``."""
        self._emit("info", message)

    def success(self, message: str) -> None:
        """Confirmation of a completed action. Hidden by ``--quiet``."""
        self._emit("success", message)

    def warning(self, message: str) -> None:
        """Always shown, even with ``--quiet``."""
        self._emit("warning", message)

    def error(self, message: str) -> None:
        """Always shown."""
        self._emit("error", message)

    def debug(self, message: str) -> None:
        """Only shown with ``--verbose``."""
        self._emit("debug", message)


def _plain_lines(data: Any) -> list[str]:
    """Tab-separated lines: ``key<TAB>value`` for objects, one row per list item."""
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global manager, creating a default one on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the global manager; the next call creates a fresh one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def warning(message: str) -> None:
    get_output().warning(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)
