"""Backends turn a buffer diff into terminal output.

The core only ever hands a backend ``(x, y, cell)`` updates; the transport
(real tty, in-memory grid) lives here.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import IO, Iterable, Optional, Protocol

from .buffer import Buffer, Update, apply_updates
from .style import Style, decode_color
from .text import str_width
from .types import Color, Mod, Rect

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """Terminal I/O failed; the original OSError is chained."""


class Backend(Protocol):
    def size(self) -> Rect:
        ...

    def apply(self, updates: Iterable[Update]) -> None:
        ...

    def flush(self) -> None:
        ...

    def set_cursor_visible(self, visible: bool) -> None:
        ...

    def clear(self) -> None:
        ...


class TestBackend:
    """In-memory backend: the "screen" is a Buffer you can assert on."""

    __test__ = False  # not a pytest test class

    def __init__(self, width: int, height: int):
        self.buffer = Buffer.empty(Rect(0, 0, width, height))
        self.cursor_visible = True
        self.flushed = 0

    def size(self) -> Rect:
        return self.buffer.area

    def apply(self, updates: Iterable[Update]) -> None:
        apply_updates(self.buffer, updates)

    def flush(self) -> None:
        self.flushed += 1

    def set_cursor_visible(self, visible: bool) -> None:
        self.cursor_visible = bool(visible)

    def clear(self) -> None:
        self.buffer.reset()

    def resize(self, width: int, height: int) -> None:
        self.buffer.resize(Rect(0, 0, width, height))
        self.buffer.reset()

    def assert_buffer(self, expected: Buffer) -> None:
        if self.buffer == expected:
            return
        lines = ["buffer mismatch", "expected:"]
        lines += [f'  "{line}"' for line in expected.lines()]
        lines.append("actual:")
        lines += [f'  "{line}"' for line in self.buffer.lines()]
        if self.buffer.area == expected.area:
            for x, y, cell in self.buffer.diff(expected)[:20]:
                got = self.buffer.get(x, y)
                lines.append(f"  ({x}, {y}): expected {cell!r}, got {got!r}")
        else:
            lines.append(f"  area: expected {expected.area}, got {self.buffer.area}")
        raise AssertionError("\n".join(lines))


# SGR parameters for the named colours (foreground; background is +10)
_NAMED_FG = {
    Color.Black: 30,
    Color.Red: 31,
    Color.Green: 32,
    Color.Yellow: 33,
    Color.Blue: 34,
    Color.Magenta: 35,
    Color.Cyan: 36,
    Color.Gray: 37,
    Color.DarkGray: 90,
    Color.LightRed: 91,
    Color.LightGreen: 92,
    Color.LightYellow: 93,
    Color.LightBlue: 94,
    Color.LightMagenta: 95,
    Color.LightCyan: 96,
    Color.White: 97,
}

_MOD_SGR = (
    (Mod.BOLD, 1),
    (Mod.DIM, 2),
    (Mod.ITALIC, 3),
    (Mod.UNDERLINED, 4),
    (Mod.SLOW_BLINK, 5),
    (Mod.RAPID_BLINK, 6),
    (Mod.REVERSED, 7),
    (Mod.HIDDEN, 8),
    (Mod.CROSSED_OUT, 9),
)

SYNC_BEGIN = "\x1b[?2026h"
SYNC_END = "\x1b[?2026l"


def _color_params(c, background: bool) -> list[str]:
    kind, value = decode_color(c)
    base = 48 if background else 38
    if kind == "rgb":
        r, g, b = value  # type: ignore[misc]
        return [str(base), "2", str(r), str(g), str(b)]
    if kind == "indexed":
        return [str(base), "5", str(value)]
    if value == Color.Reset:
        return ["49" if background else "39"]
    return [str(_NAMED_FG[value] + (10 if background else 0))]  # type: ignore[index]


def sgr(style: Style, color: bool = True) -> str:
    params = ["0"]
    for flag, code in _MOD_SGR:
        if int(style.mods) & flag:
            params.append(str(code))
    if color:
        if style.fg is not None:
            params += _color_params(style.fg, background=False)
        if style.bg is not None:
            params += _color_params(style.bg, background=True)
    return "\x1b[" + ";".join(params) + "m"


class AnsiBackend:
    """Writes updates to a text stream as CSI cursor moves and SGR styles.

    ``NO_COLOR`` in the environment turns colour off, and
    ``GRIDTUI_SYNC_UPDATE=0`` drops the synchronized-update brackets.
    Explicit arguments win over the environment.
    """

    def __init__(
        self,
        stream: Optional[IO[str]] = None,
        *,
        color: Optional[bool] = None,
        synchronized: Optional[bool] = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.color = (not os.getenv("NO_COLOR")) if color is None else bool(color)
        if synchronized is None:
            synchronized = os.getenv("GRIDTUI_SYNC_UPDATE", "1") != "0"
        self.synchronized = bool(synchronized)

    def _write(self, data: str) -> None:
        try:
            self.stream.write(data)
        except OSError as e:
            logger.debug("terminal write failed: %s", e)
            raise BackendError("terminal write failed") from e

    def size(self) -> Rect:
        try:
            cols, rows = os.get_terminal_size(self.stream.fileno())
        except (OSError, ValueError) as e:
            logger.debug("terminal size query failed: %s", e)
            raise BackendError("cannot query terminal size") from e
        return Rect(0, 0, cols, rows)

    def encode(self, updates: Iterable[Update]) -> str:
        out: list[str] = []
        cursor = None
        style = None
        for x, y, cell in updates:
            if cursor != (x, y):
                out.append(f"\x1b[{y + 1};{x + 1}H")
            if cell.style != style:
                out.append(sgr(cell.style, self.color))
                style = cell.style
            out.append(cell.symbol)
            # consecutive cells on a row share one cursor move
            cursor = (x + max(1, str_width(cell.symbol)), y)
        if not out:
            return ""
        out.append("\x1b[0m")
        if self.synchronized:
            return SYNC_BEGIN + "".join(out) + SYNC_END
        return "".join(out)

    def apply(self, updates: Iterable[Update]) -> None:
        data = self.encode(updates)
        if data:
            self._write(data)

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            logger.debug("terminal flush failed: %s", e)
            raise BackendError("terminal flush failed") from e

    def set_cursor_visible(self, visible: bool) -> None:
        self._write("\x1b[?25h" if visible else "\x1b[?25l")

    def clear(self) -> None:
        self._write("\x1b[0m\x1b[2J\x1b[H")


# Terminal context managers for raw and alt modes
class _RawMode:
    def __init__(self, fd: Optional[int] = None):
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._saved = None

    def __enter__(self):
        import termios
        import tty

        try:
            self._saved = termios.tcgetattr(self.fd)
            tty.setraw(self.fd, termios.TCSAFLUSH)
        except (OSError, termios.error) as e:
            raise BackendError("cannot enter raw mode") from e
        return self

    def __exit__(self, exc_type, exc, tb):
        import termios

        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSAFLUSH, self._saved)


class _AltScreen:
    def __init__(self, backend: AnsiBackend):
        self.backend = backend

    def __enter__(self):
        self.backend._write("\x1b[?1049h")
        self.backend.flush()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.backend._write("\x1b[?1049l")
        self.backend.flush()


def raw_mode(fd: Optional[int] = None) -> _RawMode:
    return _RawMode(fd)


def alt_screen(backend: AnsiBackend) -> _AltScreen:
    return _AltScreen(backend)


__all__ = [
    "Backend",
    "BackendError",
    "TestBackend",
    "AnsiBackend",
    "sgr",
    "raw_mode",
    "alt_screen",
]
