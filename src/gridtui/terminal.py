from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .backend import Backend
from .buffer import Buffer
from .types import Rect, RectLike
from .widgets import Widget

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedFrame:
    buffer: Buffer
    area: Rect


class Frame:
    """Handed to the draw callback; every widget renders through it into the
    terminal's working buffer."""

    def __init__(self, terminal: "Terminal"):
        self._terminal = terminal

    def size(self) -> Rect:
        return self._terminal.viewport

    def current_area(self) -> Rect:
        return self._terminal.viewport

    @property
    def buffer(self) -> Buffer:
        return self._terminal.current_buffer()

    def render_widget(self, widget: Widget, area: RectLike) -> None:
        # widgets never see anything outside the viewport
        area = Rect.coerce(area).intersection(self._terminal.viewport)
        widget.render(area, self._terminal.current_buffer())

    draw = render_widget


class Terminal:
    """Double-buffered frame controller.

    Each ``draw`` renders into a fresh working buffer, diffs it against the
    previous frame and hands only the changed cells to the backend.

    Example:
        with Terminal(AnsiBackend()) as term:
            term.hide_cursor()
            term.draw(lambda f: f.render_widget(table, f.size()))
    """

    def __init__(self, backend: Backend):
        self.backend = backend
        self.viewport = backend.size()
        self.buffers = [Buffer.empty(self.viewport), Buffer.empty(self.viewport)]
        self.current = 0
        self.hidden_cursor = False

    def current_buffer(self) -> Buffer:
        return self.buffers[self.current]

    def previous_buffer(self) -> Buffer:
        return self.buffers[1 - self.current]

    def size(self) -> Rect:
        return self.backend.size()

    def resize(self, area: RectLike) -> None:
        area = Rect.coerce(area)
        for buf in self.buffers:
            buf.resize(area)
            buf.reset()
        self.viewport = area
        self.clear()

    def autoresize(self) -> None:
        size = self.size()
        if size != self.viewport:
            logger.debug("terminal resized from %s to %s", self.viewport, size)
            self.resize(size)

    def flush(self) -> None:
        updates = self.previous_buffer().diff(self.current_buffer())
        logger.debug("frame diff: %d cell(s) changed", len(updates))
        self.backend.apply(updates)

    def draw(self, fn: Callable[[Frame], None]) -> CompletedFrame:
        self.autoresize()
        # a frame that failed half way must not leak into this one
        self.current_buffer().reset()
        fn(Frame(self))
        self.flush()
        # the old previous buffer becomes the next working buffer
        self.previous_buffer().reset()
        self.current = 1 - self.current
        self.backend.flush()
        return CompletedFrame(buffer=self.previous_buffer(), area=self.viewport)

    def hide_cursor(self) -> None:
        self.backend.set_cursor_visible(False)
        self.hidden_cursor = True

    def show_cursor(self) -> None:
        self.backend.set_cursor_visible(True)
        self.hidden_cursor = False

    def clear(self) -> None:
        self.backend.clear()
        # a blank previous frame forces a full repaint on the next draw
        self.previous_buffer().reset()

    def close(self) -> None:
        if self.hidden_cursor:
            self.show_cursor()
        self.backend.flush()

    def __enter__(self) -> "Terminal":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def render(widget: Widget, area: RectLike, buf: Optional[Buffer] = None) -> Buffer:
    """Render ``widget`` into ``buf`` (a fresh buffer over ``area`` by default)."""
    area = Rect.coerce(area)
    if buf is None:
        buf = Buffer.empty(area)
    widget.render(area, buf)
    return buf


# Convenience: headless render to plain text

def headless_render(width: int, height: int, widget: Widget) -> str:
    return str(render(widget, Rect(0, 0, width, height)))


__all__ = [
    "CompletedFrame",
    "Frame",
    "Terminal",
    "render",
    "headless_render",
]
