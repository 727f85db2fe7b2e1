import io

import pytest

from gridtui import AnsiBackend, BackendError, Buffer, Cell, Color, Mod, Rect, Style, TestBackend, color_indexed, rgb
from gridtui.backend import SYNC_BEGIN, SYNC_END, sgr


def test_test_backend_applies_updates_and_tracks_cursor():
    backend = TestBackend(4, 2)
    backend.apply([(1, 0, Cell("x")), (3, 1, Cell("y")), (9, 9, Cell("z"))])
    backend.flush()
    backend.set_cursor_visible(False)
    assert backend.buffer.lines() == [" x  ", "   y"]
    assert backend.flushed == 1
    assert backend.cursor_visible is False
    backend.assert_buffer(Buffer.with_lines([" x  ", "   y"]))


def test_assert_buffer_reports_mismatch():
    backend = TestBackend(3, 1)
    with pytest.raises(AssertionError) as err:
        backend.assert_buffer(Buffer.with_lines(["abc"]))
    assert '"abc"' in str(err.value)


def test_test_backend_resize_and_clear():
    backend = TestBackend(3, 1)
    backend.apply([(0, 0, Cell("a"))])
    backend.clear()
    assert backend.buffer.lines() == ["   "]
    backend.resize(5, 2)
    assert backend.size() == Rect(0, 0, 5, 2)


def test_sgr_encodes_modifiers_and_colours():
    assert sgr(Style()) == "\x1b[0m"
    assert sgr(Style(fg=Color.Red, mods=Mod.BOLD)) == "\x1b[0;1;31m"
    assert sgr(Style(bg=Color.LightBlue)) == "\x1b[0;104m"
    assert sgr(Style(fg=Color.Reset, bg=Color.Reset)) == "\x1b[0;39;49m"
    assert sgr(Style(bg=rgb(1, 2, 3))) == "\x1b[0;48;2;1;2;3m"
    assert sgr(Style(fg=color_indexed(200))) == "\x1b[0;38;5;200m"
    assert sgr(Style(fg=Color.Red, mods=Mod.ITALIC), color=False) == "\x1b[0;3m"


def test_ansi_backend_coalesces_runs_on_a_row():
    out = io.StringIO()
    backend = AnsiBackend(out, color=True, synchronized=False)
    backend.apply([(0, 0, Cell("a")), (1, 0, Cell("b")), (5, 2, Cell("c"))])
    assert out.getvalue() == "\x1b[1;1H\x1b[0mab\x1b[3;6Hc\x1b[0m"


def test_ansi_backend_synchronized_brackets_and_empty_diff(monkeypatch):
    monkeypatch.delenv("GRIDTUI_SYNC_UPDATE", raising=False)
    out = io.StringIO()
    backend = AnsiBackend(out)
    backend.apply([])
    assert out.getvalue() == ""
    backend.apply([(0, 0, Cell("a"))])
    assert out.getvalue().startswith(SYNC_BEGIN)
    assert out.getvalue().endswith(SYNC_END)


def test_ansi_backend_reads_environment(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setenv("GRIDTUI_SYNC_UPDATE", "0")
    backend = AnsiBackend(io.StringIO())
    assert backend.color is False
    assert backend.synchronized is False
    assert AnsiBackend(io.StringIO(), color=True).color is True


def test_ansi_backend_cursor_and_clear():
    out = io.StringIO()
    backend = AnsiBackend(out, synchronized=False)
    backend.set_cursor_visible(False)
    backend.set_cursor_visible(True)
    backend.clear()
    assert out.getvalue() == "\x1b[?25l\x1b[?25h\x1b[0m\x1b[2J\x1b[H"


class _BrokenStream:
    def write(self, s):
        raise OSError("disk on fire")

    def flush(self):
        raise OSError("disk on fire")


def test_io_failures_surface_as_backend_errors():
    backend = AnsiBackend(_BrokenStream(), synchronized=False)
    with pytest.raises(BackendError) as err:
        backend.apply([(0, 0, Cell("a"))])
    assert isinstance(err.value.__cause__, OSError)
    with pytest.raises(BackendError):
        backend.flush()
    with pytest.raises(BackendError):
        AnsiBackend(io.StringIO()).size()
