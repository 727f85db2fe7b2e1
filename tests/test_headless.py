from gridtui import Block, Borders, Length, Rect, Table, TableConfig
from gridtui import headless_render, render


def test_headless_table_renders_text():
    tbl = Table(["A", "B"], [["1", "2"]], TableConfig(widths=(Length(3), Length(3))))
    out = headless_render(20, 4, tbl)
    assert "A" in out and "1" in out
    assert len(out.splitlines()) == 4


def test_headless_block_with_title():
    out = headless_render(12, 3, Block(title="Demo", borders=Borders.ALL))
    assert out.splitlines()[0] == "┌Demo──────┐"


def test_render_into_offset_area():
    tbl = Table(["A"], [], TableConfig(widths=(Length(1),)))
    buf = render(tbl, Rect(3, 2, 2, 1))
    assert buf.area == Rect(3, 2, 2, 1)
    assert buf.get(3, 2).symbol == "A"
