import pytest

from gridtui import Buffer, Cell, Color, Rect, Style, diff


def test_empty_buffer_has_one_cell_per_position():
    buf = Buffer.empty(Rect(0, 0, 4, 3))
    assert len(buf.content) == 12
    assert buf.lines() == ["    "] * 3
    assert len(Buffer.empty(Rect(3, 3, 0, 9)).content) == 0


def test_content_length_must_match_area():
    with pytest.raises(ValueError):
        Buffer(Rect(0, 0, 2, 2), [Cell()])


def test_index_and_position_round_trip():
    buf = Buffer.empty(Rect(2, 1, 5, 3))
    assert buf.index_of(2, 1) == 0
    assert buf.index_of(4, 2) == 7
    assert buf.pos_of(7) == (4, 2)
    assert buf.get(0, 0) is None
    with pytest.raises(IndexError):
        buf.index_of(7, 1)


def test_set_string_clips_at_the_right_edge():
    buf = Buffer.empty(Rect(0, 0, 5, 1))
    assert buf.set_string(3, 0, "abcdef") == (5, 0)
    assert buf.lines() == ["   ab"]


def test_set_string_skips_cells_left_of_area():
    buf = Buffer.empty(Rect(2, 0, 4, 1))
    buf.set_string(0, 0, "abcdef")
    assert buf.lines() == ["cdef"]


def test_set_string_outside_rows_and_empty_text_are_noops():
    buf = Buffer.empty(Rect(0, 0, 3, 1))
    assert buf.set_string(0, 4, "abc") == (0, 4)
    assert buf.set_string(1, 0, "") == (1, 0)
    buf.set_stringn(0, 0, "abc", 0)
    assert buf.lines() == ["   "]


def test_set_stringn_limits_width_and_never_wraps():
    buf = Buffer.empty(Rect(0, 0, 6, 2))
    buf.set_stringn(1, 0, "Head1", 3)
    assert buf.lines() == [" Hea  ", "      "]


def test_set_string_applies_style():
    buf = Buffer.empty(Rect(0, 0, 3, 1))
    buf.set_string(0, 0, "ab", Style(fg=Color.Red))
    assert buf.get(0, 0) == Cell("a", Style(fg=Color.Red))
    assert buf.get(2, 0) == Cell()


def test_wide_characters_take_two_cells():
    buf = Buffer.empty(Rect(0, 0, 4, 1))
    buf.set_string(0, 0, "日本")
    assert [c.symbol for c in buf.content] == ["日", "", "本", ""]
    assert buf.lines() == ["日本"]

    narrow = Buffer.empty(Rect(0, 0, 3, 1))
    narrow.set_string(0, 0, "日本")
    assert narrow.lines() == ["日 "]


def test_overwriting_half_a_wide_character_blanks_the_other_half():
    buf = Buffer.empty(Rect(0, 0, 4, 1))
    buf.set_string(0, 0, "日")
    buf.set_string(0, 0, "a")
    assert [c.symbol for c in buf.content] == ["a", " ", " ", " "]
    assert buf.lines() == ["a   "]

    buf.set_string(0, 0, "日本")
    buf.set_string(1, 0, "b")
    assert [c.symbol for c in buf.content] == [" ", "b", "本", ""]

    buf.set_string(1, 0, "日")
    assert [c.symbol for c in buf.content] == [" ", "日", "", " "]

    prev = Buffer.empty(Rect(0, 0, 4, 1))
    assert [(x, c.symbol) for x, _, c in prev.diff(buf)] == [(1, "日")]


def test_combining_marks_join_previous_cell_and_controls_drop():
    buf = Buffer.empty(Rect(0, 0, 3, 1))
    buf.set_string(0, 0, "e\u0301x")
    assert buf.get(0, 0).symbol == "e\u0301"
    assert buf.get(1, 0).symbol == "x"

    buf = Buffer.empty(Rect(0, 0, 3, 1))
    buf.set_string(0, 0, "a\tb")
    assert buf.lines() == ["ab "]


def test_with_lines():
    buf = Buffer.with_lines(["ab", "cde"])
    assert buf.area == Rect(0, 0, 3, 2)
    assert str(buf) == "ab \ncde"


def test_set_style_reset_resize():
    buf = Buffer.with_lines(["abc", "def"])
    buf.set_style(Rect(1, 1, 5, 5), Style(bg=Color.Blue))
    assert buf.get(1, 1).style == Style(bg=Color.Blue)
    assert buf.get(0, 1).style == Style()
    buf.resize(Rect(0, 0, 2, 2))
    assert len(buf.content) == 4
    buf.reset()
    assert buf.lines() == ["  ", "  "]


def test_merge_covers_both_areas():
    a = Buffer(Rect(0, 0, 2, 1))
    a.set_string(0, 0, "ab")
    b = Buffer(Rect(1, 1, 2, 1))
    b.set_string(1, 1, "cd")
    a.merge(b)
    assert a.area == Rect(0, 0, 3, 2)
    assert a.lines() == ["ab ", " cd"]


def test_diff_of_identical_buffers_is_empty():
    prev = Buffer.with_lines(["hello", "world"])
    cur = Buffer.with_lines(["hello", "world"])
    assert diff(prev, cur) == []


def test_diff_lists_changed_cells_in_row_major_order():
    prev = Buffer.with_lines(["abc", "def"])
    cur = Buffer.with_lines(["xbc", "dez"])
    cur.get(1, 0).set_style(Style(fg=Color.Green))
    updates = prev.diff(cur)
    assert [(x, y, c.symbol) for x, y, c in updates] == [(0, 0, "x"), (1, 0, "b"), (2, 1, "z")]


def test_diff_requires_same_area():
    with pytest.raises(ValueError):
        diff(Buffer.empty(Rect(0, 0, 2, 2)), Buffer.empty(Rect(0, 0, 3, 2)))


def test_diff_skips_hidden_half_of_wide_symbol():
    prev = Buffer.empty(Rect(0, 0, 3, 1))
    cur = Buffer.empty(Rect(0, 0, 3, 1))
    cur.set_string(0, 0, "日")
    assert [(x, c.symbol) for x, _, c in prev.diff(cur)] == [(0, "日")]
    # going back repaints both cells the wide symbol used to cover
    assert [(x, c.symbol) for x, _, c in cur.diff(prev)] == [(0, " "), (1, " ")]
