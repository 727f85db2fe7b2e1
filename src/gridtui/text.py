"""Display-width helpers.

Cells are measured in terminal columns, not code points: East Asian wide
characters take two cells, combining marks take none and stick to the
preceding character.
"""

from __future__ import annotations

from typing import Iterator

from wcwidth import wcswidth, wcwidth


def str_width(text: str) -> int:
    """Column width of ``text``, skipping anything unprintable."""
    w = wcswidth(text)
    if w >= 0:
        return w
    return sum(width for _, width in graphemes(text))


def graphemes(text: str) -> Iterator[tuple[str, int]]:
    """Yield ``(symbol, width)`` clusters in display order.

    A cluster is a printable base character plus any zero-width code points
    that follow it. Control characters are dropped, and so are zero-width
    code points with nothing to attach to.
    """
    cluster = ""
    cluster_width = 0
    for ch in text:
        w = wcwidth(ch)
        if w < 0:
            continue
        if w == 0:
            if cluster:
                cluster += ch
            continue
        if cluster:
            yield cluster, cluster_width
        cluster = ch
        cluster_width = w
    if cluster:
        yield cluster, cluster_width

