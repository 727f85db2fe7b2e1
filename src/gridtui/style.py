from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union
import enum

from .types import Color, Mod

ColorLike = Union[int, Color]

# 24-bit and 256-index colours are packed into plain ints with a tag bit so
# that they travel through Style next to the named Color enum.
RGB_FLAG = 0x80000000
INDEXED_FLAG = 0x40000000


@dataclass(frozen=True)
class Style:
    """Opaque style tag attached to a cell.

    ``fg``/``bg`` of ``None`` mean "leave whatever is underneath"; ``mods``
    are added on top of the underlying modifiers when patched.
    """

    fg: Optional[ColorLike] = None
    bg: Optional[ColorLike] = None
    mods: int = 0

    def patch(self, other: "Style") -> "Style":
        return Style(
            fg=self.fg if other.fg is None else other.fg,
            bg=self.bg if other.bg is None else other.bg,
            mods=int(self.mods) | int(other.mods),
        )

    # Fluent helpers (return a new Style for chaining)
    def with_fg(self, fg: Optional[ColorLike]) -> "Style":
        return Style(fg=fg, bg=self.bg, mods=self.mods)

    def with_bg(self, bg: Optional[ColorLike]) -> "Style":
        return Style(fg=self.fg, bg=bg, mods=self.mods)

    def with_mods(self, mods: int | Mod) -> "Style":
        return Style(fg=self.fg, bg=self.bg, mods=int(mods))

    def add_mods(self, mods: int | Mod) -> "Style":
        return Style(fg=self.fg, bg=self.bg, mods=(int(self.mods) | int(mods)))

    def bold(self) -> "Style":
        return self.add_mods(Mod.BOLD)

    def italic(self) -> "Style":
        return self.add_mods(Mod.ITALIC)

    def underlined(self) -> "Style":
        return self.add_mods(Mod.UNDERLINED)

    def reversed(self) -> "Style":
        return self.add_mods(Mod.REVERSED)

    def dim(self) -> "Style":
        return self.add_mods(Mod.DIM)

    def crossed_out(self) -> "Style":
        return self.add_mods(Mod.CROSSED_OUT)


def rgb(r: int, g: int, b: int) -> int:
    return RGB_FLAG | ((int(r) & 0xFF) << 16) | ((int(g) & 0xFF) << 8) | (int(b) & 0xFF)


def color_indexed(i: int) -> int:
    return INDEXED_FLAG | (int(i) & 0xFF)


def decode_color(c: ColorLike) -> tuple[str, object]:
    """Split a packed colour into ``("named", Color)``, ``("indexed", n)`` or
    ``("rgb", (r, g, b))``."""
    if isinstance(c, enum.IntEnum):
        return ("named", Color(int(c)))
    v = int(c)
    if v & RGB_FLAG:
        return ("rgb", ((v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF))
    if v & INDEXED_FLAG:
        return ("indexed", v & 0xFF)
    return ("named", Color(v))


__all__ = [
    "Style",
    "ColorLike",
    "rgb",
    "color_indexed",
    "decode_color",
]
