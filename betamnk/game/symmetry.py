"""
Board symmetries for rectangular m,n grids.
- Any rectangle has the mirror images and the half turn.
- A square board adds both diagonal reflections and the quarter turns.
- Two boards are symmetric if one maps cell-for-cell onto the other.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from .types import Point

if TYPE_CHECKING:
    from .board import Board, BoardConfig

RECTANGLE_SYMS = ["hflip", "vflip", "rot180"]
SQUARE_SYMS = ["transpose", "anti_transpose", "rot90", "rot270"]


def symmetries(config: BoardConfig) -> list[str]:
    if config.is_square:
        return RECTANGLE_SYMS + SQUARE_SYMS
    return RECTANGLE_SYMS[:]


def transform_point(point: Point, kind: str, rows: int, columns: int) -> Point:
    r, c = point
    if kind == "hflip":
        return Point(r, columns - c - 1)
    elif kind == "vflip":
        return Point(rows - r - 1, c)
    elif kind == "rot180":
        return Point(rows - r - 1, columns - c - 1)
    elif kind == "transpose":
        return Point(c, r)
    elif kind == "anti_transpose":
        return Point(rows - c - 1, columns - r - 1)
    elif kind == "rot90":
        return Point(c, columns - r - 1)
    elif kind == "rot270":
        return Point(rows - c - 1, r)
    else:
        raise ValueError(f"Unknown transformation: {kind}")


def matches_under(a: Board, b: Board, kind: str) -> bool:
    rows, columns = a.config.rows, a.config.columns
    return all(
        a.get(p) is b.get(transform_point(p, kind, rows, columns))
        for p in a.points()
    )


def is_symmetric(a: Board, b: Board) -> bool:
    """True if `b` is an image of `a` under one of the board's symmetries."""
    if a.config != b.config or a.occupied_count != b.occupied_count:
        return False
    return any(matches_under(a, b, kind) for kind in symmetries(a.config))
