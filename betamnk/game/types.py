from __future__ import annotations

import enum
from typing import NamedTuple


class Player(enum.Enum):
    X = 1
    O = 2

    @property
    def other(self) -> Player:
        return Player.O if self is Player.X else Player.X

    @property
    def is_maximizer(self) -> bool:
        return self is Player.X

    def __str__(self) -> str:
        return self.name


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = top
    col: int  # 0-indexed, 0 = left
