from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .evaluation import evaluate
from .symmetry import is_symmetric
from .types import Player, Point

ROWS = 4
COLUMNS = 4
WIN_LENGTH = 4


@dataclass(frozen=True)
class BoardConfig:
    """Shape of an m,n,k game: grid size and the run length that wins."""

    rows: int = ROWS
    columns: int = COLUMNS
    win_length: int = WIN_LENGTH

    def __post_init__(self) -> None:
        if self.rows < 1 or self.columns < 1:
            raise ValueError(f"Board must be at least 1x1, got {self.rows}x{self.columns}")
        if not (1 <= self.win_length <= max(self.rows, self.columns)):
            raise ValueError(
                f"Win length {self.win_length} does not fit a "
                f"{self.rows}x{self.columns} board"
            )

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns

    @property
    def is_square(self) -> bool:
        return self.rows == self.columns

    def on_grid(self, point: Point) -> bool:
        return 0 <= point.row < self.rows and 0 <= point.col < self.columns

    def index_of(self, point: Point) -> int:
        return point.row * self.columns + point.col

    def point_of(self, index: int) -> Point:
        return Point(index // self.columns, index % self.columns)


DEFAULT_BOARD = BoardConfig()


def parse_coordinate(text: str, config: BoardConfig = DEFAULT_BOARD) -> Optional[Point]:
    """Parse an 'x y' (or 'x,y') coordinate string into a Point.

    x is the column and y the row, both 0-based.
    Returns None if the string is invalid or off the board.
    """
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        x, y = int(parts[0]), int(parts[1])
    except ValueError:
        return None
    point = Point(y, x)
    if not config.on_grid(point):
        return None
    return point


def format_point(point: Point) -> str:
    """Format a Point as the 'x y' pair a human would type."""
    return f"{point.col} {point.row}"


@dataclass
class Move:
    point: Point
    player: Player

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """Rectangular grid of marks. Absent points are blank."""

    def __init__(self, config: BoardConfig = DEFAULT_BOARD) -> None:
        self.config = config
        self._grid: dict[Point, Player] = {}

    def place(self, point: Point, player: Player) -> None:
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point] = player

    def get(self, point: Point) -> Optional[Player]:
        return self._grid.get(point)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def is_on_grid(self, point: Point) -> bool:
        return self.config.on_grid(point)

    def points(self) -> Iterator[Point]:
        for r in range(self.config.rows):
            for c in range(self.config.columns):
                yield Point(r, c)

    def copy(self) -> Board:
        other = Board(self.config)
        other._grid = dict(self._grid)
        return other

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.config == other.config and self._grid == other._grid

    __hash__ = None  # mutable


class MNKGameState:
    """Full game state for an m,n,k game (default 4x4, 4 in a row).

    Mutated only through apply_move(). Search code explores hypothetical
    moves on clones so the original is never disturbed.
    """

    def __init__(self, config: BoardConfig = DEFAULT_BOARD) -> None:
        self.config = config
        self.board = Board(config)
        self.current_player = Player.X
        self.moves: list[Move] = []
        self.available_moves: set[int] = set(range(config.cell_count))
        self.played_moves: set[int] = set()
        self.position_hash = 0
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        """The winning player, or None after a draw."""
        assert self._is_over, "Game is not over yet"
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    @property
    def move_count(self) -> int:
        return len(self.moves)

    def legal_moves(self) -> list[int]:
        if self._is_over:
            return []
        return sorted(self.available_moves)

    def is_blank(self, index: int) -> bool:
        return self.board.is_empty(self.config.point_of(index))

    def apply_move(self, index: int) -> bool:
        """Mark `index` for the current player and advance the turn.

        Returns False, leaving the state untouched, if the cell is taken.
        """
        assert not self._is_over, "Game is already over"
        assert 0 <= index < self.config.cell_count, f"Index {index} is off the grid"

        point = self.config.point_of(index)
        if not self.board.is_empty(point):
            return False

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point=point, player=player))
        self.available_moves.discard(index)
        self.played_moves.add(index)
        self.position_hash += player.value * 3**index

        if self._check_win(point, player):
            self._winner = player
            self._is_over = True
        elif self.board.occupied_count == self.config.cell_count:
            self._is_over = True
        else:
            self.current_player = player.other
        return True

    def play(self, point: Point) -> bool:
        return self.apply_move(self.config.index_of(point))

    def _check_win(self, point: Point, player: Player) -> bool:
        """Check if placing at `point` completes a winning run for `player`."""
        win_length = self.config.win_length
        directions = [(0, 1), (1, 0), (1, 1), (1, -1)]
        for dr, dc in directions:
            count = 1
            # Count forward
            for step in range(1, win_length):
                p = Point(point.row + dr * step, point.col + dc * step)
                if not self.board.is_on_grid(p) or self.board.get(p) is not player:
                    break
                count += 1
            # Count backward
            for step in range(1, win_length):
                p = Point(point.row - dr * step, point.col - dc * step)
                if not self.board.is_on_grid(p) or self.board.get(p) is not player:
                    break
                count += 1
            if count >= win_length:
                return True
        return False

    def evaluation(self) -> int:
        return evaluate(self)

    def has_symmetry(self, other: MNKGameState) -> bool:
        return is_symmetric(self.board, other.board)

    def children(self) -> list[MNKGameState]:
        """Successor states, with symmetric duplicates dropped in the opening.

        Symmetry is only checked while fewer than max(rows, columns) moves
        have been played.
        """
        children: list[MNKGameState] = []
        if self._is_over:
            return children

        check_symmetry = self.move_count < max(self.config.rows, self.config.columns)
        for index in self.legal_moves():
            child = self.clone()
            child.apply_move(index)
            if check_symmetry and any(child.has_symmetry(c) for c in children):
                continue
            children.append(child)
        return children

    def children_with_actions(self) -> dict[MNKGameState, int]:
        """Every successor state mapped to the index that produces it."""
        children: dict[MNKGameState, int] = {}
        if self._is_over:
            return children

        for index in self.legal_moves():
            child = self.clone()
            child.apply_move(index)
            children[child] = index
        return children

    def clone(self) -> MNKGameState:
        other = MNKGameState(self.config)
        other.board = self.board.copy()
        other.current_player = self.current_player
        other.moves = list(self.moves)
        other.available_moves = set(self.available_moves)
        other.played_moves = set(self.played_moves)
        other.position_hash = self.position_hash
        other._winner = self._winner
        other._is_over = self._is_over
        return other

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, MNKGameState):
            return NotImplemented
        if self.position_hash != other.position_hash:
            return False
        return self.board == other.board

    def __hash__(self) -> int:
        return self.position_hash

    def __repr__(self) -> str:
        return f"MNKGameState({self.config.rows}x{self.config.columns}, moves={self.move_count})"
