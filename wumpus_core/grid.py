from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

__all__ = [
    "SIZE",
    "STRIDE",
    "VALID_MASK",
    "Position",
    "Direction",
    "EndType",
    "ActionType",
    "Action",
    "START",
    "ALL_SLOTS",
    "ALL_POSITIONS",
    "idx",
    "position_at",
    "parse_direction",
    "parse_action",
]

SIZE = 4
STRIDE = 5  # one spare column per row keeps horizontal shifts from wrapping into the grid

# bit idx(r, c) for every 0 <= r, c <= 3
VALID_MASK = 0b1111011110111101111


def idx(row: int, col: int) -> int:
    return row * STRIDE + col


class Direction(Enum):
    """Orthogonal directions. Iteration order UP, DOWN, LEFT, RIGHT is relied on by the planner."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


class EndType(Enum):
    PIT = "pit"
    WUMPUS = "wumpus"
    WIN = "win"


class ActionType(Enum):
    MOVE = "move"
    SHOOT = "shoot"


@dataclass(frozen=True, slots=True, order=True)
class Position:
    """A square of the 4x4 cave. Row 0 is the top row."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < SIZE and 0 <= self.col < SIZE):
            raise ValueError(f"position out of the grid: ({self.row}, {self.col})")

    @property
    def index(self) -> int:
        return idx(self.row, self.col)

    @property
    def bit(self) -> int:
        return 1 << self.index

    def step(self, direction: Direction) -> Optional[Position]:
        """Neighbour in the given direction, None when that would leave the grid."""
        dr, dc = direction.delta
        r, c = self.row + dr, self.col + dc
        if 0 <= r < SIZE and 0 <= c < SIZE:
            return Position(r, c)
        return None

    def neighbors(self) -> Iterator[Position]:
        """4-neighborhood without diagonals, in Direction order."""
        for d in Direction:
            nb = self.step(d)
            if nb is not None:
                yield nb

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, slots=True)
class Action:
    kind: ActionType
    direction: Direction

    @classmethod
    def move(cls, direction: Direction) -> Action:
        return cls(ActionType.MOVE, direction)

    @classmethod
    def shoot(cls, direction: Direction) -> Action:
        return cls(ActionType.SHOOT, direction)


START = Position(0, 0)

# ---- fixed enumerations, built once at import

# every slot of the stride-5 layout as (row, col); column 4 is the spare column
ALL_SLOTS: Tuple[Tuple[int, int], ...] = tuple((r, c) for r in range(STRIDE) for c in range(STRIDE))

# the 16 real squares in row-major order
ALL_POSITIONS: Tuple[Position, ...] = tuple(
    Position(r, c) for (r, c) in ALL_SLOTS if r < SIZE and c < SIZE
)

_BY_INDEX = {p.index: p for p in ALL_POSITIONS}


def position_at(index: int) -> Position:
    try:
        return _BY_INDEX[index]
    except KeyError:
        raise ValueError(f"index {index} is not a grid square") from None


# ---- parsing at the engine boundary

def parse_direction(text: str) -> Optional[Direction]:
    """Parses 'up' / 'DOWN' / ' Left ' into a Direction; None when it is not one."""
    try:
        return Direction[text.strip().upper()]
    except KeyError:
        return None


def parse_action(text: str) -> Optional[Action]:
    """Parses "<dir>" or "SHOOT <dir>"; None on anything else."""
    words: List[str] = text.strip().upper().split()
    if len(words) == 1:
        d = parse_direction(words[0])
        return Action.move(d) if d is not None else None
    if len(words) == 2 and words[0] == "SHOOT":
        d = parse_direction(words[1])
        return Action.shoot(d) if d is not None else None
    return None
