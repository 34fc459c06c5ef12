from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from .bitboard import BitBoard
from .grid import ALL_POSITIONS, START, Direction, Position
from .level import Level
from .observations import ObservationStore

# loaded, breeze, stench planes + shot origin one-hot + shot direction one-hot + arrow_hit + has_gold
VECTOR_LEN = 3 * len(ALL_POSITIONS) + len(ALL_POSITIONS) + len(Direction) + 2


@dataclass(frozen=True, slots=True)
class StateID:
    """Fingerprint of what the agent has observed, without the score.

    An arrow that was never fired is stored as a miss shot UP from the start
    square. Equality and hashing cover every field.
    """

    loaded: BitBoard
    breeze: BitBoard
    stench: BitBoard
    shot_origin: Position = START
    shot_direction: Direction = Direction.UP
    arrow_hit: bool = False
    has_gold: bool = True  # gold still lies in the cave

    @classmethod
    def from_game(cls, level: Level, obs: ObservationStore) -> StateID:
        if level.has_arrow() or level.shot_origin is None or level.shot_direction is None:
            return cls(obs.loaded, obs.breeze, obs.stench, has_gold=level.has_gold())
        return cls(
            obs.loaded,
            obs.breeze,
            obs.stench,
            shot_origin=level.shot_origin,
            shot_direction=level.shot_direction,
            arrow_hit=not level.has_wumpus(),
            has_gold=level.has_gold(),
        )

    def as_vector(self) -> np.ndarray:
        """Flat float32 encoding for numeric consumers."""
        out = np.zeros(VECTOR_LEN, dtype=np.float32)
        n = len(ALL_POSITIONS)
        for k, board in enumerate((self.loaded, self.breeze, self.stench)):
            out[k * n:(k + 1) * n] = _plane(board)
        off = 3 * n
        out[off + ALL_POSITIONS.index(self.shot_origin)] = 1.0
        off += n
        out[off + list(Direction).index(self.shot_direction)] = 1.0
        off += len(Direction)
        out[off] = float(self.arrow_hit)
        out[off + 1] = float(self.has_gold)
        return out


def _plane(board: BitBoard) -> np.ndarray:
    return np.array([board.contains(p) for p in ALL_POSITIONS], dtype=np.float32)
