from __future__ import annotations
from dataclasses import dataclass
import random
from typing import Iterable, Iterator, List, Optional, Union

from .grid import ALL_POSITIONS, STRIDE, VALID_MASK, Position, position_at

__all__ = [
    "BitBoard",
    "CardinalityError",
    "has_bit",
    "iter_bits",
]


# ---- raw word helpers

def has_bit(mask: int, i: int) -> bool:
    return (mask >> i) & 1 == 1


def iter_bits(mask: int) -> Iterator[int]:
    """Iterates over the indices of set bits, lowest first."""
    i = 0
    m = mask
    while m:
        if m & 1:
            yield i
        m >>= 1
        i += 1


class CardinalityError(ValueError):
    """A bitboard was asked for its single member but holds zero or several."""

    def __init__(self, board: BitBoard) -> None:
        super().__init__(
            f"expected exactly one square, got {board.size()} (word {board.word:#022b})"
        )
        self.board = board


Operand = Union["BitBoard", Position]


def _word(other: Operand) -> int:
    if isinstance(other, Position):
        return other.bit
    return other.word


@dataclass(frozen=True, slots=True)
class BitBoard:
    """
    Immutable set of squares of the 4x4 cave, stored as a 20-bit word.

    Bit idx(r, c) = 5*r + c marks membership of (r, c). The spare fifth
    column of each row is never set, which lets the 4-neighbour dilation be
    computed with plain shifts and a single mask.
    Set operations accept another BitBoard or a single Position; augmented
    assignment (``b |= p``) rebinds to a new value.
    """

    word: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "word", self.word & VALID_MASK)

    # ---- constructors
    @classmethod
    def empty(cls) -> BitBoard:
        return cls(0)

    @classmethod
    def full(cls) -> BitBoard:
        return cls(VALID_MASK)

    @classmethod
    def of(cls, position: Position) -> BitBoard:
        return cls(position.bit)

    @classmethod
    def from_positions(cls, positions: Iterable[Position]) -> BitBoard:
        w = 0
        for p in positions:
            w |= p.bit
        return cls(w)

    @classmethod
    def random(cls, rng: Optional[random.Random] = None, density: float = 0.5) -> BitBoard:
        """Each square independently with probability `density`."""
        rng = rng or random.Random()
        w = 0
        for p in ALL_POSITIONS:
            if rng.random() < density:
                w |= p.bit
        return cls(w)

    # ---- set algebra
    def contains(self, position: Position) -> bool:
        return has_bit(self.word, position.index)

    def union(self, other: Operand) -> BitBoard:
        return BitBoard(self.word | _word(other))

    def intersect(self, other: Operand) -> BitBoard:
        return BitBoard(self.word & _word(other))

    def difference(self, other: Operand) -> BitBoard:
        return BitBoard(self.word & ~_word(other))

    def complement(self) -> BitBoard:
        return BitBoard(~self.word & VALID_MASK)

    def neighbors(self) -> BitBoard:
        """Squares orthogonally adjacent to some member; members themselves are not kept."""
        w = self.word
        return BitBoard((w << 1 | w >> 1 | w << STRIDE | w >> STRIDE) & VALID_MASK)

    def issubset(self, other: Operand) -> bool:
        return self.word & ~_word(other) == 0

    # ---- cardinality / enumeration
    def size(self) -> int:
        return bin(self.word).count("1")

    def positions(self) -> List[Position]:
        """Members in row-major order."""
        return [position_at(i) for i in iter_bits(self.word)]

    def as_singleton(self) -> Position:
        if self.size() != 1:
            raise CardinalityError(self)
        return position_at(self.word.bit_length() - 1)

    # ---- python protocol
    __or__ = union
    __and__ = intersect
    __sub__ = difference
    __invert__ = complement
    __contains__ = contains
    __len__ = size

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions())

    def __bool__(self) -> bool:
        return self.word != 0

    def __repr__(self) -> str:
        return f"BitBoard({', '.join(str(p) for p in self.positions())})"
