from __future__ import annotations
from typing import TYPE_CHECKING

from .bitboard import BitBoard
from .grid import Position

if TYPE_CHECKING:
    from .level import Level


class ObservationStore:
    """Sensory history of one game.

    loaded  - squares the agent has stood on
    breeze  - loaded squares where a breeze was felt
    stench  - loaded squares where a stench was smelled
    glitter - loaded squares where the gold glittered
    The sensed boards are always subsets of loaded.
    """

    __slots__ = ("_loaded", "_breeze", "_stench", "_glitter")

    def __init__(self) -> None:
        self._loaded = BitBoard.empty()
        self._breeze = BitBoard.empty()
        self._stench = BitBoard.empty()
        self._glitter = BitBoard.empty()

    def record(self, position: Position, breeze: bool = False, stench: bool = False, glitter: bool = False) -> None:
        self._loaded |= position
        if breeze:
            self._breeze |= position
        if stench:
            self._stench |= position
        if glitter:
            self._glitter |= position

    def record_from(self, level: Level) -> None:
        """Records what the agent senses on its current square."""
        self.record(
            level.agent_position(),
            breeze=level.detects_breeze(),
            stench=level.detects_stench(),
            glitter=level.detects_glitter(),
        )

    @property
    def loaded(self) -> BitBoard:
        return self._loaded

    @property
    def breeze(self) -> BitBoard:
        return self._breeze

    @property
    def stench(self) -> BitBoard:
        return self._stench

    @property
    def glitter(self) -> BitBoard:
        return self._glitter

    def __repr__(self) -> str:
        return (f"ObservationStore(loaded={self._loaded!r}, breeze={self._breeze!r}, "
                f"stench={self._stench!r}, glitter={self._glitter!r})")
