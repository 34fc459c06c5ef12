from __future__ import annotations
import logging
import random
from typing import Optional

from .bitboard import BitBoard
from .grid import START, Action, ActionType, Direction, EndType, Position

logger = logging.getLogger(__name__)

MOVE_COST = 1
SHOT_COST = 10
DEATH_PENALTY = 1000
WIN_REWARD = 1000

PIT_DENSITY = 0.2
MAX_OCCUPIED = 14  # start square + pits; leaves room for the Wumpus and the gold


class Level:
    """A running game: the hidden cave plus the agent's position, arrow and score.

    Breeze is felt next to any pit, stench next to the Wumpus (also after it
    died), glitter on the gold's square while the gold lies there.
    """

    def __init__(self, pits: BitBoard, wumpus: Position, gold: Position) -> None:
        if pits.contains(START) or wumpus == START or gold == START:
            raise ValueError("the start square must be empty")
        if pits.contains(wumpus) or pits.contains(gold):
            raise ValueError("the Wumpus and the gold cannot share a square with a pit")
        if wumpus == gold:
            raise ValueError("the Wumpus cannot sit on the gold")
        self.pits = pits
        self.wumpus = wumpus
        self.gold = gold
        self.breeze_map = pits.neighbors()
        self.stench_map = BitBoard.of(wumpus).neighbors()

        self._agent = START
        self._has_wumpus = True
        self._has_arrow = True
        self._has_gold = True
        self._end_type: Optional[EndType] = None
        self.score = 0
        self.shot_origin: Optional[Position] = None
        self.shot_direction: Optional[Direction] = None
        self.last_action: Optional[Action] = None

    # ---- actions
    def move(self, direction: Direction) -> bool:
        """Moves the agent; False when it bumps a wall or the game is over.

        A move costs 1 point. Pits and a live Wumpus end the game with -1000,
        stepping on the gold picks it up, and coming back to the start without
        gold left in the cave wins +1000.
        """
        self.last_action = Action.move(direction)
        if self.has_ended():
            return False
        nxt = self._agent.step(direction)
        if nxt is None:
            return False
        self._agent = nxt
        self.score -= MOVE_COST
        if self.pits.contains(nxt):
            self._finish(EndType.PIT, -DEATH_PENALTY)
        if nxt == self.wumpus and self._has_wumpus:
            self._finish(EndType.WUMPUS, -DEATH_PENALTY)
        if nxt == self.gold and self._has_gold:
            self._has_gold = False
        if nxt == START and not self._has_gold and not self.has_ended():
            self._finish(EndType.WIN, WIN_REWARD)
        return True

    def shoot(self, direction: Direction) -> bool:
        """Fires the only arrow along a straight line; kills the Wumpus if it is on it."""
        self.last_action = Action.shoot(direction)
        if self.has_ended() or not self._has_arrow:
            return False
        self.shot_origin = self._agent
        self.shot_direction = direction
        self.score -= SHOT_COST
        self._has_arrow = False
        cur = self._agent.step(direction)
        while cur is not None:
            if cur == self.wumpus:
                self._has_wumpus = False
            cur = cur.step(direction)
        return True

    def apply(self, action: Action) -> bool:
        if action.kind is ActionType.SHOOT:
            return self.shoot(action.direction)
        return self.move(action.direction)

    def _finish(self, end_type: EndType, delta: int) -> None:
        self.score += delta
        self._end_type = end_type

    # ---- queries
    def agent_position(self) -> Position:
        return self._agent

    def has_wumpus(self) -> bool:
        return self._has_wumpus

    def has_arrow(self) -> bool:
        return self._has_arrow

    def has_gold(self) -> bool:
        """True while the gold still lies in the cave."""
        return self._has_gold

    def has_ended(self) -> bool:
        return self._end_type is not None

    def end_type(self) -> Optional[EndType]:
        return self._end_type

    def detects_breeze(self) -> bool:
        return self.breeze_map.contains(self._agent)

    def detects_stench(self) -> bool:
        return self.stench_map.contains(self._agent)

    def detects_glitter(self) -> bool:
        return self._agent == self.gold

    def __repr__(self) -> str:
        return (f"Level(pits={self.pits!r}, wumpus={self.wumpus}, gold={self.gold}, "
                f"agent={self._agent}, score={self.score})")


def _random_empty(occupied: BitBoard, rng: random.Random) -> Position:
    free = occupied.complement().positions()
    return rng.choice(free)


def generate_level(rng: Optional[random.Random] = None, pit_density: float = PIT_DENSITY) -> Level:
    """Random cave: independent pits, then the Wumpus and the gold on free squares."""
    rng = rng or random.Random()
    attempts = 0
    while True:
        attempts += 1
        occupied = BitBoard.of(START)
        pits = BitBoard.random(rng, pit_density) - occupied
        occupied |= pits
        if occupied.size() <= MAX_OCCUPIED:
            break
        logger.debug("too many pits (%d), retrying", pits.size())
    wumpus = _random_empty(occupied, rng)
    occupied |= wumpus
    gold = _random_empty(occupied, rng)
    logger.debug("generated level after %d attempt(s): pits=%r wumpus=%s gold=%s",
                 attempts, pits, wumpus, gold)
    return Level(pits, wumpus, gold)
