from __future__ import annotations
from enum import Enum
import logging
import random
from typing import List, Optional

import numpy as np

from search.bfs import directions, distance, reachable
from wumpus_core.bitboard import BitBoard
from wumpus_core.grid import START, Action, Direction, Position
from wumpus_core.level import Level
from wumpus_core.observations import ObservationStore

from .knowledge import Knowledge, infer

logger = logging.getLogger(__name__)

CENTER = 1.5


class PolicyError(RuntimeError):
    """The knowledge base and the game disagree; planning cannot continue."""


class Mode(Enum):
    RANDOM = "random"    # always a random move
    RETURN = "return"    # random until the gold is picked up, then the safe way home
    EXPLORE = "explore"  # walk the safe frontier until the gold is picked up, then home


def rank_frontier(agent: Position, candidates: List[Position], safe: BitBoard) -> List[Position]:
    """Orders exploration targets, best first.

    Keys, most significant first:
      1) path length from the agent, ascending
      2) Chebyshev distance from the grid centre, descending (edges and corners first)
      3) path length from the start, descending
    Full ties keep row-major order.
    """
    if not candidates:
        return []
    d_agent = np.array([distance(agent, c, safe) for c in candidates], dtype=float)
    rim = np.array([max(abs(c.row - CENTER), abs(c.col - CENTER)) for c in candidates], dtype=float)
    d_start = np.array([distance(START, c, safe) for c in candidates], dtype=float)
    # lexsort: last key is primary; stable on full ties
    order = np.lexsort((-d_start, -rim, d_agent))
    return [candidates[i] for i in order]


class Policy:
    """Chooses one action per turn from the observations gathered so far.

    The policy never shoots. `rng` drives the random fallback; pass a seeded
    random.Random for reproducible games.
    """

    def __init__(self, mode: Mode = Mode.EXPLORE, rng: Optional[random.Random] = None) -> None:
        self.mode = mode
        self.rng = rng or random.Random()

    def choose(self, level: Level, obs: ObservationStore) -> Action:
        if self.mode is Mode.RANDOM:
            return self.fallback()
        gold_picked_up = not level.has_gold()
        if gold_picked_up:
            return self.return_home(level.agent_position(), obs)
        if self.mode is Mode.EXPLORE:
            return self.explore(level.agent_position(), obs)
        return self.fallback()

    def fallback(self) -> Action:
        """Any of the four directions; bumping a wall is harmless."""
        d = self.rng.choice(list(Direction))
        logger.debug("fallback move %s", d.name)
        return Action.move(d)

    def return_home(self, agent: Position, obs: ObservationStore) -> Action:
        knowledge = infer(obs)
        safe = knowledge.safe
        path = directions(agent, START, safe)
        if path is None:
            raise PolicyError(_diagnose("no safe path back to the start", agent, START, obs, knowledge))
        if not path:
            raise PolicyError(_diagnose("already on the start square holding the gold", agent, START, obs, knowledge))
        return Action.move(path[0])

    def explore(self, agent: Position, obs: ObservationStore) -> Action:
        knowledge = infer(obs)
        safe = knowledge.safe
        candidates = knowledge.frontier(obs.loaded).positions()
        if not candidates:
            logger.debug("no safe frontier at %s", agent)
            return self.fallback()
        target = rank_frontier(agent, candidates, safe)[0]
        path = directions(agent, target, safe)
        if path is None:
            logger.debug("frontier square %s unreachable from %s", target, agent)
            return self.fallback()
        if not path:
            raise PolicyError(_diagnose("standing on an unexplored square", agent, target, obs, knowledge))
        logger.debug("exploring towards %s via %s", target, path[0].name)
        return Action.move(path[0])


def _diagnose(reason: str, agent: Position, target: Position, obs: ObservationStore, knowledge: Knowledge) -> str:
    return (
        f"{reason}: agent={agent} target={target} "
        f"loaded={obs.loaded!r} breeze={obs.breeze!r} stench={obs.stench!r} "
        f"safe={knowledge.safe!r} reachable={reachable(agent, knowledge.safe)!r}"
    )
