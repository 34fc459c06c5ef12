from __future__ import annotations
from dataclasses import dataclass

from wumpus_core.bitboard import BitBoard
from wumpus_core.grid import START
from wumpus_core.observations import ObservationStore


@dataclass(frozen=True, slots=True)
class Knowledge:
    """What the agent can prove about the cave from its observations so far.

    non_wumpus      - squares that cannot hold the Wumpus
    non_pit         - squares that cannot hold a pit
    must_pit        - squares that are the only possible source of some breeze
    possible_wumpus - squares that may still hold the Wumpus
    """

    non_wumpus: BitBoard
    non_pit: BitBoard
    must_pit: BitBoard
    possible_wumpus: BitBoard
    wumpus_located: bool = False  # possible_wumpus was a single square before pit propagation

    @property
    def safe(self) -> BitBoard:
        """Squares proven to hold neither a pit nor the Wumpus."""
        return self.non_wumpus & self.non_pit

    def frontier(self, loaded: BitBoard) -> BitBoard:
        """Safe squares the agent has not stood on yet."""
        return self.safe - loaded


def infer(obs: ObservationStore) -> Knowledge:
    """Derives the four inference sets from scratch.

    1) A loaded square is neither pit nor Wumpus, and every neighbour of a
       loaded square without stench (breeze) is free of the Wumpus (pits).
    2) There is exactly one Wumpus, so it is adjacent to every stench square.
       If that leaves a single candidate, everything else is Wumpus-free and
       the candidate itself is not a pit.
    3) A breeze square with one unresolved neighbour forces a pit there; a pit
       square cannot hold the Wumpus. This runs once, not to a fixed point.
    """
    loaded = obs.loaded

    # the start square is safe by the rules, but sensed nothing until recorded
    non_wumpus = loaded | START | (loaded - obs.stench).neighbors()
    possible_wumpus = ~non_wumpus
    for s in obs.stench:
        possible_wumpus &= BitBoard.of(s).neighbors()
    located = possible_wumpus.size() == 1
    if located:
        non_wumpus = ~possible_wumpus

    non_pit = loaded | START | (loaded - obs.breeze).neighbors()
    if located:
        non_pit |= possible_wumpus

    must_pit = BitBoard.empty()
    for b in obs.breeze:
        candidates = BitBoard.of(b).neighbors() - non_pit
        if candidates.size() == 1:
            must_pit |= candidates
            possible_wumpus -= candidates
            non_wumpus |= candidates

    return Knowledge(
        non_wumpus=non_wumpus,
        non_pit=non_pit,
        must_pit=must_pit,
        possible_wumpus=possible_wumpus,
        wumpus_located=located,
    )
