from __future__ import annotations
from collections import deque
import math
from typing import Dict, List, Optional, Tuple

from wumpus_core.bitboard import BitBoard
from wumpus_core.grid import Direction, Position


def backtrack(
    source: Position,
    target: Position,
    parent: Dict[Position, Tuple[Position, Direction]],
) -> List[Direction]:
    path: List[Direction] = []
    cur = target
    while cur != source:
        prev, d = parent[cur]
        path.append(d)
        cur = prev
    path.reverse()
    return path


def directions(source: Position, target: Position, passable: BitBoard) -> Optional[List[Direction]]:
    """Shortest move sequence from source to target through passable squares.

    The source itself need not be passable. Returns [] when source == target
    and None when the target cannot be reached. Successors are expanded in
    Direction order (UP, DOWN, LEFT, RIGHT), so ties always resolve the same way.
    """
    if source == target:
        return []
    visited = ~passable | source
    parent: Dict[Position, Tuple[Position, Direction]] = {}
    q = deque([source])

    while q:
        cur = q.popleft()
        for d in Direction:
            nb = cur.step(d)
            if nb is None or visited.contains(nb):
                continue
            parent[nb] = (cur, d)
            if nb == target:
                return backtrack(source, target, parent)
            visited |= nb
            q.append(nb)
    return None


def distance(source: Position, target: Position, passable: BitBoard) -> float:
    """Length of the shortest path, math.inf when unreachable."""
    path = directions(source, target, passable)
    if path is None:
        return math.inf
    return len(path)


def reachable(source: Position, passable: BitBoard) -> BitBoard:
    """All squares reachable from source through passable squares (source included)."""
    seen = BitBoard.of(source)
    frontier = seen
    while frontier:
        frontier = frontier.neighbors() & passable & ~seen
        seen |= frontier
    return seen
