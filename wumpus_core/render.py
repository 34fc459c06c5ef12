from __future__ import annotations
from typing import TYPE_CHECKING, List

from .bitboard import BitBoard
from .grid import SIZE, EndType, Position
from .level import Level
from .observations import ObservationStore

if TYPE_CHECKING:
    from agent.knowledge import Knowledge


def _grid(cell) -> str:
    out_lines: List[str] = []
    for r in range(SIZE):
        out_lines.append(" ".join(cell(Position(r, c)) for c in range(SIZE)))
    return "\n".join(out_lines)


def render_bitboard(board: BitBoard, on: str = "#", off: str = ".") -> str:
    return _grid(lambda p: on if board.contains(p) else off)


def render_level(level: Level) -> str:
    """The full cave, hidden contents included."""
    def cell(p: Position) -> str:
        if p == level.agent_position():
            return "A"
        if p == level.wumpus:
            return "W" if level.has_wumpus() else "w"
        if level.pits.contains(p):
            return "P"
        if p == level.gold and level.has_gold():
            return "G"
        return "."
    return _grid(cell)


def render_knowledge(knowledge: Knowledge, obs: ObservationStore, agent: Position) -> str:
    """The agent's view: A agent, o visited, s safe, P forced pit, W located Wumpus, ? unknown."""
    safe = knowledge.safe
    def cell(p: Position) -> str:
        if p == agent:
            return "A"
        if obs.loaded.contains(p):
            return "o"
        if safe.contains(p):
            return "s"
        if knowledge.must_pit.contains(p):
            return "P"
        if knowledge.wumpus_located and knowledge.possible_wumpus.contains(p):
            return "W"
        return "?"
    return _grid(cell)


def describe_cell(obs: ObservationStore, position: Position, agent: Position) -> str:
    lines = []
    if position == agent:
        lines.append("You are here.")
    if obs.breeze.contains(position):
        lines.append("You feel a breeze.")
    if obs.stench.contains(position):
        lines.append("You smell a stench.")
    if obs.glitter.contains(position):
        lines.append("You see glitter.")
    return "\n".join(lines)


_END_MESSAGES = {
    EndType.PIT: "You fell into a pit.",
    EndType.WUMPUS: "You were eaten by the Wumpus.",
    EndType.WIN: "You brought the gold back!",
}


def describe_status(level: Level) -> str:
    end = level.end_type()
    if end is not None:
        return f"{_END_MESSAGES[end]}\nGame over.\nScore: {level.score}"
    lines = [
        "The Wumpus still dwells." if level.has_wumpus() else "The Wumpus is dead.",
        "You have an arrow." if level.has_arrow() else "You used your arrow.",
        "You have to retrieve the gold." if level.has_gold() else "You have to bring back the gold.",
        f"Current score: {level.score}",
    ]
    return "\n".join(lines)
