from typing import List, Optional
from .bitboard import BitBoard
from .grid import SIZE, START, Position
from .level import Level

TOK_EMPTY = "."
TOK_PIT = "P"
TOK_WUMPUS = "W"
TOK_GOLD = "G"


def parse_level_str(level_str: str) -> Level:
    """Parses an ASCII cave into a Level.

    Four non-blank lines of four characters, row 0 first:
      '.': empty
      'P': pit
      'W': the Wumpus (exactly one)
      'G': the gold (exactly one)
    The top-left square is the start and must be empty.
    """
    lines = [line.strip() for line in level_str.splitlines() if line.strip() != ""]
    if not lines:
        raise ValueError("Empty level")
    if len(lines) != SIZE or any(len(line) != SIZE for line in lines):
        raise ValueError(f"Level must be {SIZE} lines of {SIZE} characters")

    pits = BitBoard.empty()
    wumpus: Optional[Position] = None
    gold: Optional[Position] = None

    for r, line in enumerate(lines):
        for c, ch in enumerate(line.upper()):
            p = Position(r, c)
            if ch == TOK_PIT:
                pits |= p
            elif ch == TOK_WUMPUS:
                if wumpus is not None:
                    raise ValueError("More than one Wumpus 'W' in level")
                wumpus = p
            elif ch == TOK_GOLD:
                if gold is not None:
                    raise ValueError("More than one gold 'G' in level")
                gold = p
            elif ch != TOK_EMPTY:
                raise ValueError(f"Unknown tile {ch!r} at {p}")

    if wumpus is None:
        raise ValueError("No Wumpus 'W' found in level")
    if gold is None:
        raise ValueError("No gold 'G' found in level")
    if pits.contains(START) or START in (wumpus, gold):
        raise ValueError("Start square (0, 0) must be empty")
    return Level(pits, wumpus, gold)


def parse_level_file(path: str) -> Level:
    with open(path, "r", encoding="utf-8") as f:
        return parse_level_str(f.read())


def level_to_str(level: Level) -> str:
    """Inverse of parse_level_str for the hidden layout (the agent is not drawn)."""
    out_lines: List[str] = []
    for r in range(SIZE):
        row_chars = []
        for c in range(SIZE):
            p = Position(r, c)
            if level.pits.contains(p):
                row_chars.append(TOK_PIT)
            elif p == level.wumpus:
                row_chars.append(TOK_WUMPUS)
            elif p == level.gold:
                row_chars.append(TOK_GOLD)
            else:
                row_chars.append(TOK_EMPTY)
        out_lines.append("".join(row_chars))
    return "\n".join(out_lines)
