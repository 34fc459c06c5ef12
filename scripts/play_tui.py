"""Play a game by hand: type UP/DOWN/LEFT/RIGHT, SHOOT <dir>, or OBSERVE."""
from __future__ import annotations
import argparse
import random

from wumpus_core.grid import ActionType, parse_action
from wumpus_core.level import Level, generate_level
from wumpus_core.levels.io import load_level_by_id
from wumpus_core.render import describe_status

_DEATHS = {
    "wumpus": "You hit the Wumpus. It tears you into pieces. Game over.",
    "pit": "You drop to your death. Game over.",
    "win": "You head back to the village to deliver your newfound gold. You win!",
}


def report_observations(level: Level, gold_was_there: bool) -> str:
    lines = []
    if level.detects_stench():
        lines.append("You smell a stench. Wumpus!" if level.has_wumpus()
                     else "You smell a stench. Ah, these memories...")
    if level.detects_breeze():
        lines.append("You also feel a breeze. A pit, somewhere..." if lines
                     else "You feel a breeze. A pit, somewhere...")
    if level.detects_glitter():
        lines.append("You pick up the gold from the ground. Time to go home." if gold_was_there
                     else "The glitter on the ground reminds you to take the gold back.")
    if not lines:
        lines.append("You observe nothing. The adventure continues.")
    return "\n".join(lines)


def turn(level: Level, line: str) -> str:
    """Applies one line of input and returns what to tell the player."""
    gold_was_there = level.has_gold()
    if line.strip().upper() == "OBSERVE":
        return f"{report_observations(level, gold_was_there)}\nYour score is {level.score}."
    action = parse_action(line)
    if action is None:
        return "Invalid format. Try again."
    if action.kind is ActionType.SHOOT:
        if not level.shoot(action.direction):
            return "You don't have an arrow."
        hit = "You shot the Wumpus!" if not level.has_wumpus() else "You shot but missed."
        return f"{hit}\nYour score is now {level.score}."
    out = []
    if not level.move(action.direction):
        out.append("You hit a wall.")
    end = level.end_type()
    if end is not None:
        out.append(_DEATHS[end.value])
    else:
        out.append(report_observations(level, gold_was_there))
        out.append(f"Your score is now {level.score}.")
    return "\n".join(out)


def main():
    p = argparse.ArgumentParser(description="Text Wumpus World")
    p.add_argument("--level", type=str, default="random", help="'random' or path/to/file.txt#idx")
    p.add_argument("--seed", type=int, default=None)
    args = p.parse_args()

    rng = random.Random(args.seed)
    while True:
        if args.level == "random":
            level = generate_level(rng)
        else:
            level = load_level_by_id(args.level)
        print(report_observations(level, True))
        while not level.has_ended():
            try:
                line = input("Enter a direction to move, SHOOT direction, or OBSERVE. ")
            except EOFError:
                return
            print(turn(level, line))
        print(describe_status(level))
        if args.level != "random":
            return
        print("\nLet's start a new game!")


if __name__ == "__main__":
    main()
