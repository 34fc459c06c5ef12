from __future__ import annotations
import argparse
import random

from agent.knowledge import infer
from agent.runner import play
from agent.selector import get_policy
from wumpus_core.level import generate_level
from wumpus_core.levels.io import load_level_by_id
from wumpus_core.parser import parse_level_str
from wumpus_core.render import describe_status, render_knowledge, render_level

LVL = """
...P
....
....
W..G
"""


def main():
    p = argparse.ArgumentParser(description="Watch the agent play one game")
    p.add_argument("--level", type=str, default="inline", help="'inline', 'random' or path/to/file.txt#idx")
    p.add_argument("--policy", type=str, default="explore", choices=["random", "return", "explore"])
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max_steps", type=int, default=200)
    args = p.parse_args()

    if args.level == "inline":
        level = parse_level_str(LVL)
    elif args.level == "random":
        level = generate_level(random.Random(args.seed))
    else:
        level = load_level_by_id(args.level)
    policy = get_policy(args.policy, seed=args.seed)

    print(f"-- start --\n{render_level(level)}")

    def show(step, action, lvl, obs):
        k = infer(obs)
        print(f"\n-- step {step}: {action.kind.value} {action.direction.name} --")
        print(render_level(lvl))
        print()
        print(render_knowledge(k, obs, lvl.agent_position()))

    res = play(level, policy, max_steps=args.max_steps, on_step=show)
    print()
    print(describe_status(level))
    end = res.end_type.value if res.end_type is not None else "timeout"
    print("Result:", {"won": res.won, "end_type": end, "score": res.score, "steps": res.steps, "safe_size": res.safe_size})


if __name__ == "__main__":
    main()
