"""Play many games with one policy and write a CSV report.

Random mode: game g uses seed (base_seed + g) for both the cave and the
policy, so results do not depend on --jobs.
File mode (--levels DIR ...): plays every level found in the .txt files of
the given directories once, the policy seeded the same way.
"""
from __future__ import annotations
import argparse, csv, logging, os, random, time
from multiprocessing import Pool, cpu_count
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from agent.runner import play
from agent.selector import get_policy
from wumpus_core.level import generate_level
from wumpus_core.levels.io import iterate_level_strings
from wumpus_core.parser import parse_level_str

logger = logging.getLogger(__name__)

FIELDS = ["game", "level", "seed", "policy", "won", "end_type", "score", "steps", "safe_size"]

# (game, seed, policy name, max steps, level id, level text or None for a random cave)
Job = Tuple[int, int, str, int, str, Optional[str]]


def random_jobs(games: int, seed: int, policy_name: str, max_steps: int) -> List[Job]:
    return [(g, seed + g, policy_name, max_steps, "random", None) for g in range(games)]


def file_jobs(dirs: List[str], seed: int, policy_name: str, max_steps: int) -> List[Job]:
    jobs: List[Job] = []
    for ref, text in iterate_level_strings(".", dirs):
        g = len(jobs)
        jobs.append((g, seed + g, policy_name, max_steps, f"{ref.path}#{ref.index}", text))
    return jobs


def run_one(job: Job) -> Dict[str, object]:
    game, seed, policy_name, max_steps, level_id, text = job
    row: Dict[str, object] = {"game": game, "level": level_id, "seed": seed, "policy": policy_name}
    try:
        level = generate_level(random.Random(seed)) if text is None else parse_level_str(text)
        res = play(level, get_policy(policy_name, seed=seed), max_steps=max_steps)
        end = res.end_type.value if res.end_type is not None else "timeout"
        row.update({"won": res.won, "end_type": end, "score": res.score,
                    "steps": res.steps, "safe_size": res.safe_size})
    except Exception as e:
        logger.warning("game %d (%s, seed %d) failed: %s", game, level_id, seed, e)
        row.update({"won": False, "end_type": "error", "score": 0, "steps": 0, "safe_size": 0})
    return row


def summarize(rows: List[Dict[str, object]]) -> Dict[str, float]:
    n = len(rows)
    if n == 0:
        return {"games": 0, "win_rate": 0.0, "mean_score": 0.0, "mean_steps": 0.0}
    wins = sum(1 for r in rows if r["won"])
    return {
        "games": n,
        "win_rate": wins / n,
        "mean_score": sum(int(r["score"]) for r in rows) / n,
        "mean_steps": sum(int(r["steps"]) for r in rows) / n,
    }


def main():
    p = argparse.ArgumentParser(description="Batch of Wumpus games → CSV")
    p.add_argument("--games", type=int, default=1000, help="number of random caves")
    p.add_argument("--levels", nargs="+", default=None, metavar="DIR",
                   help="play the levels in these directories instead of random caves")
    p.add_argument("--policy", default="explore", help="random|return|explore")
    p.add_argument("--seed", type=int, default=0, help="seed of the first game")
    p.add_argument("--max_steps", type=int, default=200)
    p.add_argument("--jobs", type=int, default=1, help="processes (0→cpu_count)")
    p.add_argument("--out", default="results/batch.csv", help="output CSV path")
    p.add_argument("--verbose", action="store_true", help="debug logging")
    args = p.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    get_policy(args.policy)  # fail fast on a bad name

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    if args.levels:
        payload = file_jobs(args.levels, args.seed, args.policy, args.max_steps)
    else:
        payload = random_jobs(args.games, args.seed, args.policy, args.max_steps)
    jobs = args.jobs or cpu_count()

    started = time.time()
    if jobs == 1:
        rows = [run_one(t) for t in tqdm(payload, desc="Playing", unit="game")]
    else:
        with Pool(processes=jobs) as pool:
            rows = list(tqdm(pool.imap(run_one, payload), total=len(payload), desc="Playing", unit="game"))

    with open(args.out, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()
        for r in rows:
            w.writerow(r)

    s = summarize(rows)
    print(f"done: {s['games']} games → {args.out}; win_rate={s['win_rate']:.3f} "
          f"mean_score={s['mean_score']:.1f} mean_steps={s['mean_steps']:.1f}; "
          f"total_time={time.time()-started:.2f}s")


if __name__ == "__main__":
    main()
