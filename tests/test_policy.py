import random

import pytest

from agent.policy import Mode, Policy, PolicyError, rank_frontier
from agent.selector import get_policy
from wumpus_core.bitboard import BitBoard
from wumpus_core.grid import Action, ActionType, Direction, Position, START
from wumpus_core.observations import ObservationStore
from wumpus_core.parser import parse_level_str

FULL = BitBoard.full()

GOLD_NEXT_DOOR = """
.G..
....
...P
..W.
"""

GOLD_TWO_AWAY = """
..G.
....
...P
..W.
"""

BREEZY_START = """
.P..
....
..W.
...G
"""


def P(r, c):
    return Position(r, c)


def observed(level):
    obs = ObservationStore()
    obs.record_from(level)
    return obs


def test_rank_frontier_distance_then_rim():
    cands = [P(0, 1), P(0, 3), P(1, 2), P(2, 1)]
    ranked = rank_frontier(P(1, 1), cands, FULL)
    assert ranked == [P(0, 1), P(1, 2), P(2, 1), P(0, 3)]


def test_rank_frontier_far_from_start_breaks_ties():
    safe = FULL - P(2, 0) - P(2, 1)
    ranked = rank_frontier(P(2, 2), [P(1, 3), P(3, 1)], safe)
    assert ranked == [P(3, 1), P(1, 3)]


def test_rank_frontier_unreachable_last():
    safe = BitBoard.from_positions([START, P(0, 1), P(3, 3)])
    assert rank_frontier(START, [P(0, 1), P(3, 3)], safe) == [P(0, 1), P(3, 3)]
    assert rank_frontier(START, [], safe) == []


def test_explore_first_move_is_deterministic():
    level = parse_level_str(GOLD_NEXT_DOOR)
    obs = observed(level)
    for seed in range(5):
        assert Policy(Mode.EXPLORE, random.Random(seed)).choose(level, obs) == Action.move(Direction.RIGHT)


def test_return_mode_heads_home_with_gold():
    level = parse_level_str(GOLD_NEXT_DOOR)
    obs = observed(level)
    level.move(Direction.RIGHT)
    obs.record_from(level)
    assert not level.has_gold()
    for mode in (Mode.RETURN, Mode.EXPLORE):
        assert Policy(mode).choose(level, obs) == Action.move(Direction.LEFT)


def test_return_without_safe_path_is_an_error():
    level = parse_level_str(GOLD_TWO_AWAY)
    level.move(Direction.RIGHT)
    level.move(Direction.RIGHT)
    assert not level.has_gold()
    obs = ObservationStore()
    obs.record(START, breeze=True)
    obs.record(P(0, 2), breeze=True, glitter=True)
    with pytest.raises(PolicyError) as ei:
        Policy(Mode.EXPLORE).choose(level, obs)
    assert "safe=" in str(ei.value)


def test_explore_on_unrecorded_square_is_an_error():
    level = parse_level_str(GOLD_TWO_AWAY)
    level.move(Direction.RIGHT)
    obs = ObservationStore()
    obs.record(START)
    with pytest.raises(PolicyError):
        Policy(Mode.EXPLORE).choose(level, obs)


def test_breezy_start_falls_back_to_random_move():
    level = parse_level_str(BREEZY_START)
    obs = observed(level)
    moves = {Policy(Mode.EXPLORE, random.Random(s)).choose(level, obs).direction for s in range(40)}
    assert moves == set(Direction)


def test_fallback_is_reproducible_and_never_shoots():
    a = Policy(Mode.RANDOM, random.Random(5))
    b = Policy(Mode.RANDOM, random.Random(5))
    seq_a = [a.fallback() for _ in range(20)]
    seq_b = [b.fallback() for _ in range(20)]
    assert seq_a == seq_b
    assert all(x.kind is ActionType.MOVE for x in seq_a)


def test_return_mode_wanders_until_gold():
    level = parse_level_str(GOLD_TWO_AWAY)
    obs = observed(level)
    seen = {Policy(Mode.RETURN, random.Random(s)).choose(level, obs).direction for s in range(40)}
    assert len(seen) > 1


def test_selector():
    assert get_policy("EXPLORE").mode is Mode.EXPLORE
    assert get_policy("random", seed=1).mode is Mode.RANDOM
    assert get_policy("return").mode is Mode.RETURN
    with pytest.raises(ValueError):
        get_policy("greedy")
