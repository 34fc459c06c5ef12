from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional

from wumpus_core.grid import Action, EndType
from wumpus_core.level import Level
from wumpus_core.observations import ObservationStore

from .knowledge import infer
from .policy import Policy

StepHook = Callable[[int, Action, Level, ObservationStore], None]


@dataclass
class GameResult:
    won: bool
    end_type: Optional[EndType]  # None when the step limit ran out
    score: int
    steps: int
    safe_size: int  # squares proven safe when the game stopped


def play(level: Level, policy: Policy, max_steps: int = 200, on_step: Optional[StepHook] = None) -> GameResult:
    """Runs one game: sense, choose, act, until the game ends or max_steps actions were taken."""
    obs = ObservationStore()
    obs.record_from(level)
    steps = 0
    while not level.has_ended() and steps < max_steps:
        action = policy.choose(level, obs)
        level.apply(action)
        steps += 1
        if not level.has_ended():
            obs.record_from(level)
        if on_step is not None:
            on_step(steps, action, level, obs)
    return GameResult(
        won=level.end_type() is EndType.WIN,
        end_type=level.end_type(),
        score=level.score,
        steps=steps,
        safe_size=infer(obs).safe.size(),
    )
