from __future__ import annotations
import random
from typing import Optional

from agent.policy import Mode, Policy


def get_policy(name: str, seed: Optional[int] = None) -> Policy:
    name = name.lower()
    try:
        mode = Mode(name)
    except ValueError:
        raise ValueError(f"unknown policy: {name}") from None
    return Policy(mode, rng=random.Random(seed))
