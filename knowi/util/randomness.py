from __future__ import annotations

"""Randomness helpers for seeding and injectable generators."""

import os
import random
from typing import Optional

import numpy as np


def seed_if_needed() -> Optional[int]:
    """Seed RNGs if SEED env var is set. Returns the seed used, if any."""
    seed = os.environ.get("SEED")
    if seed is None:
        return None
    try:
        s = int(seed)
    except ValueError:
        print(f"WARNING: Ignoring non-integer SEED '{seed}'.")
        return None
    random.seed(s)
    np.random.seed(s)
    return s


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Return a private Random instance; unseeded draws from the module RNG."""
    if seed is None:
        return random.Random(random.getrandbits(64))
    return random.Random(seed)
