from __future__ import annotations

"""Arithmetic problems with distractor options for the motion math game."""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..app.explain import trace as xtrace
from ..config.config import MAX_TIER, MIN_TIER


class ProblemKind(str, Enum):
    ADDITION = "addition"
    SUBTRACTION = "subtraction"
    MULTIPLICATION = "multiplication"
    DIVISION = "division"
    EQUATION = "equation"


BASE_POINTS: Dict[ProblemKind, int] = {
    ProblemKind.ADDITION: 25,
    ProblemKind.SUBTRACTION: 25,
    ProblemKind.MULTIPLICATION: 35,
    ProblemKind.DIVISION: 40,
    ProblemKind.EQUATION: 30,
}

# Distractor offset magnitudes per tier: ±1..n
OFFSET_SPREAD: Dict[int, int] = {1: 2, 2: 3, 3: 5}

NUM_OPTIONS = 4


@dataclass(frozen=True)
class MathProblem:
    question: str
    options: Tuple[str, ...]
    correct_answer: int
    difficulty: int
    points: int
    kind: ProblemKind
    answer: int

    def __post_init__(self) -> None:
        if len(self.options) != NUM_OPTIONS or len(set(self.options)) != NUM_OPTIONS:
            raise ValueError(f"MathProblem needs {NUM_OPTIONS} distinct options, got {self.options!r}")
        if not (0 <= self.correct_answer < NUM_OPTIONS) or self.options[self.correct_answer] != str(self.answer):
            raise ValueError("correct_answer must index the option equal to the answer")

    def is_correct(self, index: int) -> bool:
        return index == self.correct_answer


def clamp_tier(tier: int) -> int:
    return max(MIN_TIER, min(MAX_TIER, int(tier)))


def generate_options(answer: int, tier: int, rng: random.Random) -> List[str]:
    """Correct answer plus three positive, distinct distractors, shuffled.

    Small answers (0 or 1 at tier 1) cannot get three positive neighbours
    from the tier's offsets, so the spread widens one step until they can.
    """
    spread = OFFSET_SPREAD[clamp_tier(tier)]
    while True:
        pool = sorted({answer + o for k in range(1, spread + 1) for o in (-k, k)} - {answer})
        pool = [v for v in pool if v > 0]
        if len(pool) >= NUM_OPTIONS - 1:
            break
        spread += 1
    options = [str(answer)] + [str(v) for v in rng.sample(pool, NUM_OPTIONS - 1)]
    rng.shuffle(options)
    return options


class MathProblemGenerator:
    """Builds a random problem for a difficulty tier (1..3).

    Operand ranges, point values and distractor spread all grow with the
    tier. Out-of-range tiers are clamped.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def generate(self, tier: int) -> MathProblem:
        choice = self.rng.randint(0, 3)
        kinds = [ProblemKind.ADDITION, ProblemKind.SUBTRACTION, ProblemKind.MULTIPLICATION, ProblemKind.DIVISION]
        return self.generate_kind(kinds[choice], tier)

    def generate_kind(self, kind: ProblemKind, tier: int) -> MathProblem:
        t = clamp_tier(tier)
        r = self.rng
        if kind is ProblemKind.ADDITION:
            a = r.randint(1, 10 * t)
            b = r.randint(1, 10 * t)
            answer, question = a + b, f"{a} + {b} = ?"
        elif kind is ProblemKind.SUBTRACTION:
            b = r.randint(1, 10 * t)
            a = r.randint(b, 10 * t + b)
            answer, question = a - b, f"{a} - {b} = ?"
        elif kind is ProblemKind.MULTIPLICATION:
            a = r.randint(2, 5 + t)
            b = r.randint(2, 5 + t)
            answer, question = a * b, f"{a} × {b} = ?"
        elif kind is ProblemKind.DIVISION and t > 1:
            divisor = r.randint(2, 5 + t)
            answer = r.randint(1, 10)
            question = f"{divisor * answer} ÷ {divisor} = ?"
        else:
            # whole-number division is unreliable at tier 1
            kind = ProblemKind.EQUATION
            x = r.randint(1, 10)
            b = r.randint(1, 10)
            answer, question = x, f"x + {b} = {x + b}, x = ?"

        options = generate_options(answer, t, r)
        problem = MathProblem(
            question=question,
            options=tuple(options),
            correct_answer=options.index(str(answer)),
            difficulty=t,
            points=BASE_POINTS[kind] * t,
            kind=kind,
            answer=answer,
        )
        xtrace("problem_generated", {"kind": kind, "tier": t, "question": question, "options": options})
        return problem
