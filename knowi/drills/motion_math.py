from __future__ import annotations

"""Motion math challenge: game state for the tilt-to-unlock math game.

The host feeds device tilts (already turned into directions, or raw
roll/pitch samples) and one-second ticks; this class decides when answer
options unlock, grades answers, and escalates the difficulty tier.
"""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..app.explain import trace as xtrace
from .math_problem import MathProblem, MathProblemGenerator


class MotionTarget(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def label(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        return f"arrow.{self.value}"

    @classmethod
    def random(cls, rng: Optional[random.Random] = None) -> "MotionTarget":
        return (rng or random).choice(list(cls))


def direction_from_attitude(roll: float, pitch: float, threshold: float = 0.5) -> Optional[MotionTarget]:
    """Map a roll/pitch sample (radians) to the dominant tilt direction."""
    candidates = []
    if roll < -threshold:
        candidates.append((abs(roll), MotionTarget.LEFT))
    elif roll > threshold:
        candidates.append((abs(roll), MotionTarget.RIGHT))
    if pitch < -threshold:
        candidates.append((abs(pitch), MotionTarget.UP))
    elif pitch > threshold:
        candidates.append((abs(pitch), MotionTarget.DOWN))
    if not candidates:
        return None
    return max(candidates, key=lambda c: c[0])[1]


@dataclass
class GameSettings:
    start_tier: int = 1
    max_tier: int = 3
    escalate_every: int = 5
    duration_s: int = 60
    completion_threshold: int = 8
    moves_required: int = 2
    tilt_threshold: float = 0.5

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "GameSettings":
        m = cfg.get("math", {}) or {}
        return cls(
            start_tier=int(m.get("start_tier", 1)),
            max_tier=int(m.get("max_tier", 3)),
            escalate_every=int(m.get("escalate_every", 5)),
            duration_s=int(m.get("duration_s", 60)),
            completion_threshold=int(m.get("completion_threshold", 8)),
            moves_required=int(m.get("moves_required", 2)),
            tilt_threshold=float(m.get("tilt_threshold", 0.5)),
        )


class MotionMathGame:
    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        generator: Optional[MathProblemGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings or GameSettings()
        self.rng = rng or random.Random()
        self.generator = generator or MathProblemGenerator(self.rng)
        self.tier = self.settings.start_tier
        self.score = 0
        self.time_remaining = self.settings.duration_s
        self.problems_solved = 0
        self.successful_moves = 0
        self.selected_answer: Optional[int] = None
        self.show_feedback = False
        self.last_correct = False
        self.running = False
        self.challenge_completed = False
        self.current_problem: MathProblem = self.generator.generate(self.tier)
        self.current_target = MotionTarget.random(self.rng)

    @property
    def options_unlocked(self) -> bool:
        return self.successful_moves >= self.settings.moves_required

    def start(self) -> None:
        self.reset()
        self.running = True

    def reset(self) -> None:
        self.tier = self.settings.start_tier
        self.score = 0
        self.time_remaining = self.settings.duration_s
        self.problems_solved = 0
        self.challenge_completed = False
        self.selected_answer = None
        self.show_feedback = False
        self.successful_moves = 0
        self.new_problem()

    def tick(self) -> None:
        """Advance the countdown by one second; ends the game at zero."""
        if not self.running:
            return
        if self.time_remaining > 0:
            self.time_remaining -= 1
        if self.time_remaining <= 0:
            self.end()

    def end(self) -> None:
        self.running = False
        self.challenge_completed = self.problems_solved >= self.settings.completion_threshold
        xtrace("math_game_ended", {"score": self.score, "solved": self.problems_solved, "completed": self.challenge_completed})

    def register_motion(self, direction: MotionTarget) -> bool:
        """Count a tilt toward the current target. Returns True when it counted."""
        if self.show_feedback or self.options_unlocked or direction != self.current_target:
            return False
        self.successful_moves += 1
        if not self.options_unlocked:
            self.current_target = MotionTarget.random(self.rng)
        return True

    def register_attitude(self, roll: float, pitch: float) -> bool:
        direction = direction_from_attitude(roll, pitch, self.settings.tilt_threshold)
        if direction is None:
            return False
        return self.register_motion(direction)

    def select_answer(self, index: int) -> Optional[bool]:
        """Grade an option. None when the game is not running, the options are
        still locked, or feedback is up."""
        if not self.running or not self.options_unlocked or self.show_feedback:
            return None
        self.selected_answer = index
        self.show_feedback = True
        self.last_correct = self.current_problem.is_correct(index)
        if self.last_correct:
            self.score += self.current_problem.points
            self.problems_solved += 1
        return self.last_correct

    def dismiss_feedback(self) -> None:
        """Close the feedback panel; a correct answer moves on, a wrong one retries."""
        if not self.show_feedback:
            return
        self.show_feedback = False
        self.selected_answer = None
        if self.last_correct and not self.challenge_completed:
            self.new_problem()

    def new_problem(self) -> None:
        s = self.settings
        if self.problems_solved > 0 and self.problems_solved % s.escalate_every == 0 and self.tier < s.max_tier:
            self.tier += 1
            xtrace("tier_escalated", {"tier": self.tier, "solved": self.problems_solved})
        self.current_problem = self.generator.generate(self.tier)
        self.current_target = MotionTarget.random(self.rng)
        self.successful_moves = 0
