from __future__ import annotations

"""Per-session interaction counters and end-of-session scoring.

A session is one timed attempt at a quest. Quiz screens record answers and
hints while it runs; ending it turns the counters into a 0..100 score (or a
time-efficiency estimate when nothing was graded) plus the elapsed time.
"""

import threading
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

from ..app.explain import trace as xtrace


class Counter(str, Enum):
    INTERACTION = "interaction"
    CORRECT = "correct"
    INCORRECT = "incorrect"
    HINT = "hint"


@dataclass(frozen=True)
class CountIncrement:
    counter: Counter


@dataclass(frozen=True)
class CustomSignal:
    key: str
    value: Union[bool, int, float, str]


Interaction = Union[CountIncrement, CustomSignal]


def parse_interaction(kind: str, value: Union[bool, int, float, str] = True) -> Interaction:
    """Map a string kind onto the interaction variant.

    The four counter names increment; any other kind is kept as a custom
    signal with its value.
    """
    try:
        return CountIncrement(Counter(kind))
    except ValueError:
        return CustomSignal(key=str(kind), value=value)


@dataclass
class SessionRecord:
    session_id: str
    started_at: datetime
    started_clock: float
    interactions: int = 0
    correct: int = 0
    incorrect: int = 0
    hints: int = 0
    extras: Dict[str, Union[bool, int, float, str]] = field(default_factory=dict)

    @property
    def graded(self) -> int:
        return self.correct + self.incorrect

    def apply(self, interaction: Interaction) -> None:
        if isinstance(interaction, CustomSignal):
            self.extras[interaction.key] = interaction.value
            return
        c = interaction.counter
        if c is Counter.INTERACTION:
            self.interactions += 1
        elif c is Counter.CORRECT:
            self.correct += 1
        elif c is Counter.INCORRECT:
            self.incorrect += 1
        elif c is Counter.HINT:
            self.hints += 1


class SessionOutcome(NamedTuple):
    score: float
    elapsed_seconds: float


@dataclass(frozen=True)
class ScoringPolicy:
    hint_penalty: float = 5.0
    hint_penalty_cap: float = 25.0
    default_score: float = 70.0
    efficiency_cap: float = 1.5
    completion_weight: float = 80.0

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ScoringPolicy":
        s = cfg.get("session", {}) or {}
        return cls(
            hint_penalty=float(s.get("hint_penalty", 5.0)),
            hint_penalty_cap=float(s.get("hint_penalty_cap", 25.0)),
            default_score=float(s.get("default_score", 70.0)),
            efficiency_cap=float(s.get("efficiency_cap", 1.5)),
            completion_weight=float(s.get("completion_weight", 80.0)),
        )


def score_record(
    rec: SessionRecord,
    elapsed: float,
    expected_seconds: Optional[float],
    policy: ScoringPolicy = ScoringPolicy(),
) -> float:
    if rec.graded > 0:
        base = 100.0 * rec.correct / rec.graded
        penalty = min(policy.hint_penalty_cap, rec.hints * policy.hint_penalty)
        return max(0.0, base - penalty)
    if expected_seconds is None:
        return policy.default_score
    efficiency = min(policy.efficiency_cap, float(expected_seconds) / max(1.0, elapsed))
    return efficiency * policy.completion_weight


ExpectedDuration = Callable[[str], Optional[float]]
CompletionSink = Callable[[SessionRecord, SessionOutcome], None]


def _no_duration(_session_id: str) -> Optional[float]:
    return None


class SessionScoreTracker:
    """Keyed accumulators, one per active session id.

    Each call takes the tracker lock, so concurrent callers never lose a
    counter update. ``expected_duration`` returns the expected length of a
    session in seconds (or None when unknown) and feeds the ungraded score.
    """

    def __init__(
        self,
        expected_duration: Optional[ExpectedDuration] = None,
        policy: Optional[ScoringPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
        on_complete: Optional[CompletionSink] = None,
    ) -> None:
        self.expected_duration = expected_duration or _no_duration
        self.policy = policy or ScoringPolicy()
        self._clock = clock
        self._on_complete = on_complete
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def start_session(self, session_id: str) -> None:
        rec = SessionRecord(
            session_id=session_id,
            started_at=datetime.now(timezone.utc),
            started_clock=self._clock(),
        )
        with self._lock:
            self._sessions[session_id] = rec
        xtrace("session_started", {"session": session_id})

    def record_interaction(self, session_id: str, kind: str, value: Union[bool, int, float, str] = True) -> None:
        interaction = parse_interaction(kind, value)
        with self._lock:
            rec = self._sessions.get(session_id)
            if rec is None:
                return
            rec.apply(interaction)

    def end_session(self, session_id: str) -> SessionOutcome:
        with self._lock:
            rec = self._sessions.pop(session_id, None)
        if rec is None:
            return SessionOutcome(0.0, 0.0)
        elapsed = max(0.0, self._clock() - rec.started_clock)
        expected = self.expected_duration(session_id) if rec.graded == 0 else None
        outcome = SessionOutcome(score_record(rec, elapsed, expected, self.policy), elapsed)
        xtrace(
            "session_ended",
            {
                "session": session_id,
                "correct": rec.correct,
                "incorrect": rec.incorrect,
                "hints": rec.hints,
                "score": outcome.score,
                "elapsed_s": elapsed,
            },
        )
        if self._on_complete is not None:
            self._on_complete(rec, outcome)
        return outcome

    def active_sessions(self) -> List[str]:
        with self._lock:
            return list(self._sessions)

    def snapshot(self, session_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            rec = self._sessions.get(session_id)
            if rec is None:
                return None
            return {
                "interactions": rec.interactions,
                "correct": rec.correct,
                "incorrect": rec.incorrect,
                "hints": rec.hints,
                "extras": dict(rec.extras),
            }
