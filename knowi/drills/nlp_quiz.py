from __future__ import annotations

"""Open-response programming quiz flow."""

from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..scoring.async_eval import AsyncEvaluator, TaggedResult
from ..scoring.engine import AnswerScoringEngine
from ..scoring.models import Question, ScoringResult
from ..stats.session_tracker import SessionScoreTracker


@dataclass(frozen=True)
class QuizXP:
    max_xp: int = 50
    min_xp: int = 10
    attempt_penalty: int = 10

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "QuizXP":
        q = cfg.get("quiz", {}) or {}
        return cls(int(q.get("max_xp", 50)), int(q.get("min_xp", 10)), int(q.get("attempt_penalty", 10)))

    def for_attempts(self, attempts: int) -> int:
        """XP for a question answered in ``attempts`` submissions; a skip earns nothing."""
        if attempts <= 0:
            return 0
        return max(self.max_xp - (attempts - 1) * self.attempt_penalty, self.min_xp)


class NLPQuiz:
    """Walks a learner through an ordered list of open-response questions.

    Every submission counts as an attempt; moving on awards XP for the
    question, fewer the more attempts it took. When a tracker and session id
    are given, graded answers and hints are recorded against that session.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        engine: Optional[AnswerScoringEngine] = None,
        tracker: Optional[SessionScoreTracker] = None,
        session_id: Optional[str] = None,
        xp: Optional[QuizXP] = None,
    ) -> None:
        if not questions:
            raise ValueError("NLPQuiz needs at least one question")
        self.questions: List[Question] = list(questions)
        self.engine = engine or AnswerScoringEngine()
        self.tracker = tracker
        self.session_id = session_id
        self.xp = xp or QuizXP()
        self.index = 0
        self.attempts = 0
        self.xp_earned = 0
        self.completed = False
        self.last_result: Optional[ScoringResult] = None

    @property
    def current_question(self) -> Question:
        return self.questions[self.index]

    @property
    def token(self) -> Tuple[int, int]:
        # identifies the question and attempt a pending async result belongs to
        return (self.index, self.attempts)

    def progress(self) -> Tuple[int, int]:
        return (self.index + 1, len(self.questions))

    def _record(self, kind: str) -> None:
        if self.tracker is not None and self.session_id is not None:
            self.tracker.record_interaction(self.session_id, kind)

    def submit(self, answer: str) -> ScoringResult:
        return self._apply_result(self.engine.evaluate(answer, self.current_question))

    def submit_async(self, answer: str, evaluator: AsyncEvaluator) -> "Future[TaggedResult]":
        return evaluator.submit(self.token, answer, self.current_question)

    def apply(self, tagged: TaggedResult) -> Optional[ScoringResult]:
        """Apply an async result; stale results (question or attempt moved on) are dropped."""
        if self.completed or tagged.token != self.token:
            return None
        return self._apply_result(tagged.result)

    def _apply_result(self, result: ScoringResult) -> ScoringResult:
        self.attempts += 1
        self.last_result = result
        self._record("correct" if result.is_correct else "incorrect")
        return result

    def use_hint(self) -> str:
        self._record("hint")
        return self.current_question.hint

    def next_question(self) -> int:
        """Award XP for the current question and advance. Returns the XP awarded.

        Moving on without submitting anything awards 0 XP.
        """
        if self.completed:
            return 0
        awarded = self.xp.for_attempts(self.attempts)
        self.xp_earned += awarded
        self.attempts = 0
        self.last_result = None
        if self.index >= len(self.questions) - 1:
            self.completed = True
        else:
            self.index += 1
        return awarded
