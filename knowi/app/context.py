from __future__ import annotations

"""Application context: the services one app session shares.

Built once at startup and passed to each quiz screen, in place of
process-wide singletons.
"""

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..drills.math_problem import MathProblemGenerator
from ..drills.motion_math import GameSettings, MotionMathGame
from ..drills.nlp_quiz import NLPQuiz, QuizXP
from ..drills.dictation import DictationLesson, Speaker
from ..results.progress import UserProgress
from ..results.schema import QuestCompletion, UserProfile
from ..scoring.engine import AnswerScoringEngine, ScoringConfig
from ..stats.session_tracker import ScoringPolicy, SessionOutcome, SessionScoreTracker
from .catalog import DICTATION_CONTENTS, PROGRAMMING_QUESTIONS, PROGRAMMING_QUIZ, QUESTS
from .events import EventBus


@dataclass
class AppContext:
    cfg: Dict[str, Any]
    engine: AnswerScoringEngine
    tracker: SessionScoreTracker
    generator: MathProblemGenerator
    progress: UserProgress
    bus: EventBus = field(default_factory=EventBus)
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def build(
        cls,
        cfg: Dict[str, Any],
        profile: Optional[UserProfile] = None,
        rng: Optional[random.Random] = None,
    ) -> "AppContext":
        rng = rng or random.Random()
        progress = UserProgress(
            profile or UserProfile(name="Learner", daily_goal=int(cfg.get("progress", {}).get("daily_goal", 100))),
            quests=[q.model_copy() for q in QUESTS],
            xp_per_level=int(cfg.get("progress", {}).get("xp_per_level", 500)),
        )
        tracker = SessionScoreTracker(
            expected_duration=progress.expected_seconds,
            policy=ScoringPolicy.from_config(cfg),
        )
        return cls(
            cfg=cfg,
            engine=AnswerScoringEngine(ScoringConfig.from_config(cfg)),
            tracker=tracker,
            generator=MathProblemGenerator(rng),
            progress=progress,
            rng=rng,
        )

    def start_tracking(self, quest_title: str) -> None:
        self.tracker.start_session(quest_title)

    def record_interaction(self, quest_title: str, kind: str, value: Any = True) -> None:
        self.tracker.record_interaction(quest_title, kind, value)

    def complete_tracking(self, quest_title: str, manual_score: Optional[float] = None) -> QuestCompletion:
        """End the quest's session and record the completion; a manual score wins."""
        outcome: SessionOutcome = self.tracker.end_session(quest_title)
        score = outcome.score if manual_score is None else float(manual_score)
        row = self.progress.record_quest_completion(quest_title, score, outcome.elapsed_seconds)
        self.bus.emit("quest_completed", row)
        return row

    def new_nlp_quiz(self, quest_title: str = PROGRAMMING_QUIZ) -> NLPQuiz:
        return NLPQuiz(
            PROGRAMMING_QUESTIONS,
            engine=self.engine,
            tracker=self.tracker,
            session_id=quest_title,
            xp=QuizXP.from_config(self.cfg),
        )

    def new_math_game(self) -> MotionMathGame:
        return MotionMathGame(GameSettings.from_config(self.cfg), generator=self.generator, rng=self.rng)

    def new_dictation(self, speaker: Optional[Speaker] = None) -> DictationLesson:
        xp = int(self.cfg.get("dictation", {}).get("xp_per_correct", 30))
        return DictationLesson(DICTATION_CONTENTS, speaker=speaker, xp_per_correct=xp, bus=self.bus)
