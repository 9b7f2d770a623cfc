from .models import Difficulty, Question, ScoringResult
from .engine import ANSWER_REQUIRED, ANSWER_TOO_SHORT, AnswerScoringEngine, ScoringConfig
from .async_eval import AsyncEvaluator, TaggedResult
from .commands import CommandStep, check_command

__all__ = [
    "Difficulty",
    "Question",
    "ScoringResult",
    "ANSWER_REQUIRED",
    "ANSWER_TOO_SHORT",
    "AnswerScoringEngine",
    "ScoringConfig",
    "AsyncEvaluator",
    "TaggedResult",
    "CommandStep",
    "check_command",
]
