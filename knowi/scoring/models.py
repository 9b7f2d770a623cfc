from __future__ import annotations

"""Question and scoring result records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank >= other.rank


_RANK = {Difficulty.BEGINNER: 1, Difficulty.INTERMEDIATE: 2, Difficulty.ADVANCED: 3}


@dataclass(frozen=True)
class Question:
    """An open-response question graded by key-term coverage."""

    text: str
    key_terms: Tuple[str, ...]
    hint: str
    category: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    code_example: Optional[str] = None

    def __post_init__(self) -> None:
        terms = tuple(str(t) for t in self.key_terms)
        if not terms:
            raise ValueError("Question.key_terms must not be empty")
        object.__setattr__(self, "key_terms", terms)
        object.__setattr__(self, "difficulty", Difficulty(self.difficulty))


@dataclass(frozen=True)
class ScoringResult:
    is_correct: bool
    feedback: str
    matched_terms: Tuple[str, ...] = field(default_factory=tuple)
    missing_terms: Tuple[str, ...] = field(default_factory=tuple)
    match_ratio: float = 0.0
    sentiment: float = 0.0
