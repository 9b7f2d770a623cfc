from __future__ import annotations

"""Answer scoring engine for open-response questions.

Grades a free-text answer by how many of the question's expected key terms
it mentions, and picks the feedback message from the match ratio and a
confusion signal derived from the answer's sentiment.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..app.explain import trace as xtrace
from .models import Question, ScoringResult
from .text import analyze_sentiment, extract_key_terms

ANSWER_REQUIRED = "Answer required: please write an answer before submitting it."
ANSWER_TOO_SHORT = "Answer too short. Please elaborate a bit more."


@dataclass(frozen=True)
class ScoringConfig:
    min_length: int = 5
    correct_ratio: float = 0.7
    partial_ratio: float = 0.4
    confusion_threshold: float = -0.3

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ScoringConfig":
        section = cfg.get("scoring", {}) or {}
        return cls(
            min_length=int(section.get("min_length", 5)),
            correct_ratio=float(section.get("correct_ratio", 0.7)),
            partial_ratio=float(section.get("partial_ratio", 0.4)),
            confusion_threshold=float(section.get("confusion_threshold", -0.3)),
        )


def match_terms(candidates: List[str], expected: tuple[str, ...]) -> List[str]:
    """Expected terms hit by any candidate; either string may contain the other."""
    matched = []
    for term in expected:
        t = term.lower()
        if any(c in t or t in c for c in candidates):
            matched.append(term)
    return matched


class AnswerScoringEngine:
    def __init__(self, config: Optional[ScoringConfig] = None) -> None:
        self.config = config or ScoringConfig()

    def evaluate(self, answer_text: str, question: Question) -> ScoringResult:
        cfg = self.config
        raw = (answer_text or "").strip()
        cleaned = raw.lower()

        if not cleaned:
            return ScoringResult(False, ANSWER_REQUIRED, missing_terms=question.key_terms)
        if len(cleaned) < cfg.min_length:
            return ScoringResult(False, ANSWER_TOO_SHORT, missing_terms=question.key_terms)

        candidates = extract_key_terms(raw, extra_vocabulary=question.key_terms)
        matched = match_terms(candidates, question.key_terms)
        missing = tuple(t for t in question.key_terms if t not in matched)
        ratio = len(matched) / len(question.key_terms)

        sentiment = analyze_sentiment(cleaned)
        confused = sentiment < cfg.confusion_threshold

        if ratio >= cfg.correct_ratio:
            is_correct = True
            feedback = f"Excellent! Your answer covers key concepts such as: {', '.join(matched)}."
            if missing:
                feedback += f"\n\nYou could also consider: {', '.join(missing)}."
        elif ratio >= cfg.partial_ratio:
            is_correct = False
            feedback = (
                f"Partial answer. You mentioned: {', '.join(matched)}."
                f"\n\nBut it is important to include: {', '.join(missing)}."
            )
        elif confused:
            is_correct = False
            feedback = f"There seems to be some confusion in your answer. Remember that {question.hint}"
        else:
            is_correct = False
            feedback = f"Your answer is missing the key concepts. Remember that {question.hint}"

        xtrace(
            "answer_evaluated",
            {
                "correct": is_correct,
                "ratio": ratio,
                "matched": matched,
                "sentiment": sentiment,
            },
        )
        return ScoringResult(
            is_correct=is_correct,
            feedback=feedback,
            matched_terms=tuple(matched),
            missing_terms=missing,
            match_ratio=ratio,
            sentiment=sentiment,
        )
