from __future__ import annotations

"""Off-thread answer evaluation.

Evaluation runs on a worker thread and resolves a Future with the result
tagged by the token the caller submitted it under. Callers compare the token
with their current one before applying a result; there is no cancellation.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Hashable, Optional

from .engine import AnswerScoringEngine
from .models import Question, ScoringResult


@dataclass(frozen=True)
class TaggedResult:
    token: Hashable
    result: ScoringResult


class AsyncEvaluator:
    def __init__(self, engine: Optional[AnswerScoringEngine] = None, max_workers: int = 1) -> None:
        self.engine = engine or AnswerScoringEngine()
        self._pool = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="knowi-eval")

    def submit(self, token: Hashable, answer_text: str, question: Question) -> "Future[TaggedResult]":
        return self._pool.submit(self._run, token, answer_text, question)

    def _run(self, token: Hashable, answer_text: str, question: Question) -> TaggedResult:
        return TaggedResult(token=token, result=self.engine.evaluate(answer_text, question))

    def shutdown(self, wait: bool = True) -> None:
        self._pool.shutdown(wait=wait)

    def __enter__(self) -> "AsyncEvaluator":
        return self

    def __exit__(self, *exc) -> None:
        self.shutdown()
