from __future__ import annotations

"""Listening comprehension lesson: hear a passage, answer a multiple-choice question."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

from ..app.events import EventBus, UtteranceEvents
from ..app.explain import trace as xtrace


@dataclass(frozen=True)
class DictationContent:
    text: str
    question: str
    options: Tuple[str, ...]
    correct_answer_index: int

    def __post_init__(self) -> None:
        if not (0 <= self.correct_answer_index < len(self.options)):
            raise ValueError("correct_answer_index out of range")


class LessonState(str, Enum):
    LISTENING = "listening"
    ANSWERING = "answering"
    FEEDBACK = "feedback"
    COMPLETED = "completed"


# The host speech layer: speaks ``events.text`` and marks start/finish on it.
Speaker = Callable[[UtteranceEvents], None]


class DictationLesson:
    def __init__(
        self,
        contents: Sequence[DictationContent],
        speaker: Optional[Speaker] = None,
        xp_per_correct: int = 30,
        bus: Optional[EventBus] = None,
    ) -> None:
        if not contents:
            raise ValueError("DictationLesson needs at least one passage")
        self.contents: List[DictationContent] = list(contents)
        self.speaker = speaker
        self.xp_per_correct = xp_per_correct
        self.bus = bus
        self.index = 0
        self.score = 0
        self.state = LessonState.LISTENING
        self.selected: Optional[int] = None
        self.is_correct = False
        self.show_text = False
        self.utterance: Optional[UtteranceEvents] = None

    @property
    def current(self) -> DictationContent:
        return self.contents[self.index]

    @property
    def is_last(self) -> bool:
        return self.index == len(self.contents) - 1

    @property
    def progress(self) -> float:
        return self.index / len(self.contents)

    @property
    def speaking(self) -> bool:
        return self.utterance is not None and self.utterance.speaking

    def play(self) -> UtteranceEvents:
        """Hand the current passage to the speaker; returns its completion handle."""
        events = UtteranceEvents(self.current.text, self.bus)
        self.utterance = events
        if self.speaker is not None:
            self.speaker(events)
        return events

    def toggle_text(self) -> bool:
        self.show_text = not self.show_text
        return self.show_text

    def begin_answering(self) -> None:
        if self.state is LessonState.LISTENING:
            self.state = LessonState.ANSWERING

    def select(self, index: int) -> None:
        if self.state is not LessonState.ANSWERING:
            return
        if not (0 <= index < len(self.current.options)):
            raise IndexError(f"option {index} out of range")
        self.selected = index

    def check(self) -> Optional[bool]:
        """Grade the selected option. None if nothing is selected yet."""
        if self.state is not LessonState.ANSWERING or self.selected is None:
            return None
        self.is_correct = self.selected == self.current.correct_answer_index
        if self.is_correct:
            self.score += 1
        self.state = LessonState.FEEDBACK
        return self.is_correct

    def advance(self) -> LessonState:
        if self.state is not LessonState.FEEDBACK:
            return self.state
        if self.is_last:
            self.state = LessonState.COMPLETED
            xtrace("dictation_completed", {"score": self.score, "total": len(self.contents)})
            return self.state
        self.index += 1
        self.selected = None
        self.show_text = False
        self.utterance = None
        self.state = LessonState.LISTENING
        return self.state

    def xp_earned(self) -> int:
        return self.score * self.xp_per_correct

    def stars(self) -> int:
        ratio = self.score / len(self.contents)
        return sum(1 for i in range(3) if ratio > i / 3 + 0.1)
