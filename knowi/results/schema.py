from __future__ import annotations

"""Pydantic models for user progress, quests and completion records."""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, Field, field_validator

from ..scoring.models import Difficulty

LEARNING_STYLES = {"visual", "auditory", "reading", "kinesthetic"}


class UserProfile(BaseModel):
    name: str
    avatar_name: str = "avatar1"
    xp_points: int = Field(default=0, ge=0)
    daily_goal: int = Field(default=100, gt=0)
    daily_progress: int = Field(default=0, ge=0)
    streak: int = Field(default=0, ge=0)
    learning_styles: List[str] = Field(default_factory=list)

    @field_validator("learning_styles")
    @classmethod
    def _known_styles(cls, v: List[str]) -> List[str]:
        unknown = [s for s in v if s not in LEARNING_STYLES]
        if unknown:
            raise ValueError(f"unknown learning styles: {unknown}")
        return v


class Quest(BaseModel):
    title: str
    description: str = ""
    xp_reward: int = Field(default=0, ge=0)
    duration: int = Field(default=15, gt=0, description="expected minutes")
    difficulty: Difficulty = Difficulty.BEGINNER
    learning_styles: List[str] = Field(default_factory=list)
    is_completed: bool = False
    completion_percentage: float = Field(default=0.0, ge=0.0, le=1.0)

    @property
    def expected_seconds(self) -> float:
        return float(self.duration * 60)


class QuestCompletion(BaseModel):
    quest_title: str
    score: float = Field(ge=0)
    time_spent_s: float = Field(ge=0)
    completed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("completed_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
