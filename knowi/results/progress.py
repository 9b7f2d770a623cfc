from __future__ import annotations

"""User progress store (in memory).

Quiz screens award XP and report quest completions here. Saving the
profile anywhere is left to the host.
"""

from typing import Dict, Iterable, List, Optional

from ..app.explain import trace as xtrace
from .schema import Quest, QuestCompletion, UserProfile


class UserProgress:
    def __init__(
        self,
        profile: UserProfile,
        quests: Iterable[Quest] = (),
        xp_per_level: int = 500,
    ) -> None:
        self.profile = profile
        self.quests: Dict[str, Quest] = {q.title: q for q in quests}
        self.xp_per_level = xp_per_level
        self.completions: List[QuestCompletion] = []

    def award_xp(self, amount: int) -> int:
        """Add XP to the total and to today's progress. Returns the new total."""
        amount = max(0, int(amount))
        self.profile.xp_points += amount
        self.profile.daily_progress += amount
        return self.profile.xp_points

    def mark_quest_completed(self, title: str) -> Optional[Quest]:
        quest = self.quests.get(title)
        if quest is None:
            return None
        quest = quest.model_copy(update={"is_completed": True, "completion_percentage": 1.0})
        self.quests[title] = quest
        return quest

    def record_quest_completion(self, title: str, score: float, time_spent: float) -> QuestCompletion:
        row = QuestCompletion(quest_title=title, score=max(0.0, score), time_spent_s=max(0.0, time_spent))
        self.completions.append(row)
        self.mark_quest_completed(title)
        xtrace("quest_completed", {"quest": title, "score": row.score, "time_s": row.time_spent_s})
        return row

    def expected_seconds(self, title: str) -> Optional[float]:
        quest = self.quests.get(title)
        return quest.expected_seconds if quest is not None else None

    def level(self) -> int:
        return self.profile.xp_points // self.xp_per_level + 1

    def level_progress(self) -> float:
        """Fraction of the way from the current level to the next."""
        floor = (self.level() - 1) * self.xp_per_level
        return (self.profile.xp_points - floor) / self.xp_per_level

    def daily_goal_reached(self) -> bool:
        return self.profile.daily_progress >= self.profile.daily_goal

    def reset_daily(self) -> None:
        self.profile.daily_progress = 0
