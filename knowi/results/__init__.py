from .schema import LEARNING_STYLES, Quest, QuestCompletion, UserProfile
from .progress import UserProgress

__all__ = ["LEARNING_STYLES", "Quest", "QuestCompletion", "UserProfile", "UserProgress"]
