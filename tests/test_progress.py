import unittest
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError

from knowi.app.catalog import MOTION_MATH, PROGRAMMING_QUIZ, QUESTS, get_quest, quest_index
from knowi.app.context import AppContext
from knowi.config.config import load_config, validate_config
from knowi.results import QuestCompletion, UserProfile, UserProgress


class UserProgressTests(unittest.TestCase):
    def setUp(self) -> None:
        self.progress = UserProgress(UserProfile(name="Ana"), quests=QUESTS, xp_per_level=500)

    def test_levels(self) -> None:
        self.assertEqual(self.progress.level(), 1)
        self.assertEqual(self.progress.award_xp(1200), 1200)
        self.assertEqual(self.progress.level(), 3)
        self.assertAlmostEqual(self.progress.level_progress(), 0.4)
        self.progress.award_xp(-50)
        self.assertEqual(self.progress.profile.xp_points, 1200)

    def test_daily_goal(self) -> None:
        self.progress.award_xp(60)
        self.assertFalse(self.progress.daily_goal_reached())
        self.progress.award_xp(40)
        self.assertTrue(self.progress.daily_goal_reached())
        self.progress.reset_daily()
        self.assertEqual(self.progress.profile.daily_progress, 0)
        self.assertEqual(self.progress.profile.xp_points, 100)

    def test_completion_marks_quest_without_touching_catalog(self) -> None:
        row = self.progress.record_quest_completion(PROGRAMMING_QUIZ, 82.5, 410.0)
        self.assertEqual(row.quest_title, PROGRAMMING_QUIZ)
        self.assertEqual(self.progress.completions, [row])
        self.assertTrue(self.progress.quests[PROGRAMMING_QUIZ].is_completed)
        self.assertEqual(self.progress.quests[PROGRAMMING_QUIZ].completion_percentage, 1.0)
        self.assertFalse(get_quest(PROGRAMMING_QUIZ).is_completed)

    def test_unknown_quest(self) -> None:
        self.assertIsNone(self.progress.expected_seconds("Nope"))
        self.assertIsNone(self.progress.mark_quest_completed("Nope"))
        self.assertEqual(self.progress.expected_seconds(PROGRAMMING_QUIZ), 900.0)
        with self.assertRaises(KeyError):
            get_quest("Nope")
        self.assertEqual(set(quest_index()), {q.title for q in QUESTS})


class SchemaTests(unittest.TestCase):
    def test_profile_rejects_unknown_learning_style(self) -> None:
        with self.assertRaises(ValidationError):
            UserProfile(name="x", learning_styles=["telepathic"])

    def test_completion_times_are_utc(self) -> None:
        naive = QuestCompletion(quest_title="q", score=1, time_spent_s=1, completed_at=datetime(2024, 5, 1, 12, 0))
        self.assertEqual(naive.completed_at.tzinfo, timezone.utc)
        offset = timezone(timedelta(hours=2))
        aware = QuestCompletion(quest_title="q", score=1, time_spent_s=1, completed_at=datetime(2024, 5, 1, 12, 0, tzinfo=offset))
        self.assertEqual(aware.completed_at.hour, 10)
        with self.assertRaises(ValidationError):
            QuestCompletion(quest_title="q", score=-1, time_spent_s=1)


class AppContextTests(unittest.TestCase):
    def setUp(self) -> None:
        self.ctx = AppContext.build(validate_config(load_config()))

    def test_graded_session_is_recorded(self) -> None:
        seen = []
        self.ctx.bus.subscribe("quest_completed", seen.append)
        self.ctx.start_tracking(PROGRAMMING_QUIZ)
        self.ctx.record_interaction(PROGRAMMING_QUIZ, "correct")
        self.ctx.record_interaction(PROGRAMMING_QUIZ, "incorrect")
        row = self.ctx.complete_tracking(PROGRAMMING_QUIZ)
        self.assertAlmostEqual(row.score, 50.0)
        self.assertEqual(seen, [row])
        self.assertTrue(self.ctx.progress.quests[PROGRAMMING_QUIZ].is_completed)

    def test_ungraded_session_uses_quest_duration(self) -> None:
        self.ctx.start_tracking(MOTION_MATH)
        row = self.ctx.complete_tracking(MOTION_MATH)
        self.assertAlmostEqual(row.score, 120.0)

    def test_manual_score_wins(self) -> None:
        self.ctx.start_tracking(PROGRAMMING_QUIZ)
        self.ctx.record_interaction(PROGRAMMING_QUIZ, "correct")
        self.assertAlmostEqual(self.ctx.complete_tracking(PROGRAMMING_QUIZ, manual_score=42).score, 42.0)

    def test_quiz_factories_share_services(self) -> None:
        quiz = self.ctx.new_nlp_quiz()
        self.assertIs(quiz.engine, self.ctx.engine)
        self.assertIs(quiz.tracker, self.ctx.tracker)
        game = self.ctx.new_math_game()
        self.assertIs(game.generator, self.ctx.generator)
        self.assertEqual(game.settings.duration_s, 60)
        lesson = self.ctx.new_dictation()
        self.assertEqual(lesson.xp_per_correct, 30)
        self.assertIs(lesson.bus, self.ctx.bus)


if __name__ == "__main__":
    unittest.main()
