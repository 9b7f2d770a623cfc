import random
import threading
import unittest

from knowi.app.catalog import DICTATION_CONTENTS, PROGRAMMING_QUESTIONS
from knowi.app.events import EventBus, UtteranceEvents
from knowi.drills.dictation import DictationContent, DictationLesson, LessonState
from knowi.drills.motion_math import GameSettings, MotionMathGame, MotionTarget, direction_from_attitude
from knowi.drills.nlp_quiz import NLPQuiz, QuizXP
from knowi.stats import SessionScoreTracker


def _unlock(game: MotionMathGame) -> None:
    while not game.options_unlocked:
        assert game.register_motion(game.current_target)


def _solve(game: MotionMathGame) -> None:
    _unlock(game)
    assert game.select_answer(game.current_problem.correct_answer) is True
    game.dismiss_feedback()


class MotionMathGameTests(unittest.TestCase):
    def setUp(self) -> None:
        self.game = MotionMathGame(rng=random.Random(2024))

    def test_answers_ignored_until_running_and_unlocked(self) -> None:
        g = self.game
        self.assertIsNone(g.select_answer(0))
        g.start()
        self.assertFalse(g.options_unlocked)
        self.assertIsNone(g.select_answer(g.current_problem.correct_answer))
        wrong = next(d for d in MotionTarget if d != g.current_target)
        self.assertFalse(g.register_motion(wrong))
        self.assertEqual(g.successful_moves, 0)
        _unlock(g)
        self.assertEqual(g.successful_moves, 2)
        self.assertFalse(g.register_motion(g.current_target))

    def test_correct_answer_scores_and_moves_on(self) -> None:
        g = self.game
        g.start()
        first = g.current_problem
        _unlock(g)
        self.assertTrue(g.select_answer(first.correct_answer))
        self.assertIsNone(g.select_answer(first.correct_answer))
        self.assertEqual(g.score, first.points)
        self.assertEqual(g.problems_solved, 1)
        g.dismiss_feedback()
        self.assertFalse(g.show_feedback)
        self.assertFalse(g.options_unlocked)

    def test_wrong_answer_retries_same_problem(self) -> None:
        g = self.game
        g.start()
        _unlock(g)
        problem = g.current_problem
        wrong = (problem.correct_answer + 1) % 4
        self.assertFalse(g.select_answer(wrong))
        g.dismiss_feedback()
        self.assertIs(g.current_problem, problem)
        self.assertEqual(g.score, 0)
        self.assertTrue(g.select_answer(problem.correct_answer))

    def test_tier_escalates_every_five_solved_and_caps(self) -> None:
        g = self.game
        g.start()
        self.assertEqual(g.tier, 1)
        for _ in range(5):
            _solve(g)
        self.assertEqual(g.tier, 2)
        self.assertEqual(g.current_problem.difficulty, 2)
        for _ in range(10):
            _solve(g)
        self.assertEqual(g.tier, 3)
        g.reset()
        self.assertEqual(g.tier, 1)
        self.assertEqual(g.score, 0)

    def test_countdown_ends_game(self) -> None:
        g = MotionMathGame(GameSettings(duration_s=3, completion_threshold=1), rng=random.Random(1))
        g.start()
        _solve(g)
        g.tick()
        g.tick()
        self.assertTrue(g.running)
        g.tick()
        self.assertFalse(g.running)
        self.assertEqual(g.time_remaining, 0)
        self.assertTrue(g.challenge_completed)
        g.tick()
        self.assertEqual(g.time_remaining, 0)

    def test_not_enough_solved_is_not_completed(self) -> None:
        g = self.game
        g.start()
        g.end()
        self.assertFalse(g.challenge_completed)

    def test_attitude_samples_map_to_directions(self) -> None:
        self.assertIs(direction_from_attitude(-0.8, 0.1), MotionTarget.LEFT)
        self.assertIs(direction_from_attitude(0.6, 0.9), MotionTarget.DOWN)
        self.assertIs(direction_from_attitude(0.2, -0.7), MotionTarget.UP)
        self.assertIsNone(direction_from_attitude(0.3, -0.3))
        self.assertEqual(MotionTarget.LEFT.icon, "arrow.left")


class NLPQuizTests(unittest.TestCase):
    def test_xp_shrinks_with_attempts(self) -> None:
        xp = QuizXP()
        self.assertEqual([xp.for_attempts(n) for n in (1, 2, 3, 5, 9)], [50, 40, 30, 10, 10])
        self.assertEqual(xp.for_attempts(0), 0)

    def test_skipping_questions_earns_no_xp(self) -> None:
        quiz = NLPQuiz(PROGRAMMING_QUESTIONS)
        while not quiz.completed:
            self.assertEqual(quiz.next_question(), 0)
        self.assertEqual(quiz.xp_earned, 0)

    def test_skip_after_one_question_only_pays_the_answered_one(self) -> None:
        quiz = NLPQuiz(PROGRAMMING_QUESTIONS[:2])
        quiz.submit(" ".join(PROGRAMMING_QUESTIONS[0].key_terms))
        self.assertEqual(quiz.next_question(), 50)
        self.assertEqual(quiz.next_question(), 0)
        self.assertTrue(quiz.completed)
        self.assertEqual(quiz.xp_earned, 50)

    def test_attempts_and_hints_are_tracked(self) -> None:
        tracker = SessionScoreTracker()
        tracker.start_session("quiz")
        quiz = NLPQuiz(PROGRAMMING_QUESTIONS, tracker=tracker, session_id="quiz")
        quiz.submit("no clue")
        quiz.submit("It is something about numbers.")
        self.assertEqual(quiz.use_hint(), PROGRAMMING_QUESTIONS[0].hint)
        self.assertTrue(quiz.submit(" ".join(PROGRAMMING_QUESTIONS[0].key_terms)).is_correct)
        self.assertEqual(quiz.next_question(), 30)
        snap = tracker.snapshot("quiz")
        self.assertEqual((snap["correct"], snap["incorrect"], snap["hints"]), (1, 2, 1))
        self.assertEqual(quiz.progress(), (2, len(PROGRAMMING_QUESTIONS)))

    def test_completes_after_last_question(self) -> None:
        quiz = NLPQuiz(PROGRAMMING_QUESTIONS[:2])
        quiz.submit(" ".join(PROGRAMMING_QUESTIONS[0].key_terms))
        quiz.next_question()
        self.assertFalse(quiz.completed)
        quiz.submit(" ".join(PROGRAMMING_QUESTIONS[1].key_terms))
        quiz.next_question()
        self.assertTrue(quiz.completed)
        self.assertEqual(quiz.xp_earned, 100)
        self.assertEqual(quiz.next_question(), 0)

    def test_needs_questions(self) -> None:
        with self.assertRaises(ValueError):
            NLPQuiz([])


class DictationLessonTests(unittest.TestCase):
    def _speaker(self, events: UtteranceEvents) -> None:
        self.spoken.append(events.text)
        events.mark_started()
        events.mark_finished()

    def setUp(self) -> None:
        self.spoken = []
        self.lesson = DictationLesson(DICTATION_CONTENTS, speaker=self._speaker)

    def _answer(self, correct: bool) -> None:
        lesson = self.lesson
        lesson.play()
        lesson.begin_answering()
        right = lesson.current.correct_answer_index
        lesson.select(right if correct else (right + 1) % len(lesson.current.options))
        self.assertEqual(lesson.check(), correct)
        lesson.advance()

    def test_state_flow(self) -> None:
        lesson = self.lesson
        self.assertIs(lesson.state, LessonState.LISTENING)
        self.assertIsNone(lesson.check())
        events = lesson.play()
        self.assertTrue(events.finished.is_set())
        self.assertFalse(lesson.speaking)
        self.assertEqual(self.spoken, [DICTATION_CONTENTS[0].text])
        lesson.begin_answering()
        self.assertIs(lesson.state, LessonState.ANSWERING)
        self.assertIsNone(lesson.check())
        with self.assertRaises(IndexError):
            lesson.select(4)
        lesson.select(1)
        self.assertTrue(lesson.check())
        self.assertIs(lesson.state, LessonState.FEEDBACK)
        self.assertIs(lesson.advance(), LessonState.LISTENING)
        self.assertEqual(lesson.index, 1)
        self.assertIsNone(lesson.selected)

    def test_full_lesson_score_xp_and_stars(self) -> None:
        for i in range(len(DICTATION_CONTENTS)):
            self._answer(correct=i < 2)
        self.assertIs(self.lesson.state, LessonState.COMPLETED)
        self.assertEqual(self.lesson.score, 2)
        self.assertEqual(self.lesson.xp_earned(), 60)
        self.assertEqual(self.lesson.stars(), 1)

    def test_stars_thresholds(self) -> None:
        content = DictationContent("t", "q", ("a", "b"), 0)
        lesson = DictationLesson([content] * 3)
        for score, stars in ((0, 0), (1, 1), (2, 2), (3, 3)):
            lesson.score = score
            self.assertEqual(lesson.stars(), stars)

    def test_content_validates_answer_index(self) -> None:
        with self.assertRaises(ValueError):
            DictationContent("t", "q", ("a", "b"), 2)


class UtteranceEventsTests(unittest.TestCase):
    def test_finish_implies_start_and_fires_once(self) -> None:
        bus = EventBus()
        seen = []
        bus.subscribe("utterance_started", lambda text: seen.append(("started", text)))
        bus.subscribe("utterance_finished", lambda text: seen.append(("finished", text)))
        events = UtteranceEvents("hello", bus)
        events.mark_finished()
        events.mark_finished()
        events.mark_started()
        self.assertEqual(seen, [("started", "hello"), ("finished", "hello")])
        self.assertTrue(events.wait_started(timeout=0))

    def test_waiter_sees_finish_from_another_thread(self) -> None:
        events = UtteranceEvents("hello")
        self.assertFalse(events.speaking)
        events.mark_started()
        self.assertTrue(events.speaking)
        t = threading.Timer(0.05, events.mark_finished)
        t.start()
        self.assertTrue(events.wait_finished(timeout=5))
        t.join()
        self.assertFalse(events.speaking)

    def test_handler_errors_propagate(self) -> None:
        bus = EventBus()

        def boom(_payload) -> None:
            raise RuntimeError("handler failed")

        bus.subscribe("x", boom)
        with self.assertRaises(RuntimeError):
            bus.emit("x", None)


if __name__ == "__main__":
    unittest.main()
