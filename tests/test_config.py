import io
import os
import random
import tempfile
import unittest
from contextlib import redirect_stdout
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from knowi.app import explain
from knowi.app.catalog import PROGRAMMING_QUESTIONS
from knowi.drills.math_problem import ProblemKind
from knowi.scoring import AnswerScoringEngine, Difficulty
from knowi.config.config import load_config, validate_config
from knowi.util.randomness import make_rng, seed_if_needed


class ConfigTests(unittest.TestCase):
    def test_defaults_load(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["scoring"]["correct_ratio"], 0.7)
        self.assertEqual(cfg["session"]["hint_penalty_cap"], 25.0)
        self.assertEqual(cfg["math"]["escalate_every"], 5)
        self.assertEqual(cfg["progress"]["xp_per_level"], 500)

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["scoring"]["partial_ratio"], 0.4)
        self.assertEqual(cfg["quiz"]["max_xp"], 50)
        self.assertEqual(cfg["dictation"]["xp_per_correct"], 30)

    def test_bad_values_fall_back_with_warning(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config(
                {
                    "scoring": {"correct_ratio": 0.3, "partial_ratio": 0.6, "confusion_threshold": "meh"},
                    "math": {"start_tier": 7, "max_tier": 2, "escalate_every": 0},
                    "progress": {"xp_per_level": 0},
                }
            )
        self.assertEqual((cfg["scoring"]["partial_ratio"], cfg["scoring"]["correct_ratio"]), (0.3, 0.6))
        self.assertEqual(cfg["scoring"]["confusion_threshold"], -0.3)
        self.assertEqual(cfg["math"]["start_tier"], 1)
        self.assertEqual(cfg["math"]["max_tier"], 2)
        self.assertEqual(cfg["math"]["escalate_every"], 5)
        self.assertEqual(cfg["progress"]["xp_per_level"], 500)
        self.assertIn("WARNING:", buf.getvalue())

    def test_yaml_file_is_read(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("scoring:\n  min_length: 10\nmath:\n  duration_s: 90\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["scoring"]["min_length"], 10)
        self.assertEqual(cfg["math"]["duration_s"], 90)
        self.assertEqual(cfg["scoring"]["correct_ratio"], 0.7)

    def test_missing_file_exits(self) -> None:
        with mock.patch("sys.stderr", new_callable=io.StringIO):
            with self.assertRaises(SystemExit):
                load_config("/nonexistent/knowi.yml")


class RandomnessTests(unittest.TestCase):
    def test_seed_from_env(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "17"}):
            self.assertEqual(seed_if_needed(), 17)
            first = random.random()
            seed_if_needed()
            self.assertEqual(random.random(), first)

    def test_bad_or_missing_seed(self) -> None:
        with mock.patch.dict(os.environ, {"SEED": "abc"}), redirect_stdout(io.StringIO()):
            self.assertIsNone(seed_if_needed())
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(seed_if_needed())

    def test_make_rng(self) -> None:
        self.assertEqual(make_rng(5).random(), make_rng(5).random())
        self.assertIsInstance(make_rng(), random.Random)


class ExplainTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.enable(False)

    def test_trace_only_when_enabled(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            explain.trace("quiet", {"a": 1})
            explain.enable(True)
            explain.trace("loud", {"a": 1})
        self.assertTrue(explain.enabled())
        self.assertEqual(buf.getvalue().strip(), '[EXPLAIN] loud :: {"a":1}')

    def test_payload_values_are_shaped(self) -> None:
        shaped = explain.shape(
            {
                "ratio": 7 / 9,
                "kind": ProblemKind.DIVISION,
                "level": Difficulty.ADVANCED,
                "terms": ("data", "store"),
                "tags": {"b", "a"},
                "at": datetime(2024, 5, 1, 9, 30, tzinfo=timezone.utc),
                "ok": True,
                "none": None,
            }
        )
        self.assertEqual(
            shaped,
            {
                "ratio": 0.778,
                "kind": "division",
                "level": "advanced",
                "terms": ["data", "store"],
                "tags": ["a", "b"],
                "at": "2024-05-01T09:30:00+00:00",
                "ok": True,
                "none": None,
            },
        )

    def test_graded_answer_trace_line(self) -> None:
        buf = io.StringIO()
        explain.enable(True)
        with redirect_stdout(buf):
            AnswerScoringEngine().evaluate("Variables store data in memory.", PROGRAMMING_QUESTIONS[0])
        line = buf.getvalue().strip()
        self.assertTrue(line.startswith("[EXPLAIN] answer_evaluated :: "))
        self.assertIn('"ratio":0.444', line)


if __name__ == "__main__":
    unittest.main()
