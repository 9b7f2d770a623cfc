from __future__ import annotations

"""CLI for knowi: run the quizzes in a terminal."""

import argparse
import time
from pathlib import Path
from typing import Any, Callable, Dict

from .. import __version__
from ..config.config import load_config, validate_config
from ..drills.dictation import LessonState
from ..drills.motion_math import MotionTarget
from ..scoring.commands import check_command
from ..util.randomness import make_rng, seed_if_needed
from . import explain
from .catalog import COMMAND_STEPS, DICTATION_LESSON, MOTION_MATH, PROGRAMMING_QUESTIONS, PROGRAMMING_QUIZ, VOICE_COMMANDS
from .context import AppContext
from .events import UtteranceEvents

_ARROWS = {
    "left": MotionTarget.LEFT,
    "h": MotionTarget.LEFT,
    "right": MotionTarget.RIGHT,
    "l": MotionTarget.RIGHT,
    "up": MotionTarget.UP,
    "k": MotionTarget.UP,
    "down": MotionTarget.DOWN,
    "j": MotionTarget.DOWN,
}


def _build_ui() -> Dict[str, Callable[..., Any]]:
    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    return {"ask": ask, "inform": inform}


def run_quiz(ctx: AppContext, ui: Dict[str, Callable[..., Any]]) -> int:
    ask, inform = ui["ask"], ui["inform"]
    quiz = ctx.new_nlp_quiz(PROGRAMMING_QUIZ)
    ctx.start_tracking(PROGRAMMING_QUIZ)
    while not quiz.completed:
        n, total = quiz.progress()
        q = quiz.current_question
        inform(f"\nQ{n}/{total} [{q.category}, {q.difficulty.value}]: {q.text}")
        if q.code_example:
            inform(q.code_example)
        ans = ask("Your answer ('?' for a hint, empty to skip): ")
        if ans.strip() == "?":
            inform(f"Hint: {quiz.use_hint()}")
            continue
        if ans.strip():
            result = quiz.submit(ans)
            inform(("Correct! " if result.is_correct else "") + result.feedback)
            if not result.is_correct and ask("Try again? [y/N] ").strip().lower() == "y":
                continue
        inform(f"+{quiz.next_question()} XP")
    ctx.progress.award_xp(quiz.xp_earned)
    row = ctx.complete_tracking(PROGRAMMING_QUIZ)
    inform(f"\nQuiz complete: {quiz.xp_earned} XP, session score {row.score:.0f}.")
    return 0


def run_math(ctx: AppContext, ui: Dict[str, Callable[..., Any]]) -> int:
    ask, inform = ui["ask"], ui["inform"]
    game = ctx.new_math_game()
    ctx.start_tracking(MOTION_MATH)
    game.start()
    inform(f"You have {game.time_remaining}s. Tilt with left/right/up/down (or h/l/k/j) to unlock the options.")
    last = time.monotonic()
    while game.running:
        if not game.options_unlocked:
            ans = ask(f"[{game.time_remaining}s] {game.current_problem.question}  tilt {game.current_target.label}: ")
        else:
            for i, opt in enumerate(game.current_problem.options, start=1):
                inform(f"  {i}) {opt}")
            ans = ask(f"[{game.time_remaining}s] Answer 1-4: ")
        now = time.monotonic()
        for _ in range(int(now - last)):
            game.tick()
        last += int(now - last)
        if not game.running:
            break
        if ans.strip().lower() in ("q", "quit"):
            game.end()
            break
        if not game.options_unlocked:
            direction = _ARROWS.get(ans.strip().lower())
            if direction is not None and not game.register_motion(direction):
                inform("Wrong direction.")
            continue
        try:
            choice = int(ans.strip()) - 1
        except ValueError:
            continue
        correct = game.select_answer(choice)
        if correct is None:
            continue
        ctx.record_interaction(MOTION_MATH, "correct" if correct else "incorrect")
        inform(f"Correct! +{game.current_problem.points}" if correct else "Incorrect, try again.")
        game.dismiss_feedback()
    ctx.progress.award_xp(game.score)
    row = ctx.complete_tracking(MOTION_MATH)
    status = "completed" if game.challenge_completed else "not completed"
    inform(f"\nTime! Solved {game.problems_solved} ({status}), {game.score} points, session score {row.score:.0f}.")
    return 0


def _print_speaker(events: UtteranceEvents) -> None:
    events.mark_started()
    print(f"\n  \"{events.text}\"")
    events.mark_finished()


def run_dictation(ctx: AppContext, ui: Dict[str, Callable[..., Any]]) -> int:
    ask, inform = ui["ask"], ui["inform"]
    lesson = ctx.new_dictation(speaker=_print_speaker)
    ctx.start_tracking(DICTATION_LESSON)
    while lesson.state is not LessonState.COMPLETED:
        lesson.play().wait_finished(timeout=30)
        lesson.begin_answering()
        inform(lesson.current.question)
        for i, opt in enumerate(lesson.current.options, start=1):
            inform(f"  {i}) {opt}")
        correct = False
        while lesson.state is LessonState.ANSWERING:
            try:
                lesson.select(int(ask("Answer: ").strip()) - 1)
            except (ValueError, IndexError):
                continue
            correct = lesson.check()
        ctx.record_interaction(DICTATION_LESSON, "correct" if correct else "incorrect")
        inform("Correct!" if correct else f"Incorrect. Answer: {lesson.current.options[lesson.current.correct_answer_index]}")
        lesson.advance()
    ctx.progress.award_xp(lesson.xp_earned())
    row = ctx.complete_tracking(DICTATION_LESSON)
    inform(f"\n{lesson.score} of {len(lesson.contents)} ({'*' * lesson.stars()}), +{lesson.xp_earned()} XP, session score {row.score:.0f}.")
    return 0


def run_voice(ctx: AppContext, ui: Dict[str, Callable[..., Any]]) -> int:
    ask, inform = ui["ask"], ui["inform"]
    ctx.start_tracking(VOICE_COMMANDS)
    for step in COMMAND_STEPS:
        inform(f"\n{step.instructions}")
        while True:
            ok, feedback = check_command(ask("Transcript: "), step)
            ctx.record_interaction(VOICE_COMMANDS, "correct" if ok else "incorrect")
            inform(feedback)
            if ok:
                inform(step.explanation)
                break
    row = ctx.complete_tracking(VOICE_COMMANDS)
    inform(f"\nChallenge complete! Session score {row.score:.0f}.")
    return 0


_RUNNERS = {"quiz": run_quiz, "math": run_math, "dictation": run_dictation, "voice": run_voice}


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="knowi")
    p.add_argument("--version", action="version", version=f"knowi {__version__}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-questions")
    for name, help_text in (
        ("quiz", "Open-response programming quiz"),
        ("math", "Motion math challenge (type directions instead of tilting)"),
        ("dictation", "Listening comprehension lesson (passages are printed)"),
        ("voice", "Voice command challenge (type the transcript)"),
    ):
        rp = sub.add_parser(name, help=help_text)
        rp.add_argument("--config", default=None)
        rp.add_argument("--explain", action="store_true")
        rp.add_argument("--report", default=None, help="Directory for analytics plots and CSV")

    args = p.parse_args(argv)

    if args.cmd == "list-questions":
        for i, q in enumerate(PROGRAMMING_QUESTIONS, start=1):
            print(f"{i}. [{q.category}, {q.difficulty.value}] {q.text} | key terms: {', '.join(q.key_terms)}")
        return 0

    explain.enable(bool(args.explain))
    seed = seed_if_needed()
    cfg = validate_config(load_config(args.config))
    ctx = AppContext.build(cfg, rng=make_rng(seed))

    try:
        status = _RUNNERS[args.cmd](ctx, _build_ui())
    except (KeyboardInterrupt, EOFError):
        print("\nAborted.")
        return 130

    progress = ctx.progress
    print(f"Level {progress.level()} ({progress.level_progress():.0%} to next), {progress.profile.xp_points} XP total.")

    if args.report:
        from analytics import write_report

        expected = {t: q.expected_seconds for t, q in progress.quests.items()}
        summary = write_report(progress.completions, Path(args.report), expected_seconds=expected)
        print(summary.to_string(index=False))
        print(f"Reports saved to: {Path(args.report).resolve()}")
    return status


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
