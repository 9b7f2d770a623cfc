from __future__ import annotations

"""Configuration loading and validation for knowi.

This module loads YAML configuration, applies defaults, and validates
that thresholds and tiers are sane before they reach the scoring core.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml


MIN_TIER = 1
MAX_TIER = 3


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _ratio(section: Dict[str, Any], name: str, fallback: float) -> None:
    try:
        value = float(section.get(name))
    except (TypeError, ValueError):
        value = -1.0
    if not (0.0 <= value <= 1.0):
        print(f"WARNING: {name} must be within 0..1, got '{section.get(name)}'; using {fallback}.")
        value = fallback
    section[name] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Unknown or out-of-range values fall back to the defaults with a warning
    rather than aborting, so a half-edited config still runs.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    # Shallow defaults for missing sections
    for name in ("scoring", "session", "math", "quiz", "dictation", "progress"):
        if not isinstance(cfg.get(name), dict):
            cfg[name] = {}

    scoring = cfg["scoring"]
    session = cfg["session"]
    math = cfg["math"]
    quiz = cfg["quiz"]

    scoring.setdefault("min_length", 5)
    scoring.setdefault("correct_ratio", 0.7)
    scoring.setdefault("partial_ratio", 0.4)
    scoring.setdefault("confusion_threshold", -0.3)

    session.setdefault("hint_penalty", 5.0)
    session.setdefault("hint_penalty_cap", 25.0)
    session.setdefault("default_score", 70.0)
    session.setdefault("efficiency_cap", 1.5)
    session.setdefault("completion_weight", 80.0)

    math.setdefault("start_tier", 1)
    math.setdefault("max_tier", 3)
    math.setdefault("escalate_every", 5)
    math.setdefault("duration_s", 60)
    math.setdefault("completion_threshold", 8)
    math.setdefault("moves_required", 2)
    math.setdefault("tilt_threshold", 0.5)

    quiz.setdefault("max_xp", 50)
    quiz.setdefault("min_xp", 10)
    quiz.setdefault("attempt_penalty", 10)

    cfg["dictation"].setdefault("xp_per_correct", 30)
    cfg["progress"].setdefault("xp_per_level", 500)
    cfg["progress"].setdefault("daily_goal", 100)

    _ratio(scoring, "correct_ratio", 0.7)
    _ratio(scoring, "partial_ratio", 0.4)
    if scoring["partial_ratio"] > scoring["correct_ratio"]:
        print("WARNING: partial_ratio exceeds correct_ratio, swapping them.")
        scoring["partial_ratio"], scoring["correct_ratio"] = scoring["correct_ratio"], scoring["partial_ratio"]

    try:
        confusion = float(scoring["confusion_threshold"])
    except (TypeError, ValueError):
        confusion = -2.0
    if not (-1.0 <= confusion <= 1.0):
        print(f"WARNING: Unsupported confusion_threshold '{scoring['confusion_threshold']}', using -0.3.")
        confusion = -0.3
    scoring["confusion_threshold"] = confusion
    scoring["min_length"] = max(0, int(scoring["min_length"]))

    for name in ("start_tier", "max_tier"):
        tier = math.get(name)
        if not isinstance(tier, int) or not (MIN_TIER <= tier <= MAX_TIER):
            print(f"WARNING: Unsupported {name} '{tier}', using {MIN_TIER if name == 'start_tier' else MAX_TIER}.")
            math[name] = MIN_TIER if name == "start_tier" else MAX_TIER
    if math["start_tier"] > math["max_tier"]:
        math["start_tier"] = math["max_tier"]
    if int(math["escalate_every"]) < 1:
        print("WARNING: escalate_every must be >= 1, using 5.")
        math["escalate_every"] = 5

    if int(cfg["progress"]["xp_per_level"]) <= 0:
        print("WARNING: xp_per_level must be positive, using 500.")
        cfg["progress"]["xp_per_level"] = 500

    return cfg
