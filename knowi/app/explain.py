from __future__ import annotations

"""Explain Mode: one-line traces of what the scoring core decided.

``knowi --explain`` turns it on. Each milestone (answer graded, session
opened or closed, problem generated, tier raised, quest completed) prints

    [EXPLAIN] answer_evaluated :: {"correct":true,"ratio":0.778,...}

Payload values are shaped before printing: floats are cut to
``FLOAT_DIGITS`` decimals, enums print their value, tuples and sets become
lists and datetimes become ISO strings. Callers pass raw values.
"""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

FLOAT_DIGITS = 3

_ENABLED = False


def enable(flag: bool = True) -> None:
    global _ENABLED
    _ENABLED = bool(flag)


def enabled() -> bool:
    return _ENABLED


def shape(value: Any) -> Any:
    """Make a payload value short and JSON friendly."""
    if isinstance(value, Enum):
        return shape(value.value)
    if isinstance(value, bool) or value is None or isinstance(value, (int, str)):
        return value
    if isinstance(value, float):
        return round(value, FLOAT_DIGITS)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): shape(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [shape(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(shape(v) for v in value)
    return str(value)


def trace(event: str, payload: Optional[Dict[str, Any]] = None) -> None:
    if not _ENABLED:
        return
    try:
        line = json.dumps(shape(payload or {}), separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        print(f"[EXPLAIN] {event}")
        return
    print(f"[EXPLAIN] {event} :: {line}")
