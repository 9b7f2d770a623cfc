from .session_tracker import (
    Counter,
    CountIncrement,
    CustomSignal,
    Interaction,
    ScoringPolicy,
    SessionOutcome,
    SessionRecord,
    SessionScoreTracker,
    parse_interaction,
    score_record,
)

__all__ = [
    "Counter",
    "CountIncrement",
    "CustomSignal",
    "Interaction",
    "ScoringPolicy",
    "SessionOutcome",
    "SessionRecord",
    "SessionScoreTracker",
    "parse_interaction",
    "score_record",
]
