from __future__ import annotations

"""Spoken-command checks for the voice command challenge.

The host's speech recognizer hands over its transcript; a step passes when
the cleaned transcript contains the expected command.
"""

import string
from dataclasses import dataclass

_PUNCT = str.maketrans("", "", string.punctuation + "¡¿“”‘’«»")


@dataclass(frozen=True)
class CommandStep:
    instructions: str
    expected_command: str
    explanation: str


def clean_transcript(text: str) -> str:
    return " ".join((text or "").lower().translate(_PUNCT).split())


def check_command(transcript: str, step: CommandStep) -> tuple[bool, str]:
    # the expected command keeps symbols like "=", so compare both cleaned
    spoken = clean_transcript(transcript)
    expected = clean_transcript(step.expected_command)
    if expected and expected in spoken:
        return True, "Correct! You said the command."
    return False, f"Not quite. Try again and make sure to say: {step.expected_command}"
