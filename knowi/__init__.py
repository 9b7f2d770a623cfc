"""knowi package initialization.

Scoring core for the knowi learning quizzes: free-text answer grading,
per-session score tracking and procedural math problems.
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
