from __future__ import annotations

"""Lightweight text analysis for short free-text answers.

Three passes pull candidate terms out of an answer: capitalized
named-entity-like words, content words, and a vocabulary scan. A small
polarity lexicon gives a sentiment estimate in [-1, 1].
"""

import re
from typing import Iterable, List

from .lexicon import NEGATIVE_PHRASES, NEGATIVE_WORDS, NEGATORS, POSITIVE_WORDS, STOPWORDS, TECH_TERMS

WORD_RE = re.compile(r"[^\W\d_]+(?:['’][^\W\d_]+)*")
_SENTENCE_END = (".", "!", "?", ":", ";")

# How many preceding tokens a negator reaches.
NEGATION_WINDOW = 2


def tokenize(text: str) -> List[str]:
    return [m.group(0).lower().replace("’", "'") for m in WORD_RE.finditer(text)]


def _append_unique(out: List[str], term: str) -> None:
    if term and term not in out:
        out.append(term)


def named_entities(text: str) -> List[str]:
    """Capitalized words that do not open a sentence, plus acronyms.

    One-letter words ("I") are never names.
    """
    found: List[str] = []
    for m in WORD_RE.finditer(text):
        word = m.group(0)
        if len(word) < 2 or not word[0].isupper():
            continue
        before = text[: m.start()].rstrip()
        sentence_start = not before or before.endswith(_SENTENCE_END)
        acronym = word.isupper()
        if sentence_start and not acronym:
            continue
        _append_unique(found, word.lower())
    return found


def content_words(text: str, min_length: int = 3) -> List[str]:
    found: List[str] = []
    for token in tokenize(text):
        if len(token) < min_length or token in STOPWORDS or token in NEGATORS:
            continue
        _append_unique(found, token)
    return found


def vocabulary_hits(text: str, vocabulary: Iterable[str]) -> List[str]:
    lowered = text.lower()
    found: List[str] = []
    for term in vocabulary:
        t = term.lower()
        if t and t in lowered:
            _append_unique(found, t)
    return found


def extract_key_terms(raw_text: str, extra_vocabulary: Iterable[str] = ()) -> List[str]:
    """Collect candidate key terms from an answer, in discovery order.

    ``raw_text`` keeps its original casing so capitalized words can be told
    apart; every returned term is lowercase.
    """
    terms: List[str] = []
    for term in named_entities(raw_text):
        _append_unique(terms, term)
    for term in content_words(raw_text):
        _append_unique(terms, term)
    for term in vocabulary_hits(raw_text, [*TECH_TERMS, *extra_vocabulary]):
        _append_unique(terms, term)
    return terms


def analyze_sentiment(text: str) -> float:
    """Polarity estimate in [-1, 1]; 0 for neutral or empty text.

    A negator within ``NEGATION_WINDOW`` tokens flips a word's polarity, so
    "I don't understand" scores negative.
    """
    tokens = tokenize(text)
    lowered = " ".join(tokens)
    pos = 0
    neg = sum(lowered.count(p) for p in NEGATIVE_PHRASES)
    for i, token in enumerate(tokens):
        if token in POSITIVE_WORDS:
            polarity = 1
        elif token in NEGATIVE_WORDS:
            polarity = -1
        else:
            continue
        window = tokens[max(0, i - NEGATION_WINDOW): i]
        if any(w in NEGATORS for w in window):
            polarity = -polarity
        if polarity > 0:
            pos += 1
        else:
            neg += 1
    total = pos + neg
    if total == 0:
        return 0.0
    return (pos - neg) / (total + 1)
