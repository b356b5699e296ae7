"""American vs British spelling preference from source text."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

from .files import is_source_file
from .logging import logger

AMERICAN = "American"
BRITISH = "British"

MAX_FILE_SIZE = 100_000  # bytes; larger files are usually generated

SPELLING_PAIRS = [
    ("color", "colour"),
    ("favorite", "favourite"),
    ("honor", "honour"),
    ("behavior", "behaviour"),
    ("organize", "organise"),
    ("organization", "organisation"),
    ("analyze", "analyse"),
    ("analyzer", "analyser"),
    ("recognize", "recognise"),
    ("realize", "realise"),
    ("center", "centre"),
    ("meter", "metre"),
    ("theater", "theatre"),
    ("defense", "defence"),
    ("license", "licence"),
    ("apologize", "apologise"),
    ("utilize", "utilise"),
    ("catalog", "catalogue"),
    ("dialog", "dialogue"),
    ("gray", "grey"),
    ("traveling", "travelling"),
    ("canceled", "cancelled"),
    ("modeling", "modelling"),
    ("labeled", "labelled"),
]


def _word_pattern(words: Iterable[str]) -> re.Pattern:
    # Only a neighbouring letter joins a word; digits, "_" and punctuation end it
    alternatives = "|".join(re.escape(w) for w in words)
    return re.compile(rf"(?<![^\W\d_])(?:{alternatives})(?![^\W\d_])", re.IGNORECASE)


_AMERICAN_RE = _word_pattern(a for a, _ in SPELLING_PAIRS)
_BRITISH_RE = _word_pattern(b for _, b in SPELLING_PAIRS)


def count_spellings(text: str) -> tuple[int, int]:
    """(american, british) whole-word occurrence counts in text."""
    return len(_AMERICAN_RE.findall(text)), len(_BRITISH_RE.findall(text))


def _read_text(path: Path) -> str | None:
    try:
        if not path.is_file() or path.stat().st_size > MAX_FILE_SIZE:
            return None
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Failed to read '%s': %s", path, e)
        return None
    return None if "\0" in text else text


def preferred_english(repo_path: Path, tracked_files: Iterable[str]) -> str:
    """British only when British spellings strictly outnumber American ones."""
    american = british = 0
    for rel in tracked_files:
        if not is_source_file(rel):
            continue
        text = _read_text(repo_path / rel)
        if text is None:
            continue
        a, b = count_spellings(text)
        american += a
        british += b

    logger.debug("Spelling evidence: %d American, %d British", american, british)
    return BRITISH if british > american else AMERICAN
