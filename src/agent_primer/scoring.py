"""Preference scoring over noisy evidence.

Three resolution rules share this module:

- keyword scoring: pick one winner from mutually exclusive candidates,
  each identified by substrings in free-text signals (package names);
- majority vote: an on/off setting aggregated from per-project flags;
- signal ranking: order several simultaneously-valid candidates.

Ambiguity is never broken arbitrarily. Ties and empty evidence resolve
to ``UNKNOWN``.
"""

from __future__ import annotations

from typing import Iterable, Mapping

UNKNOWN = "Unknown"

# Candidate -> lowercase keywords counted as evidence for it
TEST_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "NUnit": ("nunit",),
    "xUnit": ("xunit",),
    "MSTest": ("mstest",),
}

MOCKING_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "Moq": ("moq",),
    "FakeItEasy": ("fakeiteasy",),
    "NSubstitute": ("nsubstitute",),
}

UI_AVALONIA = "Avalonia"
UI_WPF = "WPF"
UI_WINFORMS = "WinForms"


def score_candidates(table: Mapping[str, Iterable[str]], signals: Iterable[str]) -> dict[str, int]:
    """Count, per candidate, the signals containing any of its keywords.

    One signal can score several candidates; there is no precedence.
    """
    keywords = {name: [k.lower() for k in words] for name, words in table.items()}
    scores = {name: 0 for name in keywords}

    for signal in signals:
        text = (signal or "").lower()
        for name, words in keywords.items():
            if any(word and word in text for word in words):
                scores[name] += 1

    return scores


def pick_winner(scores: Mapping[str, int]) -> str:
    """The unique top-scoring candidate, or UNKNOWN for no evidence or a tie."""
    if not scores:
        return UNKNOWN

    top = max(scores.values())
    if top <= 0:
        return UNKNOWN

    leaders = [name for name, score in scores.items() if score == top]
    return leaders[0] if len(leaders) == 1 else UNKNOWN


def pick_preferred(table: Mapping[str, Iterable[str]], signals: Iterable[str]) -> str:
    """Score ``signals`` against a keyword table and resolve a single preference."""
    return pick_winner(score_candidates(table, signals))


def majority_enabled(disabled_count: int, total: int) -> bool:
    """A setting is enabled unless more than half of the projects disable it.

    Exactly half favours enabled; zero projects is vacuously enabled.
    """
    return disabled_count * 2 <= total


def rank_by_signal(counts: Mapping[str, int], demoted: str | None = None) -> list[str]:
    """Candidates with a nonzero signal, strongest first.

    Equal counts keep the order of ``counts``. The ``demoted`` candidate,
    when present, always comes last: its signal is only indirect evidence.
    """
    present = [(name, count) for name, count in counts.items() if count > 0]
    if not present:
        return [UNKNOWN]

    ranked = sorted(
        present,
        key=lambda item: (item[0] == demoted, -item[1] if item[0] != demoted else 0),
    )
    return [name for name, _ in ranked]
