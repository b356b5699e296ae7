"""Tests for the preference scoring rules."""

import itertools

import pytest

from agent_primer.scoring import (
    MOCKING_FRAMEWORKS,
    TEST_FRAMEWORKS,
    UNKNOWN,
    majority_enabled,
    pick_preferred,
    pick_winner,
    rank_by_signal,
    score_candidates,
)


class TestKeywordScoring:
    def test_no_signals(self):
        assert pick_preferred(TEST_FRAMEWORKS, []) == UNKNOWN

    def test_no_matching_signal(self):
        assert pick_preferred(TEST_FRAMEWORKS, ["Serilog", "Newtonsoft.Json"]) == UNKNOWN

    def test_unique_winner(self):
        signals = ["xunit", "xunit.runner.visualstudio", "Moq"]
        assert pick_preferred(TEST_FRAMEWORKS, signals) == "xUnit"
        assert pick_preferred(MOCKING_FRAMEWORKS, signals) == "Moq"

    def test_case_insensitive_substring(self):
        assert pick_preferred(TEST_FRAMEWORKS, ["NUnit3TestAdapter"]) == "NUnit"
        assert pick_preferred(MOCKING_FRAMEWORKS, ["NSubstitute.Analyzers.CSharp"]) == "NSubstitute"

    def test_tie_is_unknown(self):
        assert pick_preferred(TEST_FRAMEWORKS, ["NUnit", "xunit"]) == UNKNOWN

    def test_tie_unknown_in_any_order(self):
        signals = ["NUnit", "NUnit.Analyzers", "xunit", "xunit.core", "Serilog"]
        for order in itertools.permutations(signals):
            assert pick_preferred(TEST_FRAMEWORKS, order) == UNKNOWN

    def test_signal_can_score_several_candidates(self):
        table = {"Alpha": ("foo",), "Beta": ("bar",)}
        assert score_candidates(table, ["foobar", "foo"]) == {"Alpha": 2, "Beta": 1}
        assert pick_preferred(table, ["foobar", "foo"]) == "Alpha"

    def test_signal_counts_once_per_candidate(self):
        table = {"Alpha": ("foo", "oo")}
        assert score_candidates(table, ["foo"]) == {"Alpha": 1}

    def test_none_signal_ignored(self):
        assert score_candidates(TEST_FRAMEWORKS, [None, "mstest.testframework"])["MSTest"] == 1

    def test_pick_winner_empty_table(self):
        assert pick_winner({}) == UNKNOWN


class TestMajorityVote:
    @pytest.mark.parametrize(
        "disabled, total, expected",
        [
            (0, 0, True),
            (2, 4, True),
            (3, 4, False),
            (0, 5, True),
            (5, 5, False),
            (1, 3, True),
            (2, 3, False),
        ],
    )
    def test_rule(self, disabled, total, expected):
        assert majority_enabled(disabled, total) is expected


class TestRankBySignal:
    def test_no_signal(self):
        assert rank_by_signal({"A": 0, "B": 0}) == [UNKNOWN]
        assert rank_by_signal({}) == [UNKNOWN]

    def test_descending_and_zero_excluded(self):
        assert rank_by_signal({"A": 1, "B": 5, "C": 0}) == ["B", "A"]

    def test_ties_keep_table_order(self):
        assert rank_by_signal({"A": 2, "B": 2}) == ["A", "B"]

    def test_demoted_always_last(self):
        counts = {"Avalonia": 1, "WPF": 0, "WinForms": 10}
        assert rank_by_signal(counts, demoted="WinForms") == ["Avalonia", "WinForms"]

    def test_demoted_alone(self):
        assert rank_by_signal({"Avalonia": 0, "WinForms": 1}, demoted="WinForms") == ["WinForms"]
