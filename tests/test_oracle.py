"""Tests for the pyspellchecker-backed completion oracle."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from dkeys.oracle import SpellCheckOracle
from dkeys.suggestions import SuggestionRanker

ORACLE = SpellCheckOracle()


def test_completions_are_prefix_words():
    words = ORACLE.completions("hel", "en_US")
    assert words
    assert len(words) <= ORACLE.limit
    assert all(w.startswith("hel") for w in words)
    assert "hel" not in words


def test_completions_case_insensitive():
    assert ORACLE.completions("HEL", "en_US") == ORACLE.completions("hel", "en_US")


def test_corrections_for_misspelling():
    words = ORACLE.corrections("helo", "en_US")
    assert "hello" in words
    assert "helo" not in words


def test_empty_input():
    assert ORACLE.completions("", "en_US") == []
    assert ORACLE.corrections("", "en_US") == []


def test_ranker_with_real_dictionary():
    ranker = SuggestionRanker(ORACLE)
    result = ranker.rank("I want to wri")
    assert 0 < len(result) <= 3
    assert all(r.lower().startswith("wri") for r in result)
    assert result == ranker.rank("I want to wri")
