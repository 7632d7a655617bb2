"""Word-completion oracle backed by pyspellchecker's frequency dictionaries."""
import bisect
import logging
from typing import Dict, List

from spellchecker import SpellChecker

logger = logging.getLogger(__name__)


def _language(locale: str) -> str:
    """'en_US' -> 'en'."""
    return locale.replace('-', '_').split('_', 1)[0].lower() or 'en'


class SpellCheckOracle:
    """Completion and near-miss candidates for a partial word.

    Lookups are case-insensitive. Results are ordered by dictionary
    frequency, most common first, and capped at ``limit``.
    """

    def __init__(self, limit: int = 10):
        self.limit = limit
        self._spell: Dict[str, SpellChecker] = {}
        self._sorted_words: Dict[str, List[str]] = {}

    def _checker(self, locale: str) -> SpellChecker:
        lang = _language(locale)
        if lang not in self._spell:
            logger.debug("Loading dictionary for %s", lang)
            spell = SpellChecker(language=lang)
            self._spell[lang] = spell
            self._sorted_words[lang] = sorted(spell.word_frequency.dictionary.keys())
        return self._spell[lang]

    def completions(self, partial_word: str, locale: str = "en_US") -> List[str]:
        """Dictionary words that start with partial_word."""
        if not partial_word:
            return []
        spell = self._checker(locale)
        words = self._sorted_words[_language(locale)]
        prefix = partial_word.lower()

        found = []
        i = bisect.bisect_left(words, prefix)
        while i < len(words) and words[i].startswith(prefix):
            if words[i] != prefix:
                found.append(words[i])
            i += 1
        return self._by_frequency(spell, found)

    def corrections(self, partial_word: str, locale: str = "en_US") -> List[str]:
        """Near-miss spellings of partial_word (edit distance 1 or 2)."""
        if not partial_word:
            return []
        spell = self._checker(locale)
        lower = partial_word.lower()
        candidates = spell.candidates(lower) or set()
        candidates.discard(lower)
        return self._by_frequency(spell, [c for c in candidates if c in spell])

    def _by_frequency(self, spell: SpellChecker, words: List[str]) -> List[str]:
        # Alphabetical tiebreak keeps the order deterministic across set iteration.
        ranked = sorted(words, key=lambda w: (-spell[w], w))
        return ranked[:self.limit]
