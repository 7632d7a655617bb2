"""Suggestion ranking — completions for the partial word before the cursor."""
import logging
from dataclasses import dataclass
from typing import List

from dkeys.buffer import trailing_token

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3


@dataclass(frozen=True)
class SuggestionCandidate:
    text: str
    is_prefix: bool
    edit_distance: int

    @property
    def sort_key(self):
        # prefix matches first, then closer, then shorter
        return (not self.is_prefix, self.edit_distance, len(self.text))


def levenshtein(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance (insert/delete/substitute cost 1)."""
    a, b = a.lower(), b.lower()
    la, lb = len(a), len(b)
    if la == 0:
        return lb
    if lb == 0:
        return la

    d = [[0] * (lb + 1) for _ in range(la + 1)]
    for i in range(la + 1):
        d[i][0] = i
    for j in range(lb + 1):
        d[0][j] = j

    for i in range(1, la + 1):
        for j in range(1, lb + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            d[i][j] = min(
                d[i - 1][j] + 1,       # deletion
                d[i][j - 1] + 1,       # insertion
                d[i - 1][j - 1] + cost  # substitution
            )

    return d[la][lb]


def normalize_candidates(raw: List[str], token: str) -> List[str]:
    """Trim, drop empties and the token itself, dedupe preserving first-seen order."""
    token_lower = token.lower()
    normalized: List[str] = []
    seen = set()
    for candidate in raw:
        trimmed = candidate.strip()
        if not trimmed:
            continue
        if trimmed.lower() == token_lower:
            continue
        if trimmed in seen:
            continue
        seen.add(trimmed)
        normalized.append(trimmed)
    return normalized


class SuggestionRanker:
    """Ranks oracle candidates for the token ending at the cursor.

    The oracle must provide ``completions(partial, locale)`` and
    ``corrections(partial, locale)``; corrections are only consulted
    when completions come back empty.
    """

    def __init__(self, oracle, locale: str = "en_US", limit: int = MAX_SUGGESTIONS):
        self.oracle = oracle
        self.locale = locale
        self.limit = min(limit, MAX_SUGGESTIONS)

    def rank(self, text_before_cursor: str) -> List[str]:
        """Return at most ``limit`` suggestions, best first."""
        if not text_before_cursor:
            return []

        token = trailing_token(text_before_cursor)
        if not token:
            return []

        raw = list(self.oracle.completions(token, self.locale) or [])
        if not raw:
            raw = list(self.oracle.corrections(token, self.locale) or [])

        normalized = normalize_candidates(raw, token)
        if not normalized:
            return []

        scored = self.score(normalized, token)
        # sorted() is stable, so equal keys keep oracle order
        scored = sorted(scored, key=lambda c: c.sort_key)
        top = [c.text for c in scored[:self.limit]]
        logger.debug("Suggestions for %r: %s", token, top)
        return top

    @staticmethod
    def score(candidates: List[str], token: str) -> List[SuggestionCandidate]:
        token_lower = token.lower()
        return [
            SuggestionCandidate(
                text=c,
                is_prefix=c.lower().startswith(token_lower),
                edit_distance=levenshtein(c, token),
            )
            for c in candidates
        ]
