"""Grammar corrections and the pending batch they live in."""
import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

OVERLAP_WARN = "warn"
OVERLAP_DROP = "drop"
OVERLAP_POLICIES = (OVERLAP_WARN, OVERLAP_DROP)


@dataclass
class Correction:
    """One suggested edit, addressed by codepoint offsets into the full text."""
    start: int
    end: int
    old_text: str
    new_text: str
    explanation: str = ""
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def delta(self) -> int:
        return len(self.new_text) - len(self.old_text)

    @property
    def span(self) -> Tuple[int, int]:
        return (self.start, self.end)

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and self.end > start

    @classmethod
    def from_dict(cls, data: dict) -> "Correction":
        """Build from a grammar-service item.

        Raises KeyError, TypeError or ValueError on a malformed item.
        """
        location = data["location"]
        start, end = location["start"], location["end"]
        if not isinstance(start, int) or not isinstance(end, int):
            raise TypeError(f"location offsets must be integers: {location!r}")
        old_text, new_text = data["oldText"], data["newText"]
        if not isinstance(old_text, str) or not isinstance(new_text, str):
            raise TypeError("oldText and newText must be strings")
        explanation = data.get("explanation") or ""
        return cls(start=start, end=end, old_text=old_text,
                   new_text=new_text, explanation=str(explanation))


def reindex(corrections: Iterable[Correction], applied: Tuple[int, int],
            delta: int) -> List[Correction]:
    """Shift corrections that lie at or after the end of an applied edit.

    Pure: returns new Correction objects, the inputs are untouched.
    Corrections before the applied range and corrections overlapping it
    keep their offsets.
    """
    _, applied_end = applied
    result = []
    for c in corrections:
        if c.start >= applied_end:
            result.append(replace(c, start=c.start + delta, end=c.end + delta))
        else:
            result.append(replace(c))
    return result


def overlapping(corrections: Iterable[Correction], applied: Tuple[int, int]) -> List[Correction]:
    """Corrections whose range intersects the applied range."""
    start, end = applied
    return [c for c in corrections if c.overlaps(start, end)]


class CorrectionBatch:
    """Pending corrections from one grammar check, keyed by id, in response order.

    Empty -> Populated on load(); shrinks by one per settle(); back to
    Empty when the last one is applied or on clear().
    """

    def __init__(self, overlap_policy: str = OVERLAP_WARN):
        if overlap_policy not in OVERLAP_POLICIES:
            raise ValueError(f"unknown overlap policy: {overlap_policy!r}")
        self.overlap_policy = overlap_policy
        self._items: "OrderedDict[str, Correction]" = OrderedDict()

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items.values()))

    def __contains__(self, correction_id: str) -> bool:
        return correction_id in self._items

    @property
    def is_empty(self) -> bool:
        return not self._items

    def get(self, correction_id: str) -> Optional[Correction]:
        return self._items.get(correction_id)

    def load(self, corrections: Iterable[Correction]):
        """Replace the batch with a fresh response."""
        self._items.clear()
        for c in corrections:
            self._items[c.id] = c

    def clear(self):
        self._items.clear()

    def remove(self, correction_id: str) -> Optional[Correction]:
        return self._items.pop(correction_id, None)

    def settle(self, applied: Correction) -> List[Correction]:
        """Drop an applied correction and re-index its siblings.

        Returns the siblings that overlapped the applied range. Under the
        ``warn`` policy they stay pending with unchanged offsets (and may
        be stale); under ``drop`` they are removed.
        """
        self._items.pop(applied.id, None)
        siblings = list(self._items.values())

        clashes = overlapping(siblings, applied.span)
        for c in clashes:
            logger.warning("Overlapping correction %r at %d-%d (applied %r at %d-%d)",
                           c.old_text, c.start, c.end,
                           applied.old_text, applied.start, applied.end)

        shifted = reindex(siblings, applied.span, applied.delta)
        for c in shifted:
            self._items[c.id] = c

        if clashes and self.overlap_policy == OVERLAP_DROP:
            for c in clashes:
                self._items.pop(c.id, None)
        return clashes
