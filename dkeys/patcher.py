"""Correction patcher — applies offset-addressed corrections through cursor-relative edits."""
import logging

from dkeys.corrections import Correction, CorrectionBatch
from dkeys.errors import InvalidRange, TextMismatch, TextNotFound
from dkeys.proxy import ProxyHandle

logger = logging.getLogger(__name__)


class CorrectionPatcher:
    """Replaces text by sending backspaces then inserting, one correction at a time.

    The host only lets us delete before the cursor and insert at it, so a
    positional replacement is expressed as "rewind by deleting, insert the
    new text, re-insert whatever was deleted past the target". Text after
    the cursor is out of reach; those corrections fall back to searching
    backwards from the cursor for ``old_text``.
    """

    def __init__(self, handle: ProxyHandle, batch: CorrectionBatch):
        self.handle = handle
        self.batch = batch

    def apply(self, correction: Correction) -> bool:
        """Apply one correction and re-index the rest of the batch.

        Returns False (and edits nothing) when the host proxy is gone.
        Raises InvalidRange or TextNotFound when the correction cannot
        be applied; the buffer is then unchanged and the correction
        stays pending.
        """
        if not self.handle.available:
            logger.debug("No host proxy, skipping correction %r", correction.old_text)
            return False

        self._patch(correction)

        clashes = self.batch.settle(correction)
        logger.info("Applied correction %r -> %r (%d overlapping)",
                    correction.old_text, correction.new_text, len(clashes))
        return True

    def _patch(self, correction: Correction):
        before = self.handle.text_before_cursor()
        after = self.handle.text_after_cursor()
        full_text = before + after
        start, end = correction.start, correction.end

        if start < 0 or end > len(full_text) or start >= end:
            raise InvalidRange(
                f"invalid correction bounds: start={start}, end={end}, "
                f"text length={len(full_text)}", correction)

        try:
            self._check_slice(full_text, correction)
        except TextMismatch as e:
            logger.warning("%s; searching before cursor instead", e)
            self._search_and_replace(correction)
            return

        cursor = len(before)
        if end <= cursor:
            self._replace_before_cursor(correction, cursor, before)
        elif start >= cursor:
            # Backward search may hit an earlier occurrence of old_text.
            logger.warning("Correction %r lies after the cursor; falling back to search",
                           correction.old_text)
            self._search_and_replace(correction)
        else:
            self._replace_spanning_cursor(correction, cursor)

    @staticmethod
    def _check_slice(full_text: str, correction: Correction):
        found = full_text[correction.start:correction.end]
        if found != correction.old_text:
            raise TextMismatch(
                f"text mismatch at {correction.start}-{correction.end}: "
                f"expected {correction.old_text!r}, found {found!r}", correction)

    def _replace_before_cursor(self, correction: Correction, cursor: int, before: str):
        tail = before[correction.end:cursor]
        self._replace(cursor - correction.start, correction.new_text + tail)

    def _replace_spanning_cursor(self, correction: Correction, cursor: int):
        # Both runs are backward deletes: the part after the cursor cannot
        # be reached, so the second run eats text before correction.start.
        self.handle.delete_backward(cursor - correction.start)
        self.handle.delete_backward(correction.end - cursor)
        self.handle.insert_text(correction.new_text)

    def _search_and_replace(self, correction: Correction):
        old_text, new_text = correction.old_text, correction.new_text
        before = self.handle.text_before_cursor()

        if old_text and before.endswith(old_text):
            self._replace(len(old_text), new_text)
            return

        index = before.rfind(old_text) if old_text else -1
        if index < 0:
            raise TextNotFound(f"could not find {old_text!r} before the cursor", correction)

        suffix = before[index + len(old_text):]
        self._replace(len(suffix) + len(old_text), new_text + suffix)

    def _replace(self, delete_count: int, text: str):
        """Delete delete_count characters before the cursor, then insert text."""
        self.handle.delete_backward(delete_count)
        self.handle.insert_text(text)
