"""Text buffer — in-memory host document split at the cursor, plus token helpers."""
import unicodedata


def is_separator(char: str) -> bool:
    """True for whitespace, newlines and Unicode punctuation."""
    return char.isspace() or unicodedata.category(char).startswith('P')


def trailing_token(text: str) -> str:
    """Return the maximal run of non-separator characters ending at the end of text.

    Empty when text is empty or ends with a separator.
    """
    end = len(text)
    start = end
    while start > 0 and not is_separator(text[start - 1]):
        start -= 1
    return text[start:end]


def _strip_separators(text: str) -> str:
    end = len(text)
    while end > 0 and is_separator(text[end - 1]):
        end -= 1
    return text[:end]


def last_token_start(text: str) -> int:
    """Offset where the last token in text begins (len(text) if there is none)."""
    head = _strip_separators(text)
    if not head:
        return len(text)
    return len(head) - len(trailing_token(head))


class TextBuffer:
    """Host document with a cursor, editable only at the cursor.

    Mirrors the capabilities an input-method host hands to a keyboard:
    insert at the cursor, delete the character before the cursor, and
    read the text on either side. There is no random-access splice.
    """

    def __init__(self, before: str = "", after: str = ""):
        self._before: list[str] = list(before)
        self._after: list[str] = list(after)

    def insert_text(self, text: str):
        self._before.extend(text)

    def delete_backward(self):
        """Delete one character before the cursor (no-op at start of document)."""
        if self._before:
            self._before.pop()

    @property
    def document_context_before_input(self) -> str:
        return ''.join(self._before)

    @property
    def document_context_after_input(self) -> str:
        return ''.join(self._after)

    @property
    def text(self) -> str:
        return self.document_context_before_input + self.document_context_after_input

    @property
    def cursor(self) -> int:
        return len(self._before)

    def clear(self):
        self._before.clear()
        self._after.clear()
