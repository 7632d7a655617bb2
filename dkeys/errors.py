"""Exception taxonomy for correction patching and grammar checks."""


class DkeysError(Exception):
    """Base exception for all dkeys errors."""


class PatchError(DkeysError):
    """A correction could not be applied to the host buffer."""

    def __init__(self, message: str, correction=None):
        super().__init__(message)
        self.correction = correction


class InvalidRange(PatchError):
    """Correction offsets are out of bounds or inverted."""


class TextMismatch(PatchError):
    """Buffer slice at the correction offsets differs from old_text."""


class TextNotFound(PatchError):
    """old_text is nowhere in the reachable buffer."""


class GrammarCheckError(DkeysError):
    """The grammar service produced no usable corrections."""


class NetworkError(GrammarCheckError):
    """Request failed, timed out, or the host is unreachable."""


class DecodeError(GrammarCheckError):
    """Response body is not a valid corrections document."""
