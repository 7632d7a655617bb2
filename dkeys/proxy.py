"""Non-owning handle on the host's cursor-relative text proxy."""
import logging
import weakref
from typing import Optional

logger = logging.getLogger(__name__)


class ProxyHandle:
    """Weak reference to a host text proxy.

    The host owns the proxy and may tear it down at any time. Once it is
    gone every edit becomes a no-op and every read returns an empty
    string, so callers never fail on a detached keyboard.

    The proxy must expose ``insert_text(text)``, ``delete_backward()``,
    ``document_context_before_input`` and ``document_context_after_input``
    (the last two may be None, as some hosts report no context).
    """

    def __init__(self, proxy=None):
        self._ref = None
        self.bind(proxy)

    def bind(self, proxy):
        """Point the handle at a (new) host proxy, or detach with None."""
        self._ref = weakref.ref(proxy) if proxy is not None else None

    @property
    def proxy(self):
        return self._ref() if self._ref is not None else None

    @property
    def available(self) -> bool:
        return self.proxy is not None

    def insert_text(self, text: str):
        proxy = self.proxy
        if proxy is None:
            logger.debug("insert_text on detached proxy ignored")
            return
        proxy.insert_text(text)

    def delete_backward(self, count: int = 1):
        proxy = self.proxy
        if proxy is None:
            logger.debug("delete_backward on detached proxy ignored")
            return
        for _ in range(count):
            proxy.delete_backward()

    def text_before_cursor(self) -> str:
        proxy = self.proxy
        if proxy is None:
            return ""
        return self._context(proxy.document_context_before_input)

    def text_after_cursor(self) -> str:
        proxy = self.proxy
        if proxy is None:
            return ""
        return self._context(proxy.document_context_after_input)

    @staticmethod
    def _context(value: Optional[str]) -> str:
        return value or ""
