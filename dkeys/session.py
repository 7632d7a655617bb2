"""Keyboard session — ties host proxy, suggestion ranker, grammar client and patcher together."""
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from dkeys.api_client import GrammarClient
from dkeys.buffer import last_token_start
from dkeys.config import Config
from dkeys.corrections import Correction, CorrectionBatch
from dkeys.errors import GrammarCheckError, PatchError
from dkeys.patcher import CorrectionPatcher
from dkeys.proxy import ProxyHandle
from dkeys.suggestions import SuggestionRanker

logger = logging.getLogger(__name__)


class PatchStatus(Enum):
    APPLIED = "applied"
    UNAPPLIED = "unapplied"


@dataclass(frozen=True)
class PatchResult:
    status: PatchStatus
    error: Optional[PatchError] = None

    @property
    def applied(self) -> bool:
        return self.status is PatchStatus.APPLIED


@dataclass(frozen=True)
class KeyboardState:
    """Snapshot of everything the UI layer renders."""
    suggestions: Tuple[str, ...] = ()
    corrections: Tuple[Correction, ...] = ()
    grammar_loading: bool = False
    corrections_visible: bool = False


class KeyboardSession:
    """Published keyboard state plus the operations that mutate it.

    Every mutating call emits exactly one notification to subscribers
    once the state has settled (none if nothing changed). Host edits and
    state changes happen under one lock; the grammar request runs on a
    worker thread and only touches state when it completes.
    """

    def __init__(self, config: Config, proxy=None, oracle=None,
                 grammar_client: Optional[GrammarClient] = None):
        self.config = config
        self._handle = ProxyHandle(proxy)
        if oracle is None:
            from dkeys.oracle import SpellCheckOracle
            oracle = SpellCheckOracle()
        self._ranker = SuggestionRanker(oracle, locale=config.locale,
                                        limit=config.max_suggestions)
        self._grammar_client = grammar_client or GrammarClient(
            url=config.grammar_url, timeout_ms=config.grammar_timeout_ms)
        self._batch = CorrectionBatch(overlap_policy=config.overlap_policy)
        self._patcher = CorrectionPatcher(self._handle, self._batch)
        self._lock = threading.RLock()
        # held across snapshot and delivery
        self._notify_lock = threading.RLock()
        self._listeners: List[Callable[[KeyboardState], None]] = []
        self._suggestions: List[str] = []
        self._grammar_loading = False
        self._corrections_visible = False
        self._grammar_thread: Optional[threading.Thread] = None

    # -- observation ---------------------------------------------------

    def subscribe(self, callback: Callable[[KeyboardState], None]):
        self._listeners.append(callback)

    def unsubscribe(self, callback: Callable[[KeyboardState], None]):
        if callback in self._listeners:
            self._listeners.remove(callback)

    @property
    def state(self) -> KeyboardState:
        with self._lock:
            return KeyboardState(
                suggestions=tuple(self._suggestions),
                corrections=tuple(self._batch),
                grammar_loading=self._grammar_loading,
                corrections_visible=self._corrections_visible,
            )

    def _notify(self):
        with self._notify_lock:
            snapshot = self.state
            for callback in list(self._listeners):
                callback(snapshot)

    def ranked_suggestions(self) -> List[str]:
        with self._lock:
            return list(self._suggestions)

    def pending_corrections(self) -> List[Correction]:
        with self._lock:
            return list(self._batch)

    def is_grammar_check_loading(self) -> bool:
        with self._lock:
            return self._grammar_loading

    @property
    def corrections_visible(self) -> bool:
        with self._lock:
            return self._corrections_visible

    # -- host buffer ---------------------------------------------------

    def bind_proxy(self, proxy):
        """Attach the current host proxy (None when the host goes away)."""
        self._handle.bind(proxy)

    def text_did_change(self):
        """Host reports the document changed underneath us."""
        self.refresh_suggestions()

    def insert_text(self, text: str, update_suggestions: bool = True):
        with self._lock:
            self._handle.insert_text(text)
        if update_suggestions:
            self.refresh_suggestions()

    def delete_backward(self):
        with self._lock:
            self._handle.delete_backward()
        self.refresh_suggestions()

    def delete_backward_word(self):
        """Delete the last word before the cursor and any separators after it."""
        with self._lock:
            before = self._handle.text_before_cursor()
            self._handle.delete_backward(len(before) - last_token_start(before))

    def accept_suggestion(self, text: str):
        """Replace the word being typed with a suggestion and a trailing space."""
        self.delete_backward_word()
        self.insert_text(text + " ", update_suggestions=False)
        self.clear_suggestions()

    # -- suggestions ---------------------------------------------------

    def refresh_suggestions(self):
        with self._lock:
            ranked = self._ranker.rank(self._handle.text_before_cursor())
            if ranked == self._suggestions:
                return
            self._suggestions = ranked
        self._notify()

    def clear_suggestions(self):
        with self._lock:
            if not self._suggestions:
                return
            self._suggestions = []
        self._notify()

    # -- grammar check -------------------------------------------------

    def check_grammar(self) -> Optional[threading.Thread]:
        """Send the whole document to the grammar service in the background.

        Returns the worker thread, or None when nothing was sent (a check
        is already in flight, no host, or blank text).
        """
        with self._lock:
            if self._grammar_loading:
                logger.debug("Grammar check already in flight, ignoring request")
                return None
            if not self._handle.available:
                return None
            text = self._handle.text_before_cursor() + self._handle.text_after_cursor()
            if not text.strip():
                return None
            self._grammar_loading = True
            worker = threading.Thread(target=self._run_grammar_check, args=(text,),
                                      name="dkeys-grammar", daemon=True)
            self._grammar_thread = worker
        self._notify()
        worker.start()
        return worker

    def _run_grammar_check(self, text: str):
        try:
            corrections = self._grammar_client.check(text)
        except GrammarCheckError as e:
            logger.warning("Grammar check failed: %s", e)
            corrections = []
        except Exception:
            logger.exception("Grammar client raised unexpectedly")
            corrections = []

        with self._lock:
            self._grammar_loading = False
            self._batch.load(corrections)
            self._corrections_visible = bool(corrections)
        logger.info("Grammar check returned %d corrections", len(corrections))
        self._notify()

    def wait_for_grammar_check(self, timeout: Optional[float] = None):
        worker = self._grammar_thread
        if worker is not None:
            worker.join(timeout)

    def apply_correction(self, correction_id: str) -> PatchResult:
        with self._lock:
            correction = self._batch.get(correction_id)
            if correction is None:
                logger.debug("No pending correction with id %s", correction_id)
                return PatchResult(PatchStatus.UNAPPLIED)
            try:
                applied = self._patcher.apply(correction)
            except PatchError as e:
                logger.warning("Failed to apply correction for %r: %s", correction.old_text, e)
                result = PatchResult(PatchStatus.UNAPPLIED, e)
            else:
                result = PatchResult(PatchStatus.APPLIED if applied else PatchStatus.UNAPPLIED)
            was_visible = self._corrections_visible
            if self._batch.is_empty:
                self._corrections_visible = False
            changed = result.applied or was_visible != self._corrections_visible
        if changed:
            self._notify()
        return result

    def dismiss_corrections(self):
        with self._lock:
            self._batch.clear()
            self._corrections_visible = False
        self._notify()
