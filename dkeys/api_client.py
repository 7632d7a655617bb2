"""API client — sends text to the remote grammar service and decodes its corrections."""
import logging
from typing import List

import requests

from dkeys.corrections import Correction
from dkeys.errors import DecodeError, NetworkError

logger = logging.getLogger(__name__)


class GrammarClient:
    """Client for the grammar-fix endpoint.

    Expected API: POST ``{"text": ...}``, returns
    ``{"corrections": [{"location": {"start", "end"}, "oldText",
    "newText", "explanation"}], "count": n}``. No retries.
    """

    def __init__(self, url: str, timeout_ms: int = 5000):
        self.url = url
        self.timeout_sec = timeout_ms / 1000.0

    def check(self, text: str) -> List[Correction]:
        """Request corrections for text.

        Raises NetworkError when the request fails and DecodeError when
        the body is not a corrections document.
        """
        try:
            resp = requests.post(
                self.url,
                json={"text": text},
                timeout=self.timeout_sec,
            )
            resp.raise_for_status()
        except requests.Timeout as e:
            logger.debug("Grammar request timed out at %s", self.url)
            raise NetworkError(f"grammar request timed out: {e}") from e
        except requests.ConnectionError as e:
            logger.debug("Grammar connection error — is the server running? URL: %s", self.url)
            raise NetworkError(f"cannot reach grammar service: {e}") from e
        except requests.RequestException as e:
            logger.debug("Grammar request failed: %s", e)
            raise NetworkError(f"grammar request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"grammar response is not JSON: {e}") from e

        return self.parse_response(data)

    @staticmethod
    def parse_response(data) -> List[Correction]:
        """Decode a grammar-service response body into Corrections."""
        if not isinstance(data, dict) or not isinstance(data.get("corrections"), list):
            raise DecodeError(f"unexpected grammar response format: {type(data).__name__}")

        corrections = []
        for item in data["corrections"]:
            if not isinstance(item, dict):
                raise DecodeError(f"correction entry is not an object: {item!r}")
            try:
                corrections.append(Correction.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                raise DecodeError(f"malformed correction entry {item!r}: {e}") from e

        count = data.get("count")
        if isinstance(count, int) and count != len(corrections):
            logger.debug("Grammar response count=%d but %d corrections listed",
                         count, len(corrections))
        return corrections
