"""Client for the internal Teskerti event aggregation endpoint."""
import json
import logging
import threading
import time
from typing import Optional

import requests

from processor.models import TeskertiApiResponse

logger = logging.getLogger(__name__)


class TeskertiFeedClient:
    """Fetches the aggregated Teskerti event feed."""

    ENDPOINT_PATH = "/api/teskerti-auto"
    NO_CACHE_HEADERS = {
        'Cache-Control': 'no-cache, no-store',
        'Pragma': 'no-cache',
        'Accept': 'application/json'
    }
    # Single-byte reads return as soon as data arrives, so the deadline
    # and cancel event are checked between every byte of the body.
    READ_CHUNK_SIZE = 1

    def __init__(
        self,
        base_url: str,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the feed client.

        Args:
            base_url: Base URL of the application serving the endpoint
            timeout: Total deadline for a call in seconds (default: 30)
            session: Optional requests session to issue the call on; it is
                left open when the client is closed
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def __enter__(self) -> 'TeskertiFeedClient':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        """Close the session if this client created it."""
        if self._owns_session:
            self.session.close()

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url}{self.ENDPOINT_PATH}"

    def get_events(
        self,
        cancel_event: Optional[threading.Event] = None
    ) -> TeskertiApiResponse:
        """
        Fetch the event feed.

        Never raises: transport errors, non-2xx statuses, undecodable or
        malformed bodies, an expired deadline and cancellation all produce
        a failure envelope.

        Connecting and receiving the headers are each bounded by the
        timeout; reading the body is bounded by what is left of it.

        Args:
            cancel_event: Optional event; once set, the call is abandoned

        Returns:
            TeskertiApiResponse envelope
        """
        try:
            self._check_cancelled(cancel_event)

            deadline = time.monotonic() + self.timeout

            logger.info(f"Fetching events from {self.endpoint_url}")
            response = self.session.get(
                self.endpoint_url,
                headers=self.NO_CACHE_HEADERS,
                timeout=self.timeout,
                stream=True
            )
            try:
                response.raise_for_status()
                body = self._read_body(response, deadline, cancel_event)
            finally:
                response.close()

            result = TeskertiApiResponse.from_dict(json.loads(body))

            logger.info(
                f"Fetched {len(result.events)} events",
                extra={
                    'success': result.success,
                    'from_cache': result.from_cache,
                    'last_sync': result.last_sync
                }
            )
            return result

        except Exception as e:
            logger.error(
                f"Failed to fetch Teskerti events: {e}",
                extra={'error_type': type(e).__name__}
            )
            return TeskertiApiResponse.failure(str(e) or "Unknown error")

    def _read_body(
        self,
        response: requests.Response,
        deadline: float,
        cancel_event: Optional[threading.Event]
    ) -> bytes:
        """
        Read the response body within the call deadline.

        Raises:
            requests.Timeout: If the deadline passes before the body is read
            RuntimeError: If the cancel event is set while reading
        """
        chunks = []

        for chunk in response.iter_content(chunk_size=self.READ_CHUNK_SIZE):
            self._check_cancelled(cancel_event)
            if time.monotonic() > deadline:
                raise requests.Timeout(
                    f"Request exceeded {self.timeout}s deadline"
                )
            chunks.append(chunk)

        self._check_cancelled(cancel_event)
        return b''.join(chunks)

    def _check_cancelled(self, cancel_event: Optional[threading.Event]) -> None:
        if cancel_event is not None and cancel_event.is_set():
            raise RuntimeError("Request cancelled")


def get_teskerti_events(base_url: str, timeout: int = 30) -> TeskertiApiResponse:
    """
    Fetch the event feed with a one-off client.

    Args:
        base_url: Base URL of the application serving the endpoint
        timeout: Total deadline in seconds (default: 30)

    Returns:
        TeskertiApiResponse envelope
    """
    with TeskertiFeedClient(base_url, timeout=timeout) as client:
        return client.get_events()
