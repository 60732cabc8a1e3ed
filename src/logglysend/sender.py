"""
HTTP sender for the Loggly bulk endpoint.
"""

import logging
from typing import Dict, Optional

import requests

from ._version import __version__
from .errors import TransportError

logger = logging.getLogger(__name__)

USER_AGENT = f"logglysend (version: {__version__})"
TAG_HEADER = "X-LOGGLY-TAG"


class BulkSender:
    """
    Posts newline-delimited batches to a bulk endpoint.

    Each batch is sent once. Nothing is retried.
    """

    def __init__(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize BulkSender.

        Args:
            endpoint: URL of the bulk endpoint, token included
            headers: Additional headers to send with requests
            timeout: Request timeout in seconds (None waits indefinitely)
            session: Custom requests.Session to use (e.g., shared by application)
        """
        self.endpoint = endpoint
        self.headers = headers or {}
        self.timeout = timeout
        self._owns_session = session is None
        self._session = (
            self._build_session()
            if session is None
            else self._prepare_session(session)
        )

    def _build_session(self) -> requests.Session:
        return self._prepare_session(requests.Session())

    def _prepare_session(self, session: requests.Session) -> requests.Session:
        # Ensure required headers while preserving caller-provided ones
        session.headers.update(
            {
                "User-Agent": USER_AGENT,
                "Content-Type": "text/plain",
                **self.headers,
            }
        )
        return session

    def _renew_session(self) -> None:
        """Close the internal session and build a fresh one."""
        self._session.close()
        self._session = self._build_session()

    def send_batch(self, body: bytes, count: int, tags: str = "") -> bool:
        """
        Send one batch.

        Args:
            body: Newline-joined encoded messages
            count: Number of messages in ``body``, for diagnostics
            tags: Comma-delimited tag list, omitted from the request if empty

        Returns:
            True if the endpoint accepted the batch, False if it answered
            with an error status

        Raises:
            TransportError: if the request could not be completed
        """
        headers = {TAG_HEADER: tags} if tags else None

        logger.debug("POST %s with %d bytes", self.endpoint, len(body))
        try:
            response = self._session.post(
                self.endpoint,
                data=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.debug("error: %s", exc)
            if self._owns_session:
                self._renew_session()
            raise TransportError(self.endpoint, count, str(exc)) from exc

        logger.debug("%d response", response.status_code)
        if response.status_code >= 400:
            logger.warning(
                "bulk endpoint rejected %d messages with %d: %s",
                count,
                response.status_code,
                response.text,
            )
            return False
        return True

    def close(self) -> None:
        """Close the HTTP session."""
        if self._owns_session:
            self._session.close()
