"""
Upload Transport - one timed PUT per artifact.

Maps the feed's response status onto an UploadOutcome. There are no
retries: each call makes exactly one attempt.
"""

import logging
import time
from http import HTTPStatus

import httpx

from feedpush.core.exceptions import UploadError
from feedpush.core.models import Artifact, PushOptions, UploadOutcome

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-NuGet-ApiKey"
NO_SUCCESS_MESSAGE = "Response status code does not indicate success"


def status_message(status_code: int, reason: str | None = None, body: str | None = None) -> str:
    """Build the user-facing text for an unsuccessful response."""
    reason = reason or _reason_for(status_code)
    message = f"{NO_SUCCESS_MESSAGE}: {status_code} ({reason})."
    if body:
        message = f"{message} {body.strip()}"
    return message


def _reason_for(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown"


class UploadClient:
    """
    HTTP client that pushes artifact bytes to a feed endpoint.

    The configured timeout is passed straight to httpx and is never capped,
    so uploads may run longer than common client defaults.
    """

    def __init__(
        self,
        options: PushOptions | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client with session options and an optional httpx transport."""
        self._options = options or PushOptions()
        self._client = httpx.Client(
            timeout=httpx.Timeout(self._options.timeout_seconds),
            transport=transport,
        )
        self._closed = False

    def upload(
        self,
        artifact: Artifact,
        endpoint: str,
        timeout: float | None = None,
    ) -> UploadOutcome:
        """
        Upload one artifact.

        The timeout bounds each network operation and the attempt as a
        whole. A response that trickles in past the deadline is a timeout,
        whatever its status.

        Args:
            artifact: Artifact whose bytes are sent as the request body
            endpoint: Feed URL receiving the PUT
            timeout: Override for the session timeout, in seconds

        Returns:
            UploadOutcome: CREATED for 2xx, DUPLICATE for 409, FAILED otherwise

        Raises:
            UploadError: If the client has already been closed
        """
        if self._closed:
            raise UploadError("Upload client is closed", endpoint=endpoint)

        timeout = self._options.timeout_seconds if timeout is None else timeout
        start = time.perf_counter()
        deadline = start + timeout

        try:
            content = artifact.path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s: %s", artifact.path, e)
            return UploadOutcome.failed(f"Could not read {artifact.name}: {e}")

        headers = {"Content-Type": "application/octet-stream"}
        if self._options.api_key:
            headers[API_KEY_HEADER] = self._options.api_key

        try:
            with self._client.stream(
                "PUT",
                endpoint,
                content=content,
                headers=headers,
                timeout=httpx.Timeout(timeout),
            ) as response:
                _check_deadline(deadline)
                chunks = []
                for chunk in response.iter_bytes():
                    chunks.append(chunk)
                    _check_deadline(deadline)
                body = b"".join(chunks)
            _check_deadline(deadline)
        except (httpx.TimeoutException, _DeadlineExceeded):
            elapsed_ms = _elapsed_ms(start)
            logger.warning("Upload of %s to %s timed out after %ss", artifact.name, endpoint, timeout)
            return UploadOutcome.failed(
                f"The upload of {artifact.name} timed out after {timeout:g}s.",
                elapsed_ms=elapsed_ms,
            )
        except httpx.HTTPError as e:
            elapsed_ms = _elapsed_ms(start)
            logger.warning("Upload of %s to %s failed: %s", artifact.name, endpoint, e)
            return UploadOutcome.failed(
                f"Upload of {artifact.name} failed: {e}",
                elapsed_ms=elapsed_ms,
            )

        return self._classify(artifact, endpoint, response, body, _elapsed_ms(start))

    def _classify(
        self,
        artifact: Artifact,
        endpoint: str,
        response: httpx.Response,
        body: bytes,
        elapsed_ms: float,
    ) -> UploadOutcome:
        status_code = response.status_code
        reason = response.reason_phrase or None

        if response.is_success:
            logger.info("Created %s at %s (%d) in %.0fms", artifact.name, endpoint, status_code, elapsed_ms)
            return UploadOutcome.created(status_code=status_code, elapsed_ms=elapsed_ms)

        text = body.decode(response.encoding or "utf-8", errors="replace").strip() or None

        if status_code == httpx.codes.CONFLICT:
            logger.info("%s already exists at %s", artifact.name, endpoint)
            return UploadOutcome.duplicate(
                message=status_message(status_code, reason, text),
                elapsed_ms=elapsed_ms,
            )

        logger.warning("Upload of %s to %s returned %d", artifact.name, endpoint, status_code)
        return UploadOutcome.failed(
            status_message(status_code, reason, text),
            status_code=status_code,
            elapsed_ms=elapsed_ms,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()
        self._closed = True

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class _DeadlineExceeded(Exception):
    """Raised when an attempt outlives its overall deadline."""


def _check_deadline(deadline: float) -> None:
    if time.perf_counter() > deadline:
        raise _DeadlineExceeded()
