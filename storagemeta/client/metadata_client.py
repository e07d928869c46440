"""HTTP client for the Hasura metadata API.

Every operation is a single ``POST {endpoint}/metadata`` and the response
is classified into an ``ApplyOutcome``:

- HTTP 200: applied.
- Non-200 whose error code says the object is already there: already
  applied, which callers treat exactly like applied.
- Anything else, including network errors and timeouts: failed, with the
  status code and raw body kept for diagnosis.

There is no retry. Re-running a whole sequence is safe because every
metadata operation is idempotent on the remote end.

Usage:
    from storagemeta.client import MetadataClient

    with MetadataClient("http://localhost:8080/v1", "secret") as client:
        outcome = client.submit(operation)
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum

import httpx
from pydantic import ValidationError

from storagemeta.logging import get_logger
from storagemeta.metrics import record_metadata_request
from storagemeta.operations import Operation
from storagemeta.schemas.metadata import HasuraErrorResponse

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 10.0
CONTENT_TYPE = "application/json; charset=UTF-8"
ADMIN_SECRET_HEADER = "X-Hasura-admin-secret"


class IdempotencyCode(str, Enum):
    """Error codes meaning the operation had already been applied.

    Any code not listed here is treated as a real failure.
    """

    ALREADY_TRACKED = "already-tracked"
    ALREADY_EXISTS = "already-exists"

    @classmethod
    def contains(cls, code: str) -> bool:
        return code in {member.value for member in cls}


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    ALREADY_APPLIED = "already_applied"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Why a submission failed."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    REMOTE_REJECTION = "remote_rejection"
    MALFORMED_RESPONSE = "malformed_response"


@dataclass(frozen=True)
class ApplyOutcome:
    """Result of submitting one operation."""

    status: OutcomeStatus
    failure: FailureKind | None = None
    detail: str | None = None
    status_code: int | None = None
    error: HasuraErrorResponse | None = None
    body: str | None = None

    @property
    def ok(self) -> bool:
        """Applied or already applied."""
        return self.status is not OutcomeStatus.FAILED

    @classmethod
    def applied(cls) -> ApplyOutcome:
        return cls(status=OutcomeStatus.APPLIED)

    @classmethod
    def already_applied(cls, status_code: int, error: HasuraErrorResponse) -> ApplyOutcome:
        return cls(
            status=OutcomeStatus.ALREADY_APPLIED,
            status_code=status_code,
            error=error,
            detail=error.code,
        )

    @classmethod
    def failed(
        cls,
        failure: FailureKind,
        detail: str,
        status_code: int | None = None,
        error: HasuraErrorResponse | None = None,
        body: str | None = None,
    ) -> ApplyOutcome:
        return cls(
            status=OutcomeStatus.FAILED,
            failure=failure,
            detail=detail,
            status_code=status_code,
            error=error,
            body=body,
        )


def classify_response(status_code: int, body: str) -> ApplyOutcome:
    """Turn a metadata API response into an outcome.

    Args:
        status_code: HTTP status of the response.
        body: Raw response text.

    Returns:
        ApplyOutcome for the response.
    """
    if status_code == httpx.codes.OK:
        return ApplyOutcome.applied()

    detail = f"status_code: {status_code}\nresponse: {body}"
    try:
        error = HasuraErrorResponse.model_validate_json(body)
    except ValidationError:
        return ApplyOutcome.failed(
            FailureKind.MALFORMED_RESPONSE,
            detail,
            status_code=status_code,
            body=body,
        )

    if IdempotencyCode.contains(error.code):
        return ApplyOutcome.already_applied(status_code, error)

    return ApplyOutcome.failed(
        FailureKind.REMOTE_REJECTION,
        detail,
        status_code=status_code,
        error=error,
        body=body,
    )


class MetadataClient:
    """Synchronous client for ``POST {endpoint}/metadata``.

    Args:
        endpoint: Base URL of the Hasura API (e.g. "http://localhost:8080/v1").
        admin_secret: Value for the ``X-Hasura-admin-secret`` header.
        timeout: Per-request timeout in seconds (default: 10).
        http_client: Optional pre-built ``httpx.Client``. It is not closed
            by ``close()``; whoever built it owns it.
    """

    def __init__(
        self,
        endpoint: str,
        admin_secret: str,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.timeout = timeout
        self._admin_secret = admin_secret
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout)

    def __enter__(self) -> MetadataClient:
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    @property
    def url(self) -> str:
        return f"{self.endpoint}/metadata"

    def submit(self, operation: Operation) -> ApplyOutcome:
        """Submit one operation and classify the response.

        Raises:
            SerializationError: If the payload cannot be encoded.
        """
        content = operation.serialize()
        log = logger.bind(operation=operation.name, kind=operation.kind.value)
        log.debug("metadata_request_started", url=self.url)

        start_time = time.perf_counter()
        try:
            response = self._client.post(
                self.url,
                content=content,
                headers={
                    "Content-Type": CONTENT_TYPE,
                    ADMIN_SECRET_HEADER: self._admin_secret,
                },
                timeout=self.timeout,
            )
        except httpx.TimeoutException as exc:
            outcome = ApplyOutcome.failed(
                FailureKind.TIMEOUT,
                f"problem executing request: timed out after {self.timeout}s: {exc}",
            )
        except httpx.RequestError as exc:
            outcome = ApplyOutcome.failed(
                FailureKind.TRANSPORT,
                f"problem executing request: {exc}",
            )
        else:
            outcome = classify_response(response.status_code, response.text)
        duration = time.perf_counter() - start_time

        record_metadata_request(operation.kind.value, outcome.status.value, duration)

        if outcome.ok:
            log.info(
                "metadata_request_completed",
                status=outcome.status.value,
                duration_ms=round(duration * 1000, 2),
            )
        else:
            log.debug(
                "metadata_request_failed",
                failure=outcome.failure.value,
                status_code=outcome.status_code,
                detail=outcome.detail,
                duration_ms=round(duration * 1000, 2),
            )
        return outcome


def submit(
    endpoint: str,
    credential: str,
    operation: Operation,
    timeout: float = DEFAULT_TIMEOUT,
) -> ApplyOutcome:
    """Submit a single operation with a one-shot client."""
    with MetadataClient(endpoint, credential, timeout=timeout) as client:
        return client.submit(operation)
