"""Exceptions raised by storagemeta.

Remote failures (network errors, timeouts, rejected or unreadable
responses) are not exceptions: the submission engine reports them as a
failed ``ApplyOutcome``. Only the orchestrator turns a failed required
operation into ``MetadataApplyError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storagemeta.apply import ApplyReport
    from storagemeta.client.metadata_client import ApplyOutcome
    from storagemeta.operations import Operation


class StorageMetaError(Exception):
    """Base exception for storagemeta errors."""


class SerializationError(StorageMetaError):
    """An operation payload could not be encoded to JSON."""


class MetadataApplyError(StorageMetaError):
    """A required metadata operation failed and the sequence was aborted."""

    def __init__(
        self,
        message: str,
        operation: Operation,
        outcome: ApplyOutcome,
        report: ApplyReport | None = None,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.outcome = outcome
        self.report = report
