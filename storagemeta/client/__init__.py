"""Client for the Hasura metadata API."""

from storagemeta.client.metadata_client import (
    ApplyOutcome,
    FailureKind,
    IdempotencyCode,
    MetadataClient,
    OutcomeStatus,
    submit,
)

__all__ = [
    "ApplyOutcome",
    "FailureKind",
    "IdempotencyCode",
    "MetadataClient",
    "OutcomeStatus",
    "submit",
]
