"""Apply a sequence of metadata operations.

Operations are submitted one at a time, in order. Applied and already
applied both move on to the next operation. A failed required operation
stops the run with ``MetadataApplyError``; a failed best-effort one is
logged as a warning and the run continues.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from storagemeta.client.metadata_client import ApplyOutcome, MetadataClient, OutcomeStatus
from storagemeta.errors import MetadataApplyError
from storagemeta.logging import get_logger
from storagemeta.operations import Criticality, Operation
from storagemeta.plan import storage_metadata_plan


@dataclass
class ApplyReport:
    """What happened to each submitted operation, in submission order."""

    results: list[tuple[Operation, ApplyOutcome]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(
            outcome.ok or operation.criticality is Criticality.BEST_EFFORT
            for operation, outcome in self.results
        )

    def count(self, status: OutcomeStatus) -> int:
        return sum(1 for _, outcome in self.results if outcome.status is status)


def apply_metadata(
    client: MetadataClient,
    operations: Iterable[Operation] | None = None,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> ApplyReport:
    """Submit ``operations`` in order, defaulting to the storage plan.

    Args:
        client: Client bound to the metadata endpoint.
        operations: Operations in dependency order.
        logger: Where best-effort failures are reported.

    Returns:
        ApplyReport for every submitted operation.

    Raises:
        MetadataApplyError: If a required operation fails. Operations after
            it are not submitted.
        SerializationError: If a payload cannot be encoded.
    """
    log = logger or get_logger(__name__)
    if operations is None:
        operations = storage_metadata_plan()

    report = ApplyReport()
    for operation in operations:
        outcome = client.submit(operation)
        report.results.append((operation, outcome))

        if outcome.ok:
            continue

        message = f"{operation.context or operation.name}: {outcome.detail}"
        if operation.criticality is Criticality.BEST_EFFORT:
            log.warning(
                operation.context or f"problem applying {operation.name}",
                operation=operation.name,
                failure=outcome.failure.value,
                detail=outcome.detail,
            )
            report.warnings.append(message)
            continue

        log.error(
            "metadata_apply_aborted",
            operation=operation.name,
            failure=outcome.failure.value,
            detail=outcome.detail,
        )
        raise MetadataApplyError(message, operation=operation, outcome=outcome, report=report)

    return report
