"""Metadata operations: a request body plus how much its failure matters.

Criticality belongs to the call site, not to the kind of operation: the
same ``pg_create_object_relationship`` is required for ``files.bucket``
and best-effort for ``files.uploadedByUser``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic_core import PydanticSerializationError

from storagemeta.errors import SerializationError
from storagemeta.schemas.metadata import (
    ArrayRelationshipUsing,
    CreateArrayRelationship,
    CreateArrayRelationshipArgs,
    CreateObjectRelationship,
    CreateObjectRelationshipArgs,
    CustomRootFields,
    ObjectRelationshipUsing,
    RemoteForeignKey,
    TableConfiguration,
    TableIdentity,
    TrackTable,
    TrackTableArgs,
)

Payload = TrackTable | CreateObjectRelationship | CreateArrayRelationship


class OperationKind(str, Enum):
    """Metadata API request types."""

    TRACK_TABLE = "pg_track_table"
    CREATE_OBJECT_RELATIONSHIP = "pg_create_object_relationship"
    CREATE_ARRAY_RELATIONSHIP = "pg_create_array_relationship"


class Criticality(str, Enum):
    """What a failed operation does to the rest of the sequence."""

    REQUIRED = "required"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True)
class Operation:
    """One metadata request in an application sequence."""

    payload: Payload
    criticality: Criticality = Criticality.REQUIRED
    context: str = ""

    @property
    def kind(self) -> OperationKind:
        return OperationKind(self.payload.type)

    @property
    def table(self) -> TableIdentity:
        return self.payload.args.table

    @property
    def name(self) -> str:
        """Short label for logs, e.g. ``storage.files.bucket``."""
        if isinstance(self.payload, TrackTable):
            return str(self.table)
        return f"{self.table}.{self.payload.args.name}"

    def to_dict(self) -> dict:
        """The request body as plain JSON-compatible data."""
        return self.payload.model_dump(mode="json", by_alias=True)

    def serialize(self) -> bytes:
        """Encode the request body as compact JSON.

        Raises:
            SerializationError: If the payload cannot be encoded.
        """
        try:
            return self.payload.model_dump_json(by_alias=True).encode("utf-8")
        except PydanticSerializationError as exc:
            raise SerializationError(f"problem marshalling {self.kind.value} payload: {exc}") from exc


def track_table(
    table: TableIdentity,
    singular: str,
    plural: str,
    column_names: dict[str, str],
    criticality: Criticality = Criticality.REQUIRED,
    context: str = "",
) -> Operation:
    """Track ``table`` exposing it as ``plural``/``singular`` in GraphQL."""
    payload = TrackTable(
        args=TrackTableArgs(
            table=table,
            configuration=TableConfiguration(
                custom_name=plural,
                custom_root_fields=CustomRootFields.for_names(singular, plural),
                custom_column_names=column_names,
            ),
        )
    )
    return Operation(payload=payload, criticality=criticality, context=context)


def object_relationship(
    table: TableIdentity,
    name: str,
    columns: list[str],
    criticality: Criticality = Criticality.REQUIRED,
    context: str = "",
) -> Operation:
    """Many-to-one relationship from ``table`` through its own foreign key columns."""
    payload = CreateObjectRelationship(
        args=CreateObjectRelationshipArgs(
            table=table,
            name=name,
            using=ObjectRelationshipUsing(foreign_key_constraint_on=columns),
        )
    )
    return Operation(payload=payload, criticality=criticality, context=context)


def array_relationship(
    table: TableIdentity,
    name: str,
    remote_table: TableIdentity,
    columns: list[str],
    criticality: Criticality = Criticality.REQUIRED,
    context: str = "",
) -> Operation:
    """One-to-many relationship from ``table`` through a foreign key on ``remote_table``."""
    payload = CreateArrayRelationship(
        args=CreateArrayRelationshipArgs(
            table=table,
            name=name,
            using=ArrayRelationshipUsing(
                foreign_key_constraint_on=RemoteForeignKey(table=remote_table, columns=columns),
            ),
        )
    )
    return Operation(payload=payload, criticality=criticality, context=context)
