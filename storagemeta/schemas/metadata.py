"""Hasura metadata API request and error bodies.

Field declaration order is the serialization order, so dumping the same
model twice always yields the same bytes.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_SOURCE = "default"


def camelize(name: str) -> str:
    """Convert a snake_case identifier to lowerCamelCase."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


class MetadataModel(BaseModel):
    """Base for wire models: immutable, populated by field name or alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TableIdentity(MetadataModel):
    """A table in the backing Postgres database."""

    schema_name: str = Field(..., alias="schema")
    name: str

    def __str__(self) -> str:
        return f"{self.schema_name}.{self.name}"


class CustomRootFields(MetadataModel):
    """GraphQL root field names for a tracked table."""

    select: str
    select_by_pk: str
    select_aggregate: str
    insert: str
    insert_one: str
    update: str
    update_by_pk: str
    delete: str
    delete_by_pk: str

    @classmethod
    def for_names(cls, singular: str, plural: str) -> "CustomRootFields":
        """Derive the conventional root fields from a table's exposed names.

        ``for_names("bucket", "buckets")`` gives ``buckets``, ``bucket``,
        ``bucketsAggregate``, ``insertBuckets``, ``insertBucket`` and so on.
        """
        return cls(
            select=plural,
            select_by_pk=singular,
            select_aggregate=f"{plural}Aggregate",
            insert=f"insert{_capitalize(plural)}",
            insert_one=f"insert{_capitalize(singular)}",
            update=f"update{_capitalize(plural)}",
            update_by_pk=f"update{_capitalize(singular)}",
            delete=f"delete{_capitalize(plural)}",
            delete_by_pk=f"delete{_capitalize(singular)}",
        )


class TableConfiguration(MetadataModel):
    """Naming configuration applied when a table is tracked."""

    custom_name: str
    custom_root_fields: CustomRootFields
    custom_column_names: dict[str, str] = Field(default_factory=dict)


# Track table


class TrackTableArgs(MetadataModel):
    source: str = DEFAULT_SOURCE
    table: TableIdentity
    configuration: TableConfiguration


class TrackTable(MetadataModel):
    """``pg_track_table`` request body."""

    type: Literal["pg_track_table"] = "pg_track_table"
    args: TrackTableArgs


# Object relationship (many-to-one through a local foreign key)


class ObjectRelationshipUsing(MetadataModel):
    foreign_key_constraint_on: list[str]


class CreateObjectRelationshipArgs(MetadataModel):
    table: TableIdentity
    name: str
    source: str = DEFAULT_SOURCE
    using: ObjectRelationshipUsing


class CreateObjectRelationship(MetadataModel):
    """``pg_create_object_relationship`` request body."""

    type: Literal["pg_create_object_relationship"] = "pg_create_object_relationship"
    args: CreateObjectRelationshipArgs


# Array relationship (one-to-many through a remote foreign key)


class RemoteForeignKey(MetadataModel):
    table: TableIdentity
    columns: list[str]


class ArrayRelationshipUsing(MetadataModel):
    foreign_key_constraint_on: RemoteForeignKey


class CreateArrayRelationshipArgs(MetadataModel):
    table: TableIdentity
    name: str
    source: str = DEFAULT_SOURCE
    using: ArrayRelationshipUsing


class CreateArrayRelationship(MetadataModel):
    """``pg_create_array_relationship`` request body."""

    type: Literal["pg_create_array_relationship"] = "pg_create_array_relationship"
    args: CreateArrayRelationshipArgs


MetadataRequest = Annotated[
    TrackTable | CreateObjectRelationship | CreateArrayRelationship,
    Field(discriminator="type"),
]


class HasuraErrorResponse(BaseModel):
    """Error body returned by the metadata API on a non-200 status.

    Every field is optional: a body like ``{"code": "already-tracked"}``
    still decodes. Anything that is not a JSON object does not.
    """

    path: str = ""
    error: str = ""
    code: str = ""
