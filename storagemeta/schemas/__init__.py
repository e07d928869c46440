"""Hasura metadata API schemas."""

from storagemeta.schemas.metadata import (
    ArrayRelationshipUsing,
    CreateArrayRelationship,
    CreateArrayRelationshipArgs,
    CreateObjectRelationship,
    CreateObjectRelationshipArgs,
    CustomRootFields,
    HasuraErrorResponse,
    MetadataRequest,
    ObjectRelationshipUsing,
    RemoteForeignKey,
    TableConfiguration,
    TableIdentity,
    TrackTable,
    TrackTableArgs,
    camelize,
)

__all__ = [
    "ArrayRelationshipUsing",
    "CreateArrayRelationship",
    "CreateArrayRelationshipArgs",
    "CreateObjectRelationship",
    "CreateObjectRelationshipArgs",
    "CustomRootFields",
    "HasuraErrorResponse",
    "MetadataRequest",
    "ObjectRelationshipUsing",
    "RemoteForeignKey",
    "TableConfiguration",
    "TableIdentity",
    "TrackTable",
    "TrackTableArgs",
    "camelize",
]
