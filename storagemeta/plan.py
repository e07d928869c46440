"""The metadata applied for the storage service.

``storage.buckets`` and ``storage.files`` are tracked with camel-cased
GraphQL names, then linked: each file has a ``bucket`` and each bucket
has ``files``. The ``files.uploadedByUser`` relationship points at the
auth service's users table, which does not exist when storage runs
without auth, so it is best-effort.

Order matters: a table is tracked before any relationship that uses it.
"""

from storagemeta.operations import (
    Criticality,
    Operation,
    array_relationship,
    object_relationship,
    track_table,
)
from storagemeta.schemas.metadata import TableIdentity, camelize

STORAGE_SCHEMA = "storage"

BUCKETS_TABLE = TableIdentity(schema=STORAGE_SCHEMA, name="buckets")
FILES_TABLE = TableIdentity(schema=STORAGE_SCHEMA, name="files")

BUCKETS_COLUMNS = [
    "id",
    "created_at",
    "updated_at",
    "download_expiration",
    "min_upload_file_size",
    "max_upload_file_size",
    "cache_control",
    "presigned_urls_enabled",
]

FILES_COLUMNS = [
    "id",
    "created_at",
    "updated_at",
    "bucket_id",
    "name",
    "size",
    "mime_type",
    "etag",
    "is_uploaded",
    "uploaded_by_user_id",
]


def camel_case_columns(columns: list[str]) -> dict[str, str]:
    """Map each column to its lowerCamelCase GraphQL name, keeping order."""
    return {column: camelize(column) for column in columns}


def storage_metadata_plan() -> list[Operation]:
    """Build the ordered list of metadata operations for the storage tables."""
    return [
        track_table(
            BUCKETS_TABLE,
            singular="bucket",
            plural="buckets",
            column_names=camel_case_columns(BUCKETS_COLUMNS),
            context="problem adding metadata for the buckets table",
        ),
        track_table(
            FILES_TABLE,
            singular="file",
            plural="files",
            column_names=camel_case_columns(FILES_COLUMNS),
            context="problem adding metadata for the files table",
        ),
        object_relationship(
            FILES_TABLE,
            name="bucket",
            columns=["bucket_id"],
            context="problem creating object relationship for buckets",
        ),
        array_relationship(
            BUCKETS_TABLE,
            name="files",
            remote_table=FILES_TABLE,
            columns=["bucket_id"],
            context="problem creating array relationships",
        ),
        # Lenient on purpose: a broken users table that does exist also
        # only produces a warning.
        object_relationship(
            FILES_TABLE,
            name="uploadedByUser",
            columns=["uploaded_by_user_id"],
            criticality=Criticality.BEST_EFFORT,
            context="problem creating object relationship for users",
        ),
    ]
