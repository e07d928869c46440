"""Tests for the storage metadata plan."""

from storagemeta.operations import Criticality, OperationKind
from storagemeta.plan import camel_case_columns, storage_metadata_plan


def test_plan_order_and_kinds():
    plan = storage_metadata_plan()

    assert [(op.kind, op.name) for op in plan] == [
        (OperationKind.TRACK_TABLE, "storage.buckets"),
        (OperationKind.TRACK_TABLE, "storage.files"),
        (OperationKind.CREATE_OBJECT_RELATIONSHIP, "storage.files.bucket"),
        (OperationKind.CREATE_ARRAY_RELATIONSHIP, "storage.buckets.files"),
        (OperationKind.CREATE_OBJECT_RELATIONSHIP, "storage.files.uploadedByUser"),
    ]


def test_only_users_relationship_is_best_effort():
    criticalities = [op.criticality for op in storage_metadata_plan()]
    assert criticalities == [Criticality.REQUIRED] * 4 + [Criticality.BEST_EFFORT]


def test_every_operation_has_failure_context():
    contexts = [op.context for op in storage_metadata_plan()]
    assert contexts == [
        "problem adding metadata for the buckets table",
        "problem adding metadata for the files table",
        "problem creating object relationship for buckets",
        "problem creating array relationships",
        "problem creating object relationship for users",
    ]


def test_buckets_configuration():
    configuration = storage_metadata_plan()[0].to_dict()["args"]["configuration"]

    assert configuration["custom_name"] == "buckets"
    assert configuration["custom_root_fields"] == {
        "select": "buckets",
        "select_by_pk": "bucket",
        "select_aggregate": "bucketsAggregate",
        "insert": "insertBuckets",
        "insert_one": "insertBucket",
        "update": "updateBuckets",
        "update_by_pk": "updateBucket",
        "delete": "deleteBuckets",
        "delete_by_pk": "deleteBucket",
    }
    assert configuration["custom_column_names"] == {
        "id": "id",
        "created_at": "createdAt",
        "updated_at": "updatedAt",
        "download_expiration": "downloadExpiration",
        "min_upload_file_size": "minUploadFileSize",
        "max_upload_file_size": "maxUploadFileSize",
        "cache_control": "cacheControl",
        "presigned_urls_enabled": "presignedUrlsEnabled",
    }


def test_files_configuration():
    configuration = storage_metadata_plan()[1].to_dict()["args"]["configuration"]

    assert configuration["custom_name"] == "files"
    assert configuration["custom_root_fields"]["select_by_pk"] == "file"
    assert configuration["custom_root_fields"]["insert_one"] == "insertFile"
    assert configuration["custom_root_fields"]["delete"] == "deleteFiles"
    assert configuration["custom_column_names"] == {
        "id": "id",
        "created_at": "createdAt",
        "updated_at": "updatedAt",
        "bucket_id": "bucketId",
        "name": "name",
        "size": "size",
        "mime_type": "mimeType",
        "etag": "etag",
        "is_uploaded": "isUploaded",
        "uploaded_by_user_id": "uploadedByUserId",
    }


def test_relationship_linkage():
    _, _, bucket, files, user = storage_metadata_plan()

    assert bucket.to_dict()["args"]["using"] == {"foreign_key_constraint_on": ["bucket_id"]}
    assert files.to_dict()["args"]["using"] == {
        "foreign_key_constraint_on": {
            "table": {"schema": "storage", "name": "files"},
            "columns": ["bucket_id"],
        }
    }
    assert user.to_dict()["args"]["using"] == {
        "foreign_key_constraint_on": ["uploaded_by_user_id"]
    }
    assert all(op.to_dict()["args"]["source"] == "default" for op in (bucket, files, user))


def test_plan_is_rebuilt_identically():
    first = [op.serialize() for op in storage_metadata_plan()]
    second = [op.serialize() for op in storage_metadata_plan()]
    assert first == second


def test_camel_case_columns_keeps_order():
    assert list(camel_case_columns(["b_c", "a"]).items()) == [("b_c", "bC"), ("a", "a")]
