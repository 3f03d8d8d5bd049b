from datetime import datetime, timezone

import pytest

from cloudstore.bucket import Bucket, NewBucket
from cloudstore.bucket_access_control import NewBucketAccessControl
from cloudstore.bucket_config import (
    IamConfiguration,
    StorageClass,
    UniformBucketLevelAccess,
    Versioning,
)
from cloudstore.common import Entity, Role
from cloudstore.errors import SerializationError


def _minimal():
    return {
        "kind": "storage#bucket",
        "id": "my-bucket",
        "selfLink": "https://example.com/b/my-bucket",
        "projectNumber": "1234",
        "name": "my-bucket",
        "timeCreated": "2020-01-02T03:04:05.678Z",
        "updated": "2020-01-02T03:04:05Z",
        "metageneration": "1",
        "location": "EU",
        "locationType": "multi-region",
        "storageClass": "STANDARD",
        "etag": "CAE=",
    }


def _acl_entry():
    return {
        "kind": "storage#bucketAccessControl",
        "id": "my-bucket/allUsers",
        "selfLink": "https://example.com/b/my-bucket/acl/allUsers",
        "bucket": "my-bucket",
        "entity": "allUsers",
        "role": "READER",
        "etag": "CAE=",
    }


def test_parse_minimal_bucket():
    bucket = Bucket.from_json(_minimal())
    assert bucket.name == "my-bucket"
    assert bucket.project_number == 1234
    assert bucket.metageneration == 1
    assert bucket.storage_class is StorageClass.STANDARD
    assert bucket.time_created == datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)
    assert bucket.acl is None
    assert bucket.retention_policy is None
    assert bucket.labels is None


def test_parse_nested_blocks():
    data = _minimal()
    data["acl"] = [_acl_entry()]
    data["versioning"] = {"enabled": True}
    data["labels"] = {"team": "storage"}
    data["retentionPolicy"] = {
        "retentionPeriod": "50",
        "effectiveTime": "2020-01-02T03:04:05Z",
        "isLocked": False,
    }
    bucket = Bucket.from_json(data)
    assert bucket.acl[0].entity == Entity.all_users()
    assert bucket.acl[0].role is Role.READER
    assert bucket.versioning == Versioning(enabled=True)
    assert bucket.labels == {"team": "storage"}
    assert bucket.retention_policy.retention_period == 50


@pytest.mark.parametrize("key", ["kind", "projectNumber", "timeCreated", "storageClass", "etag"])
def test_missing_required_field(key):
    data = _minimal()
    del data[key]
    with pytest.raises(SerializationError):
        Bucket.from_json(data)


def test_project_number_must_be_string():
    data = _minimal()
    data["projectNumber"] = 1234
    with pytest.raises(SerializationError):
        Bucket.from_json(data)


def test_unknown_storage_class():
    data = _minimal()
    data["storageClass"] = "FROZEN"
    with pytest.raises(SerializationError):
        Bucket.from_json(data)


def test_not_an_object():
    with pytest.raises(SerializationError):
        Bucket.from_json(["my-bucket"])


def test_bucket_to_json():
    data = _minimal()
    data["acl"] = [_acl_entry()]
    out = Bucket.from_json(data).to_json()
    assert out["projectNumber"] == 1234
    assert out["metageneration"] == 1
    assert out["selfLink"] == data["selfLink"]
    assert out["storageClass"] == "STANDARD"
    assert out["retentionPolicy"] is None
    assert out["acl"][0]["entity"] == "allUsers"
    assert out["timeCreated"].endswith("Z")
    parsed = datetime.fromisoformat(out["timeCreated"].replace("Z", "+00:00"))
    assert parsed == datetime(2020, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


def test_new_bucket_defaults():
    out = NewBucket(name="doctest-bucket").to_json()
    assert out["name"] == "doctest-bucket"
    assert out["location"] == "US"
    assert out["storageClass"] is None
    assert out["acl"] is None
    assert set(out) >= {"defaultEventBasedHold", "iamConfiguration", "labels", "billing"}


def test_new_bucket_with_nested_settings():
    new_bucket = NewBucket(
        name="test-create",
        default_event_based_hold=True,
        acl=[NewBucketAccessControl(entity=Entity.all_users(), role=Role.READER)],
        default_object_acl=[NewBucketAccessControl(entity=Entity.all_users(), role=Role.READER)],
        iam_configuration=IamConfiguration(
            uniform_bucket_level_access=UniformBucketLevelAccess(enabled=False)
        ),
        storage_class=StorageClass.NEARLINE,
    )
    out = new_bucket.to_json()
    assert out["defaultEventBasedHold"] is True
    assert out["acl"] == [{"entity": "allUsers", "role": "READER"}]
    assert out["defaultObjectAcl"] == [{"entity": "allUsers", "role": "READER"}]
    assert out["iamConfiguration"] == {
        "uniformBucketLevelAccess": {"enabled": False, "lockedTime": None}
    }
    assert out["storageClass"] == "NEARLINE"