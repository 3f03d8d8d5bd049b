"""The bucket resource and the model used to create new buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from cloudstore.bucket_access_control import BucketAccessControl, NewBucketAccessControl
from cloudstore.bucket_config import (
    Billing,
    Cors,
    Encryption,
    IamConfiguration,
    Lifecycle,
    Logging,
    Owner,
    RetentionPolicy,
    StorageClass,
    Versioning,
    Website,
    _format_datetime,
    _parse_datetime,
    parse_int,
)
from cloudstore.errors import SerializationError

_WHAT = "Bucket"
_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _require(data: dict, key: str, kind: type) -> Any:
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{_WHAT}`")
    value = data[key]
    if not isinstance(value, kind):
        raise SerializationError(f"invalid type for `{key}` in `{_WHAT}`: {value!r}")
    return value


def _optional(data: dict, key: str, kind: type) -> Any:
    value = data.get(key)
    if value is not None and not isinstance(value, kind):
        raise SerializationError(f"invalid type for `{key}` in `{_WHAT}`: {value!r}")
    return value


def _required_int(data: dict, key: str, low: int, high: int) -> int:
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{_WHAT}`")
    value = parse_int(data[key])
    if not low <= value <= high:
        raise SerializationError(f"`{key}` in `{_WHAT}` out of range: {value}")
    return value


def _storage_class(value: Any) -> StorageClass:
    try:
        return StorageClass(value)
    except ValueError:
        raise SerializationError(f"unknown `StorageClass`: {value!r}") from None


def _labels(data: dict) -> dict[str, str] | None:
    labels = _optional(data, "labels", dict)
    if labels is None:
        return None
    if not all(isinstance(k, str) and isinstance(v, str) for k, v in labels.items()):
        raise SerializationError(f"invalid entry in `labels` of `{_WHAT}`: {labels!r}")
    return dict(labels)


def _parse_list(data: dict, key: str, parser: Any) -> list | None:
    raw = _optional(data, key, list)
    return None if raw is None else [parser(item) for item in raw]


def _dump(value: Any) -> Any:
    return value.to_json() if hasattr(value, "to_json") else value


def _dump_optional(value: Any) -> Any:
    return None if value is None else _dump(value)


def _dump_list(values: list | None) -> list | None:
    return None if values is None else [_dump(item) for item in values]


def _raw_object(item: Any) -> dict:
    if not isinstance(item, dict):
        raise SerializationError(f"expected an object in `defaultObjectAcl`, got {item!r}")
    return dict(item)


def _optional_block(data: dict, key: str, parser: Any) -> Any:
    value = data.get(key)
    return None if value is None else parser(value)


@dataclass
class Bucket:
    """A bucket: a container of objects with a globally unique name."""

    kind: str
    id: str
    self_link: str
    project_number: int
    name: str
    time_created: datetime
    updated: datetime
    metageneration: int
    location: str
    location_type: str
    storage_class: StorageClass
    etag: str
    default_event_based_hold: bool | None = None
    retention_policy: RetentionPolicy | None = None
    acl: list[BucketAccessControl] | None = None
    default_object_acl: list[dict[str, Any]] | None = None
    iam_configuration: IamConfiguration | None = None
    encryption: Encryption | None = None
    owner: Owner | None = None
    website: Website | None = None
    logging: Logging | None = None
    versioning: Versioning | None = None
    cors: list[Cors] | None = None
    lifecycle: Lifecycle | None = None
    labels: dict[str, str] | None = None
    billing: Billing | None = None

    @classmethod
    def from_json(cls, data: Any) -> Bucket:
        """Build a bucket from its decoded JSON object."""
        if not isinstance(data, dict):
            raise SerializationError(f"expected an object for `{_WHAT}`, got {data!r}")
        if "timeCreated" not in data:
            raise SerializationError(f"missing field `timeCreated` in `{_WHAT}`")
        if "updated" not in data:
            raise SerializationError(f"missing field `updated` in `{_WHAT}`")
        return cls(
            kind=_require(data, "kind", str),
            id=_require(data, "id", str),
            self_link=_require(data, "selfLink", str),
            project_number=_required_int(data, "projectNumber", 0, _U64_MAX),
            name=_require(data, "name", str),
            time_created=_parse_datetime(data["timeCreated"], "timeCreated"),
            updated=_parse_datetime(data["updated"], "updated"),
            metageneration=_required_int(data, "metageneration", _I64_MIN, _I64_MAX),
            location=_require(data, "location", str),
            location_type=_require(data, "locationType", str),
            storage_class=_storage_class(_require(data, "storageClass", str)),
            etag=_require(data, "etag", str),
            default_event_based_hold=_optional(data, "defaultEventBasedHold", bool),
            retention_policy=_optional_block(data, "retentionPolicy", RetentionPolicy.from_json),
            acl=_parse_list(data, "acl", BucketAccessControl.from_json),
            default_object_acl=_parse_list(data, "defaultObjectAcl", _raw_object),
            iam_configuration=_optional_block(
                data, "iamConfiguration", IamConfiguration.from_json
            ),
            encryption=_optional_block(data, "encryption", Encryption.from_json),
            owner=_optional_block(data, "owner", Owner.from_json),
            website=_optional_block(data, "website", Website.from_json),
            logging=_optional_block(data, "logging", Logging.from_json),
            versioning=_optional_block(data, "versioning", Versioning.from_json),
            cors=_parse_list(data, "cors", Cors.from_json),
            lifecycle=_optional_block(data, "lifecycle", Lifecycle.from_json),
            labels=_labels(data),
            billing=_optional_block(data, "billing", Billing.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object sent when updating this bucket."""
        return {
            "kind": self.kind,
            "id": self.id,
            "selfLink": self.self_link,
            "projectNumber": self.project_number,
            "name": self.name,
            "timeCreated": _format_datetime(self.time_created),
            "updated": _format_datetime(self.updated),
            "defaultEventBasedHold": self.default_event_based_hold,
            "retentionPolicy": _dump_optional(self.retention_policy),
            "metageneration": self.metageneration,
            "acl": _dump_list(self.acl),
            "defaultObjectAcl": _dump_list(self.default_object_acl),
            "iamConfiguration": _dump_optional(self.iam_configuration),
            "encryption": _dump_optional(self.encryption),
            "owner": _dump_optional(self.owner),
            "location": self.location,
            "locationType": self.location_type,
            "website": _dump_optional(self.website),
            "logging": _dump_optional(self.logging),
            "versioning": _dump_optional(self.versioning),
            "cors": _dump_list(self.cors),
            "lifecycle": _dump_optional(self.lifecycle),
            "labels": None if self.labels is None else dict(self.labels),
            "storageClass": self.storage_class.value,
            "billing": _dump_optional(self.billing),
            "etag": self.etag,
        }


@dataclass
class NewBucket:
    """The settings used to create a bucket; only ``name`` is mandatory."""

    name: str = ""
    default_event_based_hold: bool | None = None
    acl: list[NewBucketAccessControl] | None = None
    default_object_acl: list[Any] | None = None
    iam_configuration: IamConfiguration | None = None
    encryption: Encryption | None = None
    location: str = "US"
    website: Website | None = None
    logging: Logging | None = None
    versioning: Versioning | None = None
    cors: list[Cors] | None = field(default=None)
    lifecycle: Lifecycle | None = None
    labels: dict[str, str] | None = None
    storage_class: StorageClass | None = None
    billing: Billing | None = None

    def to_json(self) -> dict[str, Any]:
        """The JSON object sent to create the bucket."""
        return {
            "name": self.name,
            "defaultEventBasedHold": self.default_event_based_hold,
            "acl": _dump_list(self.acl),
            "defaultObjectAcl": _dump_list(self.default_object_acl),
            "iamConfiguration": _dump_optional(self.iam_configuration),
            "encryption": _dump_optional(self.encryption),
            "location": self.location,
            "website": _dump_optional(self.website),
            "logging": _dump_optional(self.logging),
            "versioning": _dump_optional(self.versioning),
            "cors": _dump_list(self.cors),
            "lifecycle": _dump_optional(self.lifecycle),
            "labels": None if self.labels is None else dict(self.labels),
            "storageClass": None if self.storage_class is None else self.storage_class.value,
            "billing": _dump_optional(self.billing),
        }