"""Configuration blocks that make up a bucket resource."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Any, TypeVar

from cloudstore.common import Entity
from cloudstore.errors import SerializationError

E = TypeVar("E", bound=Enum)

_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_RFC3339 = re.compile(
    r"(\d{4}-\d{2}-\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|z|[+-]\d{2}:\d{2})"
)
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def parse_int(value: Any) -> int:
    """Read an integer that the API sends as a decimal string."""
    if not isinstance(value, str):
        raise SerializationError(f"expected a string holding an integer, got {value!r}")
    if not _INT_TEXT.fullmatch(value):
        raise SerializationError(f"invalid digit found in string: {value!r}")
    return int(value)


def parse_optional_int(value: Any) -> int | None:
    """Read an integer sent either as a string or as a JSON number; ``None`` stays ``None``."""
    if value is None:
        return None
    if isinstance(value, str):
        return parse_int(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float):
        raise SerializationError(f"invalid digit found in string: {value!r}")
    raise SerializationError("Incorrect type")


def _check_object(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object for `{what}`, got {data!r}")
    return data


def _is_kind(value: Any, kind: type) -> bool:
    if kind is int and isinstance(value, bool):
        return False
    return isinstance(value, kind)


def _require(data: Any, key: str, kind: type, what: str) -> Any:
    _check_object(data, what)
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{what}`")
    value = data[key]
    if not _is_kind(value, kind):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


def _optional(data: dict, key: str, kind: type, what: str) -> Any:
    value = data.get(key)
    if value is not None and not _is_kind(value, kind):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


def _i32(value: int | None, key: str, what: str) -> int | None:
    if value is not None and not _I32_MIN <= value <= _I32_MAX:
        raise SerializationError(f"`{key}` in `{what}` out of range: {value}")
    return value


def _str_list(values: list, key: str, what: str) -> list[str]:
    if not all(isinstance(item, str) for item in values):
        raise SerializationError(f"invalid entry in `{key}` of `{what}`: {values!r}")
    return list(values)


def _enum(cls: type[E], value: Any) -> E:
    try:
        return cls(value)
    except ValueError:
        raise SerializationError(f"unknown `{cls.__name__}`: {value!r}") from None


def _parse_datetime(value: Any, key: str) -> datetime:
    if not isinstance(value, str):
        raise SerializationError(f"expected an RFC 3339 string for `{key}`, got {value!r}")
    match = _RFC3339.fullmatch(value)
    if match is None:
        raise SerializationError(f"invalid RFC 3339 timestamp for `{key}`: {value!r}")
    day, hour, minute, second, fraction, offset = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = int(offset[1:3]), int(offset[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    try:
        moment = datetime.fromisoformat(f"{day}T{hour}:{minute}:{second}").replace(
            microsecond=micro, tzinfo=tz
        )
    except ValueError as exc:
        raise SerializationError(f"invalid timestamp for `{key}`: {value!r}") from exc
    return moment.astimezone(timezone.utc)


def _format_datetime(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = moment.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def _parse_date(value: Any, key: str) -> date:
    if not isinstance(value, str):
        raise SerializationError(f"expected a date string for `{key}`, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise SerializationError(f"invalid date for `{key}`: {value!r}") from exc


class StorageClass(Enum):
    """The kind of storage used, which sets availability, performance and cost."""

    STANDARD = "STANDARD"
    NEARLINE = "NEARLINE"
    COLDLINE = "COLDLINE"
    MULTI_REGIONAL = "MULTI_REGIONAL"
    REGIONAL = "REGIONAL"
    DURABLE_REDUCED_AVAILABILITY = "DURABLE_REDUCED_AVAILABILITY"


class ActionType(Enum):
    """The type of a lifecycle action."""

    DELETE = "Delete"
    SET_STORAGE_CLASS = "SetStorageClass"


@dataclass
class RetentionPolicy:
    """The minimum age an object must reach before it can be deleted or overwritten."""

    retention_period: int
    effective_time: datetime
    is_locked: bool | None = None

    @classmethod
    def from_json(cls, data: Any) -> RetentionPolicy:
        """Build from the decoded JSON object."""
        what = "RetentionPolicy"
        _check_object(data, what)
        if "retentionPeriod" not in data:
            raise SerializationError(f"missing field `retentionPeriod` in `{what}`")
        period = parse_int(data["retentionPeriod"])
        if not 0 <= period < 2**64:
            raise SerializationError(f"`retentionPeriod` out of range: {period}")
        if "effectiveTime" not in data:
            raise SerializationError(f"missing field `effectiveTime` in `{what}`")
        return cls(
            retention_period=period,
            effective_time=_parse_datetime(data["effectiveTime"], "effectiveTime"),
            is_locked=_optional(data, "isLocked", bool, what),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this policy."""
        return {
            "retentionPeriod": self.retention_period,
            "effectiveTime": _format_datetime(self.effective_time),
            "isLocked": self.is_locked,
        }


@dataclass
class UniformBucketLevelAccess:
    """Access configured for all objects of a bucket at once."""

    enabled: bool
    locked_time: datetime | None = None

    @classmethod
    def from_json(cls, data: Any) -> UniformBucketLevelAccess:
        """Build from the decoded JSON object."""
        enabled = _require(data, "enabled", bool, "UniformBucketLevelAccess")
        locked = data.get("lockedTime")
        return cls(
            enabled=enabled,
            locked_time=None if locked is None else _parse_datetime(locked, "lockedTime"),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this setting."""
        return {
            "enabled": self.enabled,
            "lockedTime": None if self.locked_time is None else _format_datetime(self.locked_time),
        }


@dataclass
class IamConfiguration:
    """The IAM configuration of a bucket."""

    uniform_bucket_level_access: UniformBucketLevelAccess

    @classmethod
    def from_json(cls, data: Any) -> IamConfiguration:
        """Build from the decoded JSON object."""
        inner = _require(data, "uniformBucketLevelAccess", dict, "IamConfiguration")
        return cls(uniform_bucket_level_access=UniformBucketLevelAccess.from_json(inner))

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {"uniformBucketLevelAccess": self.uniform_bucket_level_access.to_json()}


@dataclass
class Encryption:
    """Encryption settings for data in a bucket."""

    default_kms_key_name: str

    @classmethod
    def from_json(cls, data: Any) -> Encryption:
        """Build from the decoded JSON object."""
        return cls(default_kms_key_name=_require(data, "defaultKmsKeyName", str, "Encryption"))

    def to_json(self) -> dict[str, Any]:
        """The JSON object for these settings."""
        return {"defaultKmsKeyName": self.default_kms_key_name}


@dataclass
class Owner:
    """The entity that owns a bucket."""

    entity: Entity
    entity_id: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> Owner:
        """Build from the decoded JSON object."""
        entity = Entity.parse(_require(data, "entity", str, "Owner"))
        return cls(entity=entity, entity_id=_optional(data, "entityId", str, "Owner"))

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this owner."""
        return {"entity": self.entity.to_json(), "entityId": self.entity_id}


@dataclass
class Website:
    """How the bucket behaves when its contents are served as a web site."""

    main_page_suffix: str
    not_found_page: str

    @classmethod
    def from_json(cls, data: Any) -> Website:
        """Build from the decoded JSON object."""
        return cls(
            main_page_suffix=_require(data, "mainPageSuffix", str, "Website"),
            not_found_page=_require(data, "notFoundPage", str, "Website"),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {"mainPageSuffix": self.main_page_suffix, "notFoundPage": self.not_found_page}


@dataclass
class Logging:
    """Where and how access logs of a bucket are kept."""

    log_bucket: str
    log_object_prefix: str

    @classmethod
    def from_json(cls, data: Any) -> Logging:
        """Build from the decoded JSON object."""
        return cls(
            log_bucket=_require(data, "logBucket", str, "Logging"),
            log_object_prefix=_require(data, "logObjectPrefix", str, "Logging"),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {"logBucket": self.log_bucket, "logObjectPrefix": self.log_object_prefix}


@dataclass
class Versioning:
    """Whether a bucket keeps track of object versions."""

    enabled: bool

    @classmethod
    def from_json(cls, data: Any) -> Versioning:
        """Build from the decoded JSON object."""
        return cls(enabled=_require(data, "enabled", bool, "Versioning"))

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {"enabled": self.enabled}


@dataclass
class Cors:
    """How cross-origin requests to a bucket are answered."""

    origin: list[str] = field(default_factory=list)
    method: list[str] = field(default_factory=list)
    response_header: list[str] = field(default_factory=list)
    max_age_seconds: int = 0

    @classmethod
    def from_json(cls, data: Any) -> Cors:
        """Build from the decoded JSON object."""
        what = "Cors"
        return cls(
            origin=_str_list(_require(data, "origin", list, what), "origin", what),
            method=_str_list(_require(data, "method", list, what), "method", what),
            response_header=_str_list(
                _require(data, "responseHeader", list, what), "responseHeader", what
            ),
            max_age_seconds=_i32(
                _require(data, "maxAgeSeconds", int, what), "maxAgeSeconds", what
            ),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {
            "origin": list(self.origin),
            "method": list(self.method),
            "responseHeader": list(self.response_header),
            "maxAgeSeconds": self.max_age_seconds,
        }


@dataclass
class Action:
    """An action taken when a lifecycle condition is met."""

    type: ActionType
    storage_class: StorageClass | None = None

    @classmethod
    def from_json(cls, data: Any) -> Action:
        """Build from the decoded JSON object."""
        action_type = _enum(ActionType, _require(data, "type", str, "Action"))
        storage_class = _optional(data, "storageClass", str, "Action")
        return cls(
            type=action_type,
            storage_class=None if storage_class is None else _enum(StorageClass, storage_class),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this action."""
        return {
            "type": self.type.value,
            "storageClass": None if self.storage_class is None else self.storage_class.value,
        }


@dataclass
class Condition:
    """The circumstances under which a lifecycle action is taken."""

    age: int | None = None
    created_before: date | None = None
    is_live: bool | None = None
    matches_storage_class: list[str] | None = None
    num_newer_versions: int | None = None

    @classmethod
    def from_json(cls, data: Any) -> Condition:
        """Build from the decoded JSON object."""
        what = "Condition"
        _check_object(data, what)
        created = data.get("createdBefore")
        classes = _optional(data, "matchesStorageClass", list, what)
        return cls(
            age=_i32(_optional(data, "age", int, what), "age", what),
            created_before=None if created is None else _parse_date(created, "createdBefore"),
            is_live=_optional(data, "isLive", bool, what),
            matches_storage_class=(
                None if classes is None else _str_list(classes, "matchesStorageClass", what)
            ),
            num_newer_versions=_i32(
                parse_optional_int(data.get("numNewerVersions")), "numNewerVersions", what
            ),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this condition."""
        return {
            "age": self.age,
            "createdBefore": (
                None if self.created_before is None else self.created_before.isoformat()
            ),
            "isLive": self.is_live,
            "matchesStorageClass": (
                None if self.matches_storage_class is None else list(self.matches_storage_class)
            ),
            "numNewerVersions": self.num_newer_versions,
        }


@dataclass
class Rule:
    """One lifecycle rule: an action and the condition that triggers it."""

    action: Action
    condition: Condition

    @classmethod
    def from_json(cls, data: Any) -> Rule:
        """Build from the decoded JSON object."""
        action = Action.from_json(_require(data, "action", dict, "Rule"))
        condition = Condition.from_json(_require(data, "condition", dict, "Rule"))
        return cls(action=action, condition=condition)

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this rule."""
        return {"action": self.action.to_json(), "condition": self.condition.to_json()}


@dataclass
class Lifecycle:
    """The set of rules that together describe a bucket's lifecycle."""

    rule: list[Rule] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> Lifecycle:
        """Build from the decoded JSON object."""
        return cls(rule=[Rule.from_json(item) for item in _require(data, "rule", list, "Lifecycle")])

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this lifecycle."""
        return {"rule": [rule.to_json() for rule in self.rule]}


@dataclass
class Billing:
    """The payment structure of a bucket."""

    requester_pays: bool

    @classmethod
    def from_json(cls, data: Any) -> Billing:
        """Build from the decoded JSON object."""
        return cls(requester_pays=_require(data, "requesterPays", bool, "Billing"))

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this configuration."""
        return {"requesterPays": self.requester_pays}