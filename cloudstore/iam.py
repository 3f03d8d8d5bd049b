"""IAM policies, bindings and roles attached to buckets."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from cloudstore.errors import SerializationError


class StandardIamRole(Enum):
    """Standard roles, applicable to buckets or whole projects."""

    OBJECT_CREATOR = "roles/storage.objectCreator"
    OBJECT_VIEWER = "roles/storage.objectViewer"
    OBJECT_ADMIN = "roles/storage.objectAdmin"
    HMAC_KEY_ADMIN = "roles/storage.hmacKeyAdmin"
    ADMIN = "roles/storage.admin"


class PrimitiveIamRole(Enum):
    """Primitive roles, which can only be added on a per-project basis."""

    VIEWER = "role/viewer"
    EDITOR = "role/editor"
    OWNER = "role/owner"


class LegacyIamRole(Enum):
    """Roles equivalent to ACL permissions; they apply to single buckets only."""

    LEGACY_OBJECT_READER = "roles/storage.legacyObjectReader"
    LEGACY_OBJECT_OWNER = "roles/storage.legacyObjectOwner"
    LEGACY_BUCKET_READER = "roles/storage.legacyBucketReader"
    LEGACY_BUCKET_WRITER = "roles/storage.legacyBucketWriter"
    LEGACY_BUCKET_OWNER = "roles/storage.legacyBucketOwner"


IamRole = Union[StandardIamRole, PrimitiveIamRole, LegacyIamRole]

_ROLE_KINDS = (StandardIamRole, PrimitiveIamRole, LegacyIamRole)


def parse_iam_role(value: Any) -> IamRole:
    """Read a role name, trying standard, primitive and legacy roles in turn."""
    if not isinstance(value, str):
        raise SerializationError(f"expected a string for `IamRole`, got {value!r}")
    for kind in _ROLE_KINDS:
        try:
            return kind(value)
        except ValueError:
            continue
    raise SerializationError(f"unknown `IamRole`: {value}")


def _require(data: Any, key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object for `{what}`, got {data!r}")
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{what}`")
    value = data[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


def _optional_str(data: dict, key: str, what: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


def _str_list(values: list, key: str, what: str) -> list[str]:
    if not all(isinstance(item, str) for item in values):
        raise SerializationError(f"invalid entry in `{key}` of `{what}`: {values!r}")
    return list(values)


@dataclass
class IamCondition:
    """A condition attached to a binding."""

    title: str
    expression: str
    description: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> IamCondition:
        """Build from the decoded JSON object."""
        title = _require(data, "title", str, "IamCondition")
        expression = _require(data, "expression", str, "IamCondition")
        return cls(
            title=title,
            expression=expression,
            description=_optional_str(data, "description", "IamCondition"),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this condition."""
        return {
            "title": self.title,
            "description": self.description,
            "expression": self.expression,
        }


@dataclass
class Binding:
    """An association between a role and the members who may assume it."""

    role: IamRole
    members: list[str] = field(default_factory=list)
    condition: IamCondition | None = None

    @classmethod
    def from_json(cls, data: Any) -> Binding:
        """Build from the decoded JSON object."""
        role = parse_iam_role(_require(data, "role", str, "Binding"))
        members = _str_list(_require(data, "members", list, "Binding"), "members", "Binding")
        condition = data.get("condition")
        return cls(
            role=role,
            members=members,
            condition=None if condition is None else IamCondition.from_json(condition),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this binding."""
        return {
            "role": self.role.value,
            "members": list(self.members),
            "condition": None if self.condition is None else self.condition.to_json(),
        }


@dataclass
class IamPolicy:
    """The IAM policy of a bucket."""

    version: int = 0
    kind: str | None = None
    resource_id: str | None = None
    bindings: list[Binding] = field(default_factory=list)
    etag: str = ""

    @classmethod
    def from_json(cls, data: Any) -> IamPolicy:
        """Build from the decoded JSON object."""
        version = _require(data, "version", int, "IamPolicy")
        raw_bindings = _require(data, "bindings", list, "IamPolicy")
        etag = _require(data, "etag", str, "IamPolicy")
        return cls(
            version=version,
            kind=_optional_str(data, "kind", "IamPolicy"),
            resource_id=_optional_str(data, "resourceId", "IamPolicy"),
            bindings=[Binding.from_json(item) for item in raw_bindings],
            etag=etag,
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this policy."""
        return {
            "version": self.version,
            "kind": self.kind,
            "resourceId": self.resource_id,
            "bindings": [binding.to_json() for binding in self.bindings],
            "etag": self.etag,
        }


@dataclass
class TestIamPermission:
    """The answer to a permission test: the permissions the caller holds."""

    __test__ = False

    kind: str
    permissions: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> TestIamPermission:
        """Build from the decoded JSON object."""
        kind = _require(data, "kind", str, "TestIamPermission")
        permissions = _str_list(
            _require(data, "permissions", list, "TestIamPermission"),
            "permissions",
            "TestIamPermission",
        )
        return cls(kind=kind, permissions=permissions)