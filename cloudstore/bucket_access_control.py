"""Access Control List entries for buckets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from cloudstore.common import Entity, ProjectTeam, Role
from cloudstore.errors import SerializationError

_WHAT = "BucketAccessControl"


def _require_str(data: Any, key: str) -> str:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object for `{_WHAT}`, got {data!r}")
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{_WHAT}`")
    value = data[key]
    if not isinstance(value, str):
        raise SerializationError(f"invalid type for `{key}` in `{_WHAT}`: {value!r}")
    return value


def _optional_str(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SerializationError(f"invalid type for `{key}` in `{_WHAT}`: {value!r}")
    return value


def _role(value: str) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise SerializationError(f"unknown `Role`: {value}") from None


@dataclass
class BucketAccessControl:
    """An ACL entry on a bucket."""

    kind: str
    id: str
    self_link: str
    bucket: str
    entity: Entity
    role: Role
    etag: str
    email: str | None = None
    entity_id: str | None = None
    domain: str | None = None
    project_team: ProjectTeam | None = None

    @classmethod
    def from_json(cls, data: Any) -> BucketAccessControl:
        """Build an entry from its decoded JSON object."""
        kind = _require_str(data, "kind")
        project_team = data.get("projectTeam")
        return cls(
            kind=kind,
            id=_require_str(data, "id"),
            self_link=_require_str(data, "selfLink"),
            bucket=_require_str(data, "bucket"),
            entity=Entity.parse(_require_str(data, "entity")),
            role=_role(_require_str(data, "role")),
            etag=_require_str(data, "etag"),
            email=_optional_str(data, "email"),
            entity_id=_optional_str(data, "entityId"),
            domain=_optional_str(data, "domain"),
            project_team=None if project_team is None else ProjectTeam.from_json(project_team),
        )

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this entry."""
        return {
            "kind": self.kind,
            "id": self.id,
            "selfLink": self.self_link,
            "bucket": self.bucket,
            "entity": self.entity.to_json(),
            "role": self.role.value,
            "email": self.email,
            "entityId": self.entity_id,
            "domain": self.domain,
            "projectTeam": None if self.project_team is None else self.project_team.to_json(),
            "etag": self.etag,
        }


@dataclass
class NewBucketAccessControl:
    """The fields needed to create a bucket ACL entry."""

    entity: Entity
    role: Role

    def to_json(self) -> dict[str, Any]:
        """The JSON object sent to create the entry."""
        return {"entity": self.entity.to_json(), "role": self.role.value}