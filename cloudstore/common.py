"""Types shared by the access-control and bucket resources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, TypeVar

from cloudstore.errors import SerializationError

T = TypeVar("T")


def _require(data: Any, key: str, kind: type, what: str) -> Any:
    if not isinstance(data, dict):
        raise SerializationError(f"expected an object for `{what}`, got {data!r}")
    if key not in data:
        raise SerializationError(f"missing field `{key}` in `{what}`")
    value = data[key]
    if not isinstance(value, kind):
        raise SerializationError(f"invalid type for `{key}` in `{what}`: {value!r}")
    return value


class Team(Enum):
    """Any type of team that can be encountered."""

    EDITORS = "editors"
    OWNERS = "owners"
    VIEWERS = "viewers"

    @classmethod
    def parse(cls, value: Any) -> Team:
        """Turn the wire name of a team into a member."""
        if not isinstance(value, str):
            raise SerializationError(f"Invalid `Team`: {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise SerializationError(f"Invalid `Team`: {value}") from None

    def __str__(self) -> str:
        return self.value


class Role(Enum):
    """Access permission held by an entity."""

    OWNER = "OWNER"
    WRITER = "WRITER"
    READER = "READER"


class EntityKind(Enum):
    """The forms an entity can take."""

    USER_ID = "userId"
    USER_EMAIL = "userEmail"
    GROUP_ID = "groupId"
    GROUP_EMAIL = "groupEmail"
    DOMAIN = "domain"
    PROJECT = "project"
    ALL_USERS = "allUsers"
    ALL_AUTHENTICATED_USERS = "allAuthenticatedUsers"


_PREFIXES = {
    EntityKind.USER_ID: "user",
    EntityKind.USER_EMAIL: "user",
    EntityKind.GROUP_ID: "group",
    EntityKind.GROUP_EMAIL: "group",
    EntityKind.DOMAIN: "domain",
}


@dataclass(frozen=True)
class Entity:
    """A user or group of users that holds some kind of permission."""

    kind: EntityKind
    value: str = ""
    team: Team | None = None

    @classmethod
    def user_id(cls, value: str) -> Entity:
        """A single user, identified by its id."""
        return cls(EntityKind.USER_ID, value)

    @classmethod
    def user_email(cls, value: str) -> Entity:
        """A single user, identified by its email address."""
        return cls(EntityKind.USER_EMAIL, value)

    @classmethod
    def group_id(cls, value: str) -> Entity:
        """A group of users, identified by its id."""
        return cls(EntityKind.GROUP_ID, value)

    @classmethod
    def group_email(cls, value: str) -> Entity:
        """A group of users, identified by its email address."""
        return cls(EntityKind.GROUP_EMAIL, value)

    @classmethod
    def domain(cls, value: str) -> Entity:
        """All users whose email address ends with the domain."""
        return cls(EntityKind.DOMAIN, value)

    @classmethod
    def project(cls, team: Team, project_id: str) -> Entity:
        """All users within a project, identified by team and project id."""
        return cls(EntityKind.PROJECT, project_id, team)

    @classmethod
    def all_users(cls) -> Entity:
        """All users."""
        return cls(EntityKind.ALL_USERS)

    @classmethod
    def all_authenticated_users(cls) -> Entity:
        """All users that are logged in."""
        return cls(EntityKind.ALL_AUTHENTICATED_USERS)

    @classmethod
    def parse(cls, value: Any) -> Entity:
        """Read an entity from its textual form, such as ``user-<id>``."""
        if not isinstance(value, str):
            raise SerializationError(f"expected a string for `Entity`, got {value!r}")
        head, *rest = value.split("-")
        has_email = any("@" in part for part in rest)
        joined = "-".join(rest)
        if head == "user":
            return cls.user_email(joined) if has_email else cls.user_id(joined)
        if head == "group":
            return cls.group_email(joined) if has_email else cls.group_id(joined)
        if head == "domain":
            return cls.domain(joined)
        if head == "project" and len(rest) == 2:
            team, project_id = rest
            return cls.project(Team.parse(team), project_id)
        if value == "allUsers":
            return cls.all_users()
        if value == "allAuthenticatedUsers":
            return cls.all_authenticated_users()
        raise SerializationError(f"Unexpected `Entity`: {value}")

    def to_json(self) -> str:
        """The textual form used on the wire."""
        return str(self)

    def __str__(self) -> str:
        if self.kind in _PREFIXES:
            return f"{_PREFIXES[self.kind]}-{self.value}"
        if self.kind is EntityKind.PROJECT:
            return f"project-{self.team}-{self.value}"
        return self.kind.value


@dataclass
class ProjectTeam:
    """The project team associated with an access-control entry."""

    project_number: str
    team: Team

    @classmethod
    def from_json(cls, data: Any) -> ProjectTeam:
        """Build from the decoded JSON object."""
        project_number = _require(data, "projectNumber", str, "ProjectTeam")
        team = Team.parse(_require(data, "team", str, "ProjectTeam"))
        return cls(project_number=project_number, team=team)

    def to_json(self) -> dict[str, Any]:
        """The JSON object for this team."""
        return {"projectNumber": self.project_number, "team": self.team.value}


@dataclass
class ListResponse(Generic[T]):
    """One page of a list response."""

    items: list[T] = field(default_factory=list)
    next_page_token: str | None = None

    @classmethod
    def from_json(cls, data: Any, item_parser: Callable[[Any], T]) -> ListResponse[T]:
        """Build a page, parsing each item with ``item_parser``."""
        if not isinstance(data, dict):
            raise SerializationError(f"expected an object for `ListResponse`, got {data!r}")
        raw_items = data.get("items", [])
        if not isinstance(raw_items, list):
            raise SerializationError(f"invalid type for `items`: {raw_items!r}")
        token = data.get("nextPageToken")
        if token is not None and not isinstance(token, str):
            raise SerializationError(f"invalid type for `nextPageToken`: {token!r}")
        return cls(items=[item_parser(item) for item in raw_items], next_page_token=token)