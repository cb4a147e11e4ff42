"""Data returned by the Roblox web APIs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_U64_LIMIT = 2**64


class _Id(int):
    """An unsigned 64-bit identifier."""

    def __new__(cls, value: int = 0):
        number = int(value)
        if not 0 <= number < _U64_LIMIT:
            raise ValueError(
                f"{cls.__name__} must fit in an unsigned 64-bit integer, got {number}"
            )
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"


class GroupId(_Id):
    """Identifier of a Roblox group."""


class RoleId(_Id):
    """Global identifier of a role inside a Roblox group."""


class UserId(_Id):
    """Identifier of a Roblox user."""


class AssetId(_Id):
    """Identifier of a Roblox asset."""


def parse_data_list(payload: dict[str, Any], cls: Callable[..., T]) -> list[T]:
    """Parse a ``{"data": [...]}`` envelope into a list of ``cls`` objects."""
    return [cls.from_dict(item) for item in payload["data"]]  # type: ignore[attr-defined]


@dataclass
class Asset:
    id: AssetId
    name: str
    asset_type: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Asset:
        return cls(id=AssetId(data["id"]), name=data["name"], asset_type=data["type"])

    def to_dict(self) -> dict[str, Any]:
        return {"id": int(self.id), "name": self.name, "type": self.asset_type}


@dataclass
class PartialGroup:
    id: GroupId
    name: str
    member_count: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PartialGroup:
        return cls(
            id=GroupId(data["id"]),
            name=data["name"],
            member_count=int(data["memberCount"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": int(self.id), "name": self.name, "memberCount": self.member_count}


@dataclass(frozen=True)
class PartialRank:
    id: RoleId
    name: str
    rank: int
    member_count: int | None = None

    def __post_init__(self) -> None:
        if not 0 <= self.rank <= 255:
            raise ValueError(f"rank must be between 0 and 255, got {self.rank}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PartialRank:
        return cls(
            id=RoleId(data["id"]),
            name=data["name"],
            rank=int(data["rank"]),
            member_count=data.get("memberCount"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": int(self.id),
            "name": self.name,
            "rank": self.rank,
            "memberCount": self.member_count,
        }


@dataclass
class Group:
    id: GroupId
    roles: list[PartialRank] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Group:
        return cls(
            id=GroupId(data["groupId"]),
            roles=[PartialRank.from_dict(role) for role in data.get("roles", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"groupId": int(self.id), "roles": [role.to_dict() for role in self.roles]}


@dataclass
class GroupUserRole:
    group: PartialGroup
    role: PartialRank

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupUserRole:
        return cls(
            group=PartialGroup.from_dict(data["group"]),
            role=PartialRank.from_dict(data["role"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"group": self.group.to_dict(), "role": self.role.to_dict()}


@dataclass
class User:
    id: UserId
    name: str
    description: str
    is_banned: bool
    display_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> User:
        return cls(
            id=UserId(data["id"]),
            name=data["name"],
            description=data["description"],
            is_banned=bool(data["isBanned"]),
            display_name=data.get("displayName"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": int(self.id),
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "isBanned": self.is_banned,
        }


@dataclass
class PartialUser:
    id: UserId
    name: str
    display_name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PartialUser:
        return cls(
            id=UserId(data["id"]),
            name=data["name"],
            display_name=data.get("displayName"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": int(self.id), "name": self.name, "displayName": self.display_name}