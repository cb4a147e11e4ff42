"""Member-count snapshots collected for registered groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, int) and not isinstance(value, bool):
        return _EPOCH + timedelta(milliseconds=value)
    raise TypeError(f"expected a datetime or milliseconds since the epoch, got {value!r}")


@dataclass
class AnalyticsRole:
    id: int = 0
    rank: int = 0
    member_count: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalyticsRole:
        return cls(
            id=int(data["id"]),
            rank=int(data["rank"]),
            member_count=int(data["memberCount"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "rank": self.rank, "memberCount": self.member_count}


@dataclass
class AnalyticsGroup:
    group_id: int
    member_count: int
    timestamp: datetime
    roles: list[AnalyticsRole] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.timestamp = _as_datetime(self.timestamp)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalyticsGroup:
        return cls(
            group_id=int(data["groupId"]),
            roles=[AnalyticsRole.from_dict(role) for role in data["roles"]],
            member_count=int(data["memberCount"]),
            timestamp=_as_datetime(data["timestamp"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "groupId": self.group_id,
            "roles": [role.to_dict() for role in self.roles],
            "memberCount": self.member_count,
            "timestamp": self.timestamp,
        }