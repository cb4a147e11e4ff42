"""Logged guild events and the event types a guild defines."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from bson import ObjectId

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _as_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, int) and not isinstance(value, bool):
        return _EPOCH + timedelta(milliseconds=value)
    raise TypeError(f"expected a datetime or milliseconds since the epoch, got {value!r}")


def _as_notes(value: Any) -> tuple[str, str] | None:
    if value is None:
        return None
    notes = tuple(value)
    if len(notes) != 2:
        raise ValueError(f"notes must hold exactly two entries, got {len(notes)}")
    return (str(notes[0]), str(notes[1]))


@dataclass
class EventLog:
    id: ObjectId
    guild_id: int
    event_type: int
    guild_event_id: int
    host_id: int
    timestamp: datetime
    attendees: list[int] = field(default_factory=list)
    notes: tuple[str, str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventLog:
        return cls(
            id=ObjectId(data["_id"]),
            guild_id=int(data["GuildId"]),
            event_type=int(data["EventType"]),
            guild_event_id=int(data["GuildEventId"]),
            host_id=int(data["HostId"]),
            timestamp=_as_datetime(data["Timestamp"]),
            attendees=[int(a) for a in data.get("Attendees", [])],
            notes=_as_notes(data.get("Notes")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "GuildId": self.guild_id,
            "EventType": self.event_type,
            "GuildEventId": self.guild_event_id,
            "HostId": self.host_id,
            "Timestamp": self.timestamp,
            "Attendees": list(self.attendees),
            "Notes": list(self.notes) if self.notes is not None else None,
        }


@dataclass
class EventType:
    id: int
    name: str
    xp: int
    disabled: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EventType:
        return cls(
            id=int(data["Id"]),
            name=data["Name"],
            xp=int(data["XP"]),
            disabled=bool(data.get("Disabled", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"Id": self.id, "Name": self.name, "XP": self.xp, "Disabled": self.disabled}