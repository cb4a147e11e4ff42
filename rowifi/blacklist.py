"""Guild blacklists matching members by Roblox id, group or condition code."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from rowifi.rolang.command import RoCommand
from rowifi.rolang.expression import RoCommandUser

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


def _parse_i64(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"invalid group id: {text!r}")
    value = int(text)
    if not _I64_MIN <= value <= _I64_MAX:
        raise ValueError(f"group id out of range: {text!r}")
    return value


class BlacklistKind(IntEnum):
    """How a blacklist's id is interpreted; stored as its integer value."""

    NAME = 0
    GROUP = 1
    CUSTOM = 2

    def __str__(self) -> str:
        return self.name.capitalize()


@dataclass
class Blacklist:
    """A blacklist entry; ``id`` is a Roblox id, a group id or condition code."""

    id: str
    reason: str
    kind: BlacklistKind
    group_id: int | None = field(default=None, init=False, repr=False, compare=False)
    command: RoCommand | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            self.kind = BlacklistKind(self.kind)
        except ValueError:
            raise ValueError("Invalid blacklist type") from None
        if self.kind is BlacklistKind.GROUP:
            self.group_id = _parse_i64(self.id)
        elif self.kind is BlacklistKind.CUSTOM:
            self.command = RoCommand(self.id)

    def evaluate(self, user: RoCommandUser) -> bool:
        """Whether the member is caught by this blacklist."""
        if self.kind is BlacklistKind.NAME:
            return str(user.user.roblox_id) == self.id
        if self.kind is BlacklistKind.GROUP:
            return self.group_id in user.ranks
        assert self.command is not None
        return self.command.evaluate(user)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Blacklist:
        return cls(id=str(data["_id"]), reason=str(data["Reason"]), kind=data["Type"])

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.id, "Reason": self.reason, "Type": int(self.kind)}