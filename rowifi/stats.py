"""In-process metrics counting gateway events, commands and resources."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

NAMESPACE = "rowifi"

EVENT_NAMES = (
    "BanAdd",
    "BanRemove",
    "ChannelCreate",
    "ChannelDelete",
    "ChannelUpdate",
    "GatewayReconnect",
    "GuildCreate",
    "GuildDelete",
    "GuildUpdate",
    "MemberAdd",
    "MemberRemove",
    "MemberUpdate",
    "MemberChunk",
    "MessageCreate",
    "MessageDelete",
    "MessageDeleteBulk",
    "MessageUpdate",
    "ReactionAdd",
    "ReactionRemove",
    "ReactionRemoveAll",
    "RoleCreate",
    "RoleDelete",
    "RoleUpdate",
    "UnavailableGuild",
    "UserUpdate",
)
_EVENT_SET = frozenset(EVENT_NAMES)


class Counter:
    """A monotonically increasing integer metric."""

    def __init__(self, name: str, help: str = "", labels: dict[str, str] | None = None) -> None:
        self.name = name
        self.help = help
        self.labels = dict(labels or {})
        self.value = 0

    def inc(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("counters can only increase")
        self.value += amount

    def _samples(self) -> Iterator[tuple[dict[str, str], int]]:
        yield self.labels, self.value


class _Gauge(Counter):
    """An integer metric that can go up and down."""

    def inc(self, amount: int = 1) -> None:
        self.value += amount

    def dec(self, amount: int = 1) -> None:
        self.value -= amount

    def set(self, value: int) -> None:
        self.value = value


class LabeledCounter:
    """A family of metrics told apart by the value of one label."""

    def __init__(
        self, name: str, help: str, label_name: str, metric_cls: type[Counter] = Counter
    ) -> None:
        self.name = name
        self.help = help
        self.label_name = label_name
        self._metric_cls = metric_cls
        self._children: dict[str, Counter] = {}

    def labels(self, value: str) -> Any:
        """The metric for one label value, created on first use."""
        child = self._children.get(value)
        if child is None:
            child = self._metric_cls(self.name, self.help, {self.label_name: value})
            self._children[value] = child
        return child

    def _samples(self) -> Iterator[tuple[dict[str, str], int]]:
        for child in self._children.values():
            yield from child._samples()


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


class BotStats:
    """All metrics of one bot cluster, labelled with the cluster id."""

    def __init__(self, cluster_id: int) -> None:
        if cluster_id < 0:
            raise ValueError(f"cluster_id must not be negative, got {cluster_id}")
        self.const_labels = {"cluster": str(cluster_id)}
        self.event_counts = LabeledCounter("discord_events", "Events given by discord", "events")
        for name in EVENT_NAMES:
            self.event_counts.labels(name)
        self.resource_counts = LabeledCounter(
            "resource_counts", "Counts of all resource", "count", _Gauge
        )
        self.guilds: _Gauge = self.resource_counts.labels("Guilds")
        self.users: _Gauge = self.resource_counts.labels("Users")
        self.command_counts = LabeledCounter("commands", "Executed commands", "name")
        self.update_user = Counter("update_user", "Counts of any user updated")
        self._metrics: list[Counter | LabeledCounter] = [
            self.event_counts,
            self.resource_counts,
            self.command_counts,
            self.update_user,
        ]

    def update(self, event: Any) -> None:
        """Count a gateway event given by kind name or by an object of that class name."""
        name = event if isinstance(event, str) else type(event).__name__
        if name in _EVENT_SET:
            self.event_counts.labels(name).inc()

    def snapshot(self) -> dict[str, int]:
        """Every sample keyed in exposition form, e.g. ``rowifi_commands{cluster="0",name="x"}``."""
        result: dict[str, int] = {}
        for metric in self._metrics:
            for labels, value in metric._samples():
                pairs = {**self.const_labels, **labels}
                rendered = ",".join(f'{k}="{_escape(v)}"' for k, v in pairs.items())
                result[f"{NAMESPACE}_{metric.name}{{{rendered}}}"] = value
        return result