import pytest

from rowifi.stats import EVENT_NAMES, BotStats, Counter, LabeledCounter


class MemberAdd:
    pass


class TypingStart:
    pass


def test_all_events_start_at_zero():
    stats = BotStats(3)
    snap = stats.snapshot()
    events = {k: v for k, v in snap.items() if k.startswith("rowifi_discord_events")}
    assert len(events) == len(EVENT_NAMES)
    assert set(events.values()) == {0}
    assert snap['rowifi_discord_events{cluster="3",events="BanAdd"}'] == 0


def test_update_by_name_counts_event():
    stats = BotStats(0)
    stats.update("BanAdd")
    stats.update("BanAdd")
    assert stats.event_counts.labels("BanAdd").value == 2
    assert stats.snapshot()['rowifi_discord_events{cluster="0",events="BanAdd"}'] == 2


def test_update_by_event_object():
    stats = BotStats(0)
    stats.update(MemberAdd())
    assert stats.event_counts.labels("MemberAdd").value == 1


def test_unknown_events_are_ignored():
    stats = BotStats(0)
    before = stats.snapshot()
    stats.update(TypingStart())
    stats.update("PresenceUpdate")
    assert stats.snapshot() == before


def test_command_counts_and_update_user():
    stats = BotStats(0)
    stats.command_counts.labels("verify").inc()
    stats.update_user.inc(2)
    snap = stats.snapshot()
    assert snap['rowifi_commands{cluster="0",name="verify"}'] == 1
    assert snap['rowifi_update_user{cluster="0"}'] == 2


def test_resource_gauges():
    stats = BotStats(0)
    stats.guilds.set(5)
    stats.users.inc(4)
    stats.users.dec()
    snap = stats.snapshot()
    assert snap['rowifi_resource_counts{cluster="0",count="Guilds"}'] == 5
    assert snap['rowifi_resource_counts{cluster="0",count="Users"}'] == 3


def test_counter_cannot_decrease():
    counter = Counter("c")
    with pytest.raises(ValueError):
        counter.inc(-1)
    assert counter.value == 0


def test_labels_returns_same_child():
    family = LabeledCounter("f", "help", "kind")
    child = family.labels("x")
    child.inc()
    assert family.labels("x") is child
    assert family.labels("x").value == 1
    assert child.labels == {"kind": "x"}


def test_negative_cluster_id_rejected():
    with pytest.raises(ValueError):
        BotStats(-1)