from datetime import datetime, timezone

import pytest

from rowifi.analytics import AnalyticsGroup, AnalyticsRole


def _group():
    return AnalyticsGroup(
        group_id=12,
        member_count=300,
        timestamp=datetime(2021, 6, 1, 12, 0, tzinfo=timezone.utc),
        roles=[AnalyticsRole(id=1, rank=255, member_count=1)],
    )


def test_round_trip():
    group = _group()
    assert AnalyticsGroup.from_dict(group.to_dict()) == group


def test_keys_are_camel_case():
    data = _group().to_dict()
    assert set(data) == {"groupId", "roles", "memberCount", "timestamp"}
    assert set(data["roles"][0]) == {"id", "rank", "memberCount"}


def test_millisecond_timestamp_is_converted():
    group = AnalyticsGroup.from_dict(
        {"groupId": 1, "roles": [], "memberCount": 2, "timestamp": 0}
    )
    assert group.timestamp == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_naive_timestamp_is_treated_as_utc():
    naive = datetime(2021, 6, 1, 12, 0)
    group = AnalyticsGroup.from_dict(
        {"groupId": 1, "roles": [], "memberCount": 2, "timestamp": naive}
    )
    assert group.timestamp.tzinfo == timezone.utc
    assert group.timestamp.replace(tzinfo=None) == naive


def test_invalid_timestamp_type():
    with pytest.raises(TypeError):
        AnalyticsGroup.from_dict(
            {"groupId": 1, "roles": [], "memberCount": 2, "timestamp": "today"}
        )


def test_role_requires_all_fields():
    with pytest.raises(KeyError):
        AnalyticsRole.from_dict({"id": 1, "rank": 2})


def test_role_round_trip():
    role = AnalyticsRole(id=4, rank=10, member_count=55)
    assert AnalyticsRole.from_dict(role.to_dict()) == role