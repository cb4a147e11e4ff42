import pytest

from rowifi.binds.custom import BackupCustomBind, CustomBind
from rowifi.binds.template import Template
from rowifi.roblox_models import PartialUser, UserId
from rowifi.rolang.expression import RoCommandUser
from rowifi.rolang.tokens import RolangError
from rowifi.users import RoGuildUser


@pytest.fixture
def roblox_user():
    return PartialUser(id=UserId(55), name="alice", display_name="Alice")


@pytest.fixture
def guild_user():
    return RoGuildUser(guild_id=1, discord_id=777, roblox_id=55)


def _doc(**overrides):
    data = {
        "_id": 3,
        "DiscordRoles": [10, 20],
        "Code": "IsInGroup(1000)",
        "Priority": 2,
    }
    data.update(overrides)
    return data


def test_from_dict_compiles_code(guild_user):
    bind = CustomBind.from_dict(_doc())
    assert bind.id == 3
    assert bind.discord_roles == [10, 20]
    assert bind.priority == 2
    assert bind.prefix is None
    assert bind.template is None
    member = RoCommandUser(user=guild_user, roles=[], ranks={1000: 5}, username="alice")
    assert bind.command.evaluate(member) is True
    outsider = RoCommandUser(user=guild_user, roles=[], ranks={}, username="alice")
    assert bind.command.evaluate(outsider) is False


def test_from_dict_ignores_unknown_keys():
    bind = CustomBind.from_dict(_doc(Extra="ignored"))
    assert bind.code == "IsInGroup(1000)"


@pytest.mark.parametrize("missing", ["_id", "DiscordRoles", "Code", "Priority"])
def test_from_dict_requires_fields(missing):
    data = _doc()
    del data[missing]
    with pytest.raises(KeyError):
        CustomBind.from_dict(data)


def test_invalid_code_raises():
    with pytest.raises(RolangError):
        CustomBind.from_dict(_doc(Code="HasRank(1)"))


def test_to_dict_skips_command_and_empty_optionals():
    data = CustomBind.from_dict(_doc()).to_dict()
    assert data == _doc()


def test_round_trip_with_optionals():
    bind = CustomBind(
        id=4,
        discord_roles=[1],
        code="HasRole(1)",
        priority=9,
        prefix="[HR]",
        template=Template("{roblox-username}"),
    )
    data = bind.to_dict()
    assert data["Prefix"] == "[HR]"
    assert data["Template"] == "{roblox-username}"
    assert CustomBind.from_dict(data) == bind


def test_to_backup_skips_unknown_roles():
    bind = CustomBind.from_dict(_doc(Prefix="N/A"))
    backup = bind.to_backup({10: "Member", 99: "Other"})
    assert backup.discord_roles == ["Member"]
    assert backup.code == bind.code
    assert backup.prefix == "N/A"
    assert backup.priority == bind.priority


def test_from_backup_maps_names():
    backup = BackupCustomBind(id=3, discord_roles=["A", "B"], code="true", priority=1)
    bind = CustomBind.from_backup(backup, {"A": 10, "B": 20})
    assert bind.discord_roles == [10, 20]
    assert bind.code == "true"
    assert bind.to_backup({10: "A", 20: "B"}) == backup


def test_from_backup_unknown_name_raises():
    backup = BackupCustomBind(id=3, discord_roles=["Missing"], code="true", priority=1)
    with pytest.raises(KeyError):
        CustomBind.from_backup(backup, {})


def test_backup_bind_round_trip():
    backup = BackupCustomBind(
        id=5, discord_roles=["A"], code="true", priority=0, template=Template("{discord-name}")
    )
    assert BackupCustomBind.from_dict(backup.to_dict()) == backup
    assert "Prefix" not in backup.to_dict()


def test_nickname_uses_template(roblox_user, guild_user):
    bind = CustomBind(
        id=1, discord_roles=[], code="true", priority=0,
        prefix="[HR]", template=Template("{discord-id}"),
    )
    assert bind.nickname(roblox_user, guild_user, "disc", None) == str(guild_user.discord_id)


def test_nickname_prefix_variants(roblox_user, guild_user):
    def make(prefix):
        return CustomBind(id=1, discord_roles=[], code="true", priority=0, prefix=prefix)

    assert make(None).nickname(roblox_user, guild_user, "disc", None) == "alice"
    assert make("n/a").nickname(roblox_user, guild_user, "disc", None) == "alice"
    assert make("DISABLE").nickname(roblox_user, guild_user, "disc", None) == "disc"
    assert make("disable").nickname(roblox_user, guild_user, "disc", "nick") == "nick"
    assert make("[HR]").nickname(roblox_user, guild_user, "disc", None) == "[HR] alice"