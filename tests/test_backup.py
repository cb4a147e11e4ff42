import pytest
from bson import ObjectId

from rowifi.binds.asset import AssetType, BackupAssetBind
from rowifi.binds.custom import BackupCustomBind
from rowifi.binds.group import BackupGroupBind
from rowifi.binds.rank import BackupRankBind
from rowifi.binds.template import Template
from rowifi.blacklist import Blacklist, BlacklistKind
from rowifi.events import EventType
from rowifi.guild.backup import BackupGuild, BackupGuildSettings
from rowifi.guild.types import BlacklistActionType, GuildType


def test_settings_defaults_when_optional_keys_missing():
    settings = BackupGuildSettings.from_dict({"AutoDetection": True, "Type": 1})
    assert settings.auto_detection is True
    assert settings.guild_type is GuildType.BETA
    assert settings.blacklist_action is BlacklistActionType.NONE
    assert settings.update_on_join is False
    assert settings.admin_roles == []
    assert settings.log_channel is None


def test_settings_require_type():
    with pytest.raises(KeyError):
        BackupGuildSettings.from_dict({"AutoDetection": True})


def test_settings_round_trip():
    settings = BackupGuildSettings(
        auto_detection=True,
        guild_type=GuildType.ALPHA,
        blacklist_action=BlacklistActionType.BAN,
        update_on_join=True,
        admin_roles=["Admin"],
        trainer_roles=["Trainer"],
        bypass_roles=["Bypass"],
        nickname_bypass_roles=["Nick"],
        log_channel="logs",
    )
    data = settings.to_dict()
    assert data["Type"] == int(GuildType.ALPHA)
    assert data["BlacklistAction"] == int(BlacklistActionType.BAN)
    assert BackupGuildSettings.from_dict(data) == settings


def _full_backup():
    return BackupGuild(
        id=ObjectId(),
        user_id=42,
        name="main",
        command_prefix="?",
        settings=BackupGuildSettings(auto_detection=True, guild_type=GuildType.BETA),
        verification_role="Unverified",
        verified_role="Verified",
        rankbinds=[
            BackupRankBind(
                group_id=1, discord_roles=["A"], rank_id=2, rbx_rank_id=3, priority=1
            )
        ],
        groupbinds=[BackupGroupBind(group_id=1, discord_roles=["B"])],
        custombinds=[BackupCustomBind(id=1, discord_roles=["C"], code="true", priority=0)],
        assetbinds=[
            BackupAssetBind(
                id=9, asset_type=AssetType.BADGE, discord_roles=["D"],
                template=Template("{roblox-username}"),
            )
        ],
        blacklists=[Blacklist(id="123", reason="spam", kind=BlacklistKind.NAME)],
        registered_groups=[1, 2],
        event_types=[EventType(id=1, name="Training", xp=5)],
    )


def test_guild_round_trip():
    backup = _full_backup()
    assert BackupGuild.from_dict(backup.to_dict()) == backup


def test_guild_uses_backup_key_names():
    data = _full_backup().to_dict()
    for key in ("Rankbinds", "Groupbinds", "Custombinds", "Assetbinds"):
        assert key in data
    assert data["Custombinds"][0]["Code"] == "true"


def test_guild_optional_collections_default_empty():
    data = {
        "_id": ObjectId(),
        "UserId": 1,
        "Name": "n",
        "Settings": {"AutoDetection": False, "Type": 2},
        "Rankbinds": [],
        "Groupbinds": [],
    }
    backup = BackupGuild.from_dict(data)
    assert backup.custombinds == []
    assert backup.assetbinds == []
    assert backup.blacklists == []
    assert backup.event_types == []
    assert backup.command_prefix is None
    assert backup.verified_role is None
    out = backup.to_dict()
    assert out["Prefix"] is None
    assert out["VerificationRole"] is None


@pytest.mark.parametrize("missing", ["Settings", "Rankbinds", "Groupbinds", "UserId"])
def test_guild_required_keys(missing):
    data = _full_backup().to_dict()
    del data[missing]
    with pytest.raises(KeyError):
        BackupGuild.from_dict(data)


def test_default_backup_has_normal_settings():
    backup = BackupGuild()
    assert backup.settings.guild_type is GuildType.NORMAL
    assert backup.rankbinds == []