# rowifi

The core of a Discord bot that links Discord members to their Roblox
accounts. The package holds:

- the stored documents of a server (`rowifi.guild.guild.RoGuild`,
  `rowifi.guild.settings.GuildSettings`) and their portable backups
  (`rowifi.guild.backup.BackupGuild`, `BackupGuildSettings`);
- the binds that map Roblox state to Discord roles and nicknames: rank,
  group, asset and custom binds (`rowifi.binds`), with nickname templates;
- blacklists (`rowifi.blacklist.Blacklist`) matching members by Roblox id,
  group membership or a condition;
- a small condition language for custom binds and custom blacklists
  (`rowifi.rolang`);
- linked accounts and premium tiers (`rowifi.users`), logged events and
  event types (`rowifi.events`), group member-count snapshots
  (`rowifi.analytics`);
- an async Roblox web API client with a Redis cache
  (`rowifi.roblox_client.RobloxClient`, `rowifi.redis_pool.RedisPool`);
- in-process event and command counters (`rowifi.stats.BotStats`).

Every stored model has `from_dict` and `to_dict` for the documents kept in
the database, using the stored field names (`"_id"`, `"RankBinds"`,
`"DiscordRoles"` and so on).

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Custom bind conditions

Custom binds and custom blacklists are written in a short expression
language. It knows `and`, `or`, `not`/`!`, the comparisons `==`, `!=`, `<`,
`<=`, `>`, `>=`, parentheses, numbers, double-quoted strings, `true`,
`false`, and five functions:

| Function                 | Meaning                                         |
|--------------------------|-------------------------------------------------|
| `HasRank(group rank)`    | the user holds exactly this rank in the group   |
| `IsInGroup(group)`       | the user is a member of the group               |
| `GetRank(group)`         | the user's rank in the group, 0 if not a member |
| `HasRole(role)`          | the member has this Discord role                |
| `WithString("text")`     | the Discord name contains the text              |

Arguments are separated by spaces or commas. Precedence, lowest first:
`==`/`!=`, then `and`/`or`, then `<`, `<=`, `>`, `>=`, then `not`/`!`.

```python
from rowifi.rolang.command import RoCommand
from rowifi.rolang.expression import RoCommandUser
from rowifi.users import RoGuildUser

command = RoCommand("IsInGroup(1000) and GetRank(1000) >= 200")

member = RoCommandUser(
    user=RoGuildUser(guild_id=1, discord_id=2, roblox_id=3),
    roles=[10],
    ranks={1000: 250},
    username="builder",
)
command.evaluate(member)  # True
```

A malformed expression raises `rowifi.rolang.tokens.RolangError` (or its
subclass `ParseError`) when the command is built, so invalid code is
rejected before it is stored. The scanner and parser are also available on
their own as `rowifi.rolang.scanner.scan_tokens` and
`rowifi.rolang.parser.parse`.

## Nickname templates

Binds choose a member's nickname through `rowifi.binds.template.Template`.
The slugs `{roblox-username}`, `{roblox-id}`, `{discord-id}`,
`{discord-name}` and `{display-name}` are filled in; any other text,
including unknown `{...}` parts, is kept as written.

```python
from rowifi.binds.template import Template

Template.has_slug("[Officer] {roblox-username}")   # True
Template.has_slug("no slugs here")                 # False
```

Rank and custom binds also honour the older prefix setting: `N/A` uses the
Roblox name, `disable` keeps the Discord nickname (or the Discord name when
there is none), anything else is put in front of the Roblox name.

## Backups

`RoGuild.to_backup(user_id, name, roles, channels)` turns role and channel
ids into names so a setup can be moved to another server.
`RoGuild.from_backup(backup, guild_id, existing_roles, existing_channels,
create_role)` maps the names back: bind roles reuse existing roles with the
same name ignoring ASCII case, the remaining roles are matched by exact name,
and `create_role(name)` is called for every role that cannot be found and
must return the new role's id. Note that `GuildSettings.to_backup` fills
every role list of the backup settings from the admin roles.

## Roblox API client

```python
import asyncio

from rowifi.redis_pool import RedisPool
from rowifi.roblox_client import RobloxClient
from rowifi.roblox_models import UserId


async def show(user_id: int) -> None:
    pool = RedisPool("redis://localhost:6379/0", 16)
    client = RobloxClient(pool, None)
    try:
        user = await client.get_user(UserId(user_id), False)
        print(user.name)
    finally:
        await client.aclose()
        await pool.close()


asyncio.run(show(1))
```

Users fetched by `get_user` and `get_users` are cached in Redis for six
hours under `roblox:u:<id>`, encoded as CBOR by `rowifi.codec`. A
non-success HTTP status raises `ApiError` carrying the status and body;
`get_group_ranks` returns `None` for a group Roblox answers with 400.
Every client error derives from `rowifi.roblox_errors.RobloxError`.

`RedisPool` lends out at most `max_size` connections through
`async with pool.connection() as conn:` and pings an idle connection before
handing it out again, replacing it when the ping fails.

## Other models

- `PremiumType.from_int(value)` maps stored integers to tiers, falling back
  to Alpha; `has_backup()` says whether the tier may use backups and
  `to_guild_type()` gives the guild tier it grants.
- `BlacklistActionType.parse("kick")` and `AssetType.parse("badge")` read
  user input without regard to case.
- `BotStats(cluster_id)` counts gateway events given by kind name (such as
  `"GuildCreate"`) and `snapshot()` returns every current value keyed in
  exposition form, for example `rowifi_update_user{cluster="0"}`.

## What this package does not do

It is a library only. It does not connect to Discord, has no bot commands
and no command-line program, does not read from or write to a database
(documents go in and out as plain dictionaries), and does not serve its
metrics over HTTP.