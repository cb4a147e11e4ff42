import json
from contextlib import asynccontextmanager

import httpx
import pytest
import redis
import respx

from rowifi import codec
from rowifi.roblox_client import RobloxClient
from rowifi.roblox_errors import ApiError, CacheError, ParsingError, RequestError
from rowifi.roblox_models import PartialUser


class FakePipeline:
    def __init__(self, conn, transaction):
        self.conn = conn
        self.transaction = transaction
        self.ops = []

    def set(self, key, value, ex=None):
        self.ops.append((key, value, ex))
        return self

    async def execute(self):
        for key, value, ex in self.ops:
            await self.conn.set(key, value, ex=ex)
        self.conn.pipelines.append(self)
        return [True] * len(self.ops)


class FakeConn:
    def __init__(self):
        self.store = {}
        self.ttl = {}
        self.pipelines = []
        self.fail = False

    async def get(self, key):
        if self.fail:
            raise redis.ConnectionError("down")
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self.store[key] = value
        self.ttl[key] = ex
        return True

    def pipeline(self, transaction=True):
        return FakePipeline(self, transaction)


class FakePool:
    def __init__(self):
        self.conn = FakeConn()

    @asynccontextmanager
    async def connection(self):
        yield self.conn


@pytest.fixture
def router():
    with respx.mock(assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def client(pool):
    return RobloxClient(pool, httpx.AsyncClient())


@pytest.mark.asyncio
async def test_get_user_roles(router, client):
    router.get("https://groups.roblox.com/v2/users/5/groups/roles").mock(
        return_value=httpx.Response(
            200,
            json={
                "data": [
                    {
                        "group": {"id": 1, "name": "G", "memberCount": 10},
                        "role": {"id": 2, "name": "R", "rank": 3, "memberCount": 4},
                    }
                ]
            },
        )
    )
    roles = await client.get_user_roles(5)
    assert len(roles) == 1
    assert roles[0].group.id == 1
    assert roles[0].role.rank == 3


@pytest.mark.asyncio
async def test_get_user_from_username_posts_json(router, client):
    route = router.post("https://users.roblox.com/v1/usernames/users").mock(
        return_value=httpx.Response(200, json={"data": [{"id": 9, "name": "alice"}]})
    )
    user = await client.get_user_from_username("alice")
    assert user == PartialUser(id=9, name="alice")
    request = route.calls.last.request
    assert json.loads(request.content) == {"usernames": ["alice"]}
    assert request.headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_get_user_from_username_missing(router, client):
    router.post("https://users.roblox.com/v1/usernames/users").mock(
        return_value=httpx.Response(200, json={"data": []})
    )
    assert await client.get_user_from_username("nobody") is None


@pytest.mark.asyncio
async def test_get_user_caches_result(router, client, pool):
    route = router.get("https://users.roblox.com/v1/users/7").mock(
        return_value=httpx.Response(200, json={"id": 7, "name": "bob", "displayName": "Bob"})
    )
    first = await client.get_user(7)
    second = await client.get_user(7)
    assert first == second == PartialUser(id=7, name="bob", display_name="Bob")
    assert route.call_count == 1
    assert pool.conn.ttl["roblox:u:7"] == 6 * 3600
    assert codec.decode(PartialUser, pool.conn.store["roblox:u:7"]) == first


@pytest.mark.asyncio
async def test_get_user_bypass_cache_refetches(router, client, pool):
    route = router.get("https://users.roblox.com/v1/users/7").mock(
        return_value=httpx.Response(200, json={"id": 7, "name": "bob"})
    )
    pool.conn.store["roblox:u:7"] = codec.encode(PartialUser(id=7, name="old"))
    user = await client.get_user(7, bypass_cache=True)
    assert user.name == "bob"
    assert route.call_count == 1
    assert codec.decode(PartialUser, pool.conn.store["roblox:u:7"]).name == "bob"


@pytest.mark.asyncio
async def test_get_user_served_from_cache(router, client, pool):
    cached = PartialUser(id=3, name="carol", display_name=None)
    pool.conn.store["roblox:u:3"] = codec.encode(cached)
    assert await client.get_user(3) == cached


@pytest.mark.asyncio
async def test_get_user_corrupt_cache(router, client, pool):
    pool.conn.store["roblox:u:3"] = b"\xff\xff"
    with pytest.raises(CacheError):
        await client.get_user(3)


@pytest.mark.asyncio
async def test_get_user_redis_failure(router, client, pool):
    pool.conn.fail = True
    with pytest.raises(CacheError):
        await client.get_user(3)


@pytest.mark.asyncio
async def test_get_users_caches_all(router, client, pool):
    route = router.post("https://users.roblox.com/v1/users").mock(
        return_value=httpx.Response(
            200, json={"data": [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]}
        )
    )
    users = await client.get_users([1, 2])
    assert [u.name for u in users] == ["a", "b"]
    assert json.loads(route.calls.last.request.content) == {"userIds": [1, 2]}
    assert set(pool.conn.store) == {"roblox:u:1", "roblox:u:2"}
    assert pool.conn.pipelines[0].transaction is True


@pytest.mark.asyncio
async def test_get_group_ranks(router, client):
    router.get("https://groups.roblox.com/v1/groups/11/roles").mock(
        return_value=httpx.Response(
            200, json={"groupId": 11, "roles": [{"id": 5, "name": "Guest", "rank": 0}]}
        )
    )
    group = await client.get_group_ranks(11)
    assert group.id == 11
    assert [r.name for r in group.roles] == ["Guest"]


@pytest.mark.asyncio
async def test_get_group_ranks_bad_request_is_none(router, client):
    router.get("https://groups.roblox.com/v1/groups/11/roles").mock(
        return_value=httpx.Response(400, content=b"nope")
    )
    assert await client.get_group_ranks(11) is None


@pytest.mark.asyncio
async def test_get_group_ranks_server_error(router, client):
    router.get("https://groups.roblox.com/v1/groups/11/roles").mock(
        return_value=httpx.Response(500, content=b"oops")
    )
    with pytest.raises(ApiError) as info:
        await client.get_group_ranks(11)
    assert info.value.status == 500
    assert info.value.body == b"oops"


@pytest.mark.asyncio
async def test_get_asset(router, client):
    router.get("https://inventory.roblox.com/v1/users/1/items/Badge/99").mock(
        return_value=httpx.Response(
            200, json={"data": [{"id": 99, "name": "Shiny", "type": "Badge"}]}
        )
    )
    asset = await client.get_asset(1, 99, "Badge")
    assert asset.id == 99
    assert asset.asset_type == "Badge"


@pytest.mark.asyncio
async def test_get_asset_not_owned(router, client):
    router.get("https://inventory.roblox.com/v1/users/1/items/Badge/99").mock(
        return_value=httpx.Response(200, json={"data": []})
    )
    assert await client.get_asset(1, 99, "Badge") is None


@pytest.mark.asyncio
async def test_invalid_json_is_parsing_error(router, client):
    router.get("https://users.roblox.com/v1/users/4").mock(
        return_value=httpx.Response(200, content=b"not json")
    )
    with pytest.raises(ParsingError):
        await client.request("https://users.roblox.com/v1/users/4")


@pytest.mark.asyncio
async def test_wrong_shape_is_parsing_error(router, client):
    router.get("https://groups.roblox.com/v2/users/5/groups/roles").mock(
        return_value=httpx.Response(200, json={"nothing": []})
    )
    with pytest.raises(ParsingError):
        await client.get_user_roles(5)


@pytest.mark.asyncio
async def test_network_failure_is_request_error(router, client):
    router.get("https://users.roblox.com/v1/users/4").mock(
        side_effect=httpx.ConnectError("refused")
    )
    with pytest.raises(RequestError):
        await client.request("https://users.roblox.com/v1/users/4")