"""Client for the Roblox web APIs with a Redis cache for users."""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable, Iterable
from typing import Any, TypeVar

import httpx
from redis.exceptions import RedisError

from rowifi import codec
from rowifi.codec import CodecError
from rowifi.roblox_errors import ApiError, CacheError, ParsingError, RequestError
from rowifi.roblox_models import (
    Asset,
    Group,
    GroupUserRole,
    PartialUser,
    parse_data_list,
)

T = TypeVar("T")

USER_CACHE_TTL = 6 * 3600


def _user_key(user_id: int) -> str:
    return f"roblox:u:{int(user_id)}"


def _parse(build: Callable[[Any], T], payload: Any) -> T:
    try:
        return build(payload)
    except (KeyError, TypeError, ValueError) as exc:
        raise ParsingError(exc) from exc


async def _cached(call: Awaitable[T]) -> T:
    try:
        return await call
    except RedisError as exc:
        raise CacheError(exc) from exc


class RobloxClient:
    """Makes Roblox API requests; users fetched by id are cached in Redis."""

    def __init__(self, redis_pool: Any, http: httpx.AsyncClient | None = None) -> None:
        self._redis_pool = redis_pool
        self._owns_http = http is None
        self._http = http if http is not None else httpx.AsyncClient()

    async def request(self, url: str, method: str = "GET", body: bytes | None = None) -> Any:
        """Send a request and return the decoded JSON response."""
        headers = {"Content-Type": "application/json"} if body is not None else None
        try:
            response = await self._http.request(method, url, content=body, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise RequestError(exc) from exc
        content = response.content
        if not response.is_success:
            raise ApiError(response.status_code, content)
        try:
            return json.loads(content)
        except ValueError as exc:
            raise ParsingError(exc) from exc

    async def _post_json(self, url: str, payload: Any) -> Any:
        return await self.request(url, "POST", json.dumps(payload).encode())

    async def get_user_roles(self, user_id: int) -> list[GroupUserRole]:
        """The groups a user is in, with the user's role in each."""
        url = f"https://groups.roblox.com/v2/users/{int(user_id)}/groups/roles"
        payload = await self.request(url)
        return _parse(lambda p: parse_data_list(p, GroupUserRole), payload)

    async def get_user_from_username(self, username: str) -> PartialUser | None:
        """Look up a user by username; ``None`` if there is none."""
        url = "https://users.roblox.com/v1/usernames/users"
        payload = await self._post_json(url, {"usernames": [username]})
        users = _parse(lambda p: parse_data_list(p, PartialUser), payload)
        return users[0] if users else None

    async def get_user(self, user_id: int, bypass_cache: bool = False) -> PartialUser:
        """A user by id, from the cache unless ``bypass_cache``; refreshes the cache."""
        key = _user_key(user_id)
        async with self._redis_pool.connection() as conn:
            if not bypass_cache:
                cached = await _cached(conn.get(key))
                if cached is not None:
                    try:
                        return codec.decode(PartialUser, cached)
                    except CodecError as exc:
                        raise CacheError(exc) from exc
            url = f"https://users.roblox.com/v1/users/{int(user_id)}"
            user = _parse(PartialUser.from_dict, await self.request(url))
            await _cached(conn.set(key, codec.encode(user), ex=USER_CACHE_TTL))
            return user

    async def get_users(self, user_ids: Iterable[int]) -> list[PartialUser]:
        """Several users by id; every user returned is written to the cache."""
        ids = [int(user_id) for user_id in user_ids]
        async with self._redis_pool.connection() as conn:
            payload = await self._post_json("https://users.roblox.com/v1/users", {"userIds": ids})
            users = _parse(lambda p: parse_data_list(p, PartialUser), payload)
            pipe = conn.pipeline(transaction=True)
            for user in users:
                pipe.set(_user_key(user.id), codec.encode(user), ex=USER_CACHE_TTL)
            await _cached(pipe.execute())
            return users

    async def get_group_ranks(self, group_id: int) -> Group | None:
        """All ranks of a group; ``None`` when the API rejects the group id."""
        url = f"https://groups.roblox.com/v1/groups/{int(group_id)}/roles"
        try:
            payload = await self.request(url)
        except ApiError as exc:
            if exc.status == 400:
                return None
            raise
        return _parse(Group.from_dict, payload)

    async def get_asset(self, user_id: int, asset_id: int, asset_type: str) -> Asset | None:
        """The item from a user's inventory, or ``None`` if they do not own it."""
        url = (
            f"https://inventory.roblox.com/v1/users/{int(user_id)}"
            f"/items/{asset_type}/{int(asset_id)}"
        )
        payload = await self.request(url)
        assets = _parse(lambda p: parse_data_list(p, Asset), payload)
        return assets[0] if assets else None

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> RobloxClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()