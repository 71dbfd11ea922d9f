# agent_dialogs/state/redis_storage.py
# AI-Mind © 2025 by Martin Bukowski is licensed under CC BY-NC-SA 4.0
"""Redis persistence for agent state."""

import json
import logging

import redis.asyncio as redis

from ..errors import Errors, StorageError, generate_exception
from .storage import ETAG_ANY, ETAG_KEY, Storage, StoreItems, json_default, require_keys

logger = logging.getLogger(__name__)

# Stored items start with their eTag so the script can read it without a JSON parser.
# Returns the new eTag, or 0 when the expected eTag does not match the stored one.
WRITE_SCRIPT = """
    local item_key = KEYS[1]
    local etag_key = KEYS[2]
    local expected = ARGV[1]
    local body = ARGV[2]

    local current = redis.call('GET', item_key)
    if current and expected ~= '' then
        local stored = string.match(current, '^{"eTag":"([^"]*)"')
        if stored ~= expected then
            return 0
        end
    end

    local etag = redis.call('INCR', etag_key)
    local item = '{"eTag":"' .. tostring(etag) .. '"'
    if body == '{}' then
        item = item .. '}'
    else
        item = item .. ',' .. string.sub(body, 2)
    end
    redis.call('SET', item_key, item)

    return etag
"""


class RedisStorage(Storage):
    """Redis-backed storage for agent state."""

    def __init__(self, redis_client: redis.Redis, key_prefix: str = "agents"):
        """Initialize storage with a Redis client."""
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _item_key(self, key: str) -> str:
        """Generate Redis key for a stored item."""
        return f"{self.key_prefix}:state:{key}"

    def _etag_key(self) -> str:
        """Generate Redis key for the eTag counter."""
        return f"{self.key_prefix}:etag"

    async def read(self, keys: list[str]) -> StoreItems:
        """Load items from Redis."""
        require_keys(keys, "reading")

        values = await self.redis.mget([self._item_key(key) for key in keys])
        data: StoreItems = {}
        for key, value in zip(keys, values):
            if value is None:
                continue
            # Decode bytes to string if necessary
            if isinstance(value, bytes):
                value = value.decode('utf-8')
            data[key] = json.loads(value)
        logger.debug(f"Read {len(data)} of {len(keys)} keys")
        return data

    async def write(self, changes: StoreItems) -> None:
        """Persist items to Redis, enforcing eTags.

        The eTag check, the counter bump and the SET run in one Lua script,
        so concurrent writers holding the same eTag cannot both succeed.
        """
        require_keys(changes, "writing")

        for key, new_item in changes.items():
            expected = new_item.get(ETAG_KEY) or ""
            if expected == ETAG_ANY:
                expected = ""
            body = {name: value for name, value in new_item.items() if name != ETAG_KEY}
            item_json = json.dumps(body, default=json_default)

            etag = await self.redis.eval(
                WRITE_SCRIPT, 2, self._item_key(key), self._etag_key(), expected, item_json
            )
            if not etag:
                raise generate_exception(StorageError, Errors.ETAG_CONFLICT, params={"key": key})
            logger.debug(f"Wrote key {key} with eTag {etag}")

    async def delete(self, keys: list[str]) -> None:
        """Delete items from Redis."""
        if keys:
            await self.redis.delete(*[self._item_key(key) for key in keys])
