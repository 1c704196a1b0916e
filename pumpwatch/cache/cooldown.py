"""Per-instrument alert cooldown: in-memory and Redis-backed stores."""

from __future__ import annotations

from typing import Protocol

import orjson
import redis.asyncio as aioredis
import structlog

from pumpwatch.config import RedisConfig

logger = structlog.get_logger(__name__)

KEY_COOLDOWN = "cooldown:{instrument_id}"

MS_PER_MINUTE = 60_000


class CooldownStore(Protocol):
    async def is_suppressed(self, instrument_id: str, now: int) -> bool: ...

    async def suppress(self, instrument_id: str, now: int, duration_minutes: float) -> None: ...

    async def close(self) -> None: ...


class InMemoryCooldownStore:
    """
    Process-lifetime suppression table.
    Entries are never removed; they stop matching once `now` passes them.
    """

    def __init__(self) -> None:
        self._until: dict[str, int] = {}  # instrument -> suppressed_until (ms)

    async def is_suppressed(self, instrument_id: str, now: int) -> bool:
        until = self._until.get(instrument_id)
        return until is not None and now < until

    async def suppress(self, instrument_id: str, now: int, duration_minutes: float) -> None:
        until = now + int(duration_minutes * MS_PER_MINUTE)
        self._until[instrument_id] = until
        logger.debug("cooldown_set", instrument=instrument_id, until=until)

    def suppressed_until(self, instrument_id: str) -> int | None:
        return self._until.get(instrument_id)

    async def close(self) -> None:
        """Nothing to release."""


class RedisCooldownStore:
    """Cooldown entries kept in Redis so they survive a process restart.

    Each entry is a JSON record holding the absolute `until` instant; the key TTL
    only keeps Redis tidy, the comparison against `now` decides suppression.
    """

    def __init__(self, redis: aioredis.Redis) -> None:
        self._redis = redis

    @classmethod
    async def connect(cls, config: RedisConfig) -> RedisCooldownStore:
        """Open a dedicated connection and fail fast if Redis is unreachable."""
        redis = aioredis.Redis.from_url(config.url, decode_responses=True)
        await redis.ping()
        logger.info("redis_cooldown_connected", url=f"{config.host}:{config.port}/{config.db}")
        return cls(redis)

    async def close(self) -> None:
        await self._redis.aclose()

    async def is_suppressed(self, instrument_id: str, now: int) -> bool:
        raw = await self._redis.get(KEY_COOLDOWN.format(instrument_id=instrument_id))
        if raw is None:
            return False
        try:
            until = int(orjson.loads(raw)["until"])
        except (orjson.JSONDecodeError, KeyError, TypeError, ValueError):
            logger.warning("cooldown_value_invalid", instrument=instrument_id, raw=raw)
            return False
        return now < until

    async def suppress(self, instrument_id: str, now: int, duration_minutes: float) -> None:
        duration_ms = int(duration_minutes * MS_PER_MINUTE)
        until = now + duration_ms
        key = KEY_COOLDOWN.format(instrument_id=instrument_id)
        entry = {"until": until, "set_at": now, "minutes": duration_minutes}
        await self._redis.set(key, orjson.dumps(entry).decode(), px=max(duration_ms, 1))
        logger.debug("cooldown_set", instrument=instrument_id, until=until)
