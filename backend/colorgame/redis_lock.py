import logging
import time
import uuid

import redis
from django.conf import settings

from .exceptions import EngineLockLost

logger = logging.getLogger(__name__)


class RedisEngineLock:
    """
    Lease on a Redis key that only the running round engine holds.

    The key stores a per-process token and expires after `ttl_seconds`
    unless renewed, so a crashed engine frees the slot on its own.
    """

    def __init__(self, key: str, ttl_seconds: int, client=None):
        self.key = key
        self.ttl_ms = int(ttl_seconds * 1000)
        self.token = uuid.uuid4().hex
        self.client = client or redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)

    def is_owner(self) -> bool:
        return self.client.get(self.key) == self.token

    def acquire(self) -> bool:
        return bool(self.client.set(self.key, self.token, nx=True, px=self.ttl_ms))

    def renew(self) -> bool:
        if not self.is_owner():
            return False
        return bool(self.client.set(self.key, self.token, xx=True, px=self.ttl_ms))

    def release(self) -> bool:
        with self.client.pipeline() as pipe:
            try:
                pipe.watch(self.key)
                if pipe.get(self.key) != self.token:
                    return False
                pipe.multi()
                pipe.delete(self.key)
                pipe.execute()
                return True
            except redis.WatchError:
                logger.warning("Engine lock %s changed hands during release", self.key)
                return False


class LockHeartbeat:
    """Renews the lease every `every_seconds`; called from the engine's idle loop."""

    def __init__(self, lock: RedisEngineLock, every_seconds: float = 10.0, clock=time.monotonic):
        self.lock = lock
        self.every = every_seconds
        self._clock = clock
        self._due = clock() + every_seconds

    def tick(self):
        now = self._clock()
        if now < self._due:
            return
        if not self.lock.renew():
            raise EngineLockLost(f"Lost engine lock {self.lock.key}")
        self._due = now + self.every
