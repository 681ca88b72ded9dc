import threading
import time
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, Tuple

import redis

from shop.domain.errors import Conflict
from shop.utils.retry import lock_wait_retry, redis_retry
from shop.utils.settings import LOCK_BACKEND, LOCK_TTL_SECONDS, LOCK_WAIT_SECONDS, REDIS_URL
from shop.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL


class LockService:
    """
    Wzajemne wykluczanie per klucz (np. "cart:7", "user:3:cart").
    Podklasy implementuja acquire/release, hold() jest wspolne.
    """

    def __init__(self, ttl: int = LOCK_TTL_SECONDS, wait: float = LOCK_WAIT_SECONDS):
        self.ttl = ttl
        self.wait = wait

    def acquire(self, key: str, owner: str, ttl: int) -> bool:
        raise NotImplementedError

    def release(self, key: str, owner: str) -> bool:
        raise NotImplementedError

    @contextmanager
    def hold(self, key: str) -> Iterator[str]:
        owner = uuid.uuid4().hex

        @lock_wait_retry(self.wait)
        def _acquire() -> bool:
            return bool(self.acquire(key, owner, self.ttl))

        if not _acquire():
            logger.warning(f"Lock {key} not acquired within {self.wait}s")
            raise Conflict(f"Resource {key} is busy, try again")

        try:
            yield owner
        finally:
            self.release(key, owner)


class RedisLockService(LockService):
    """
    -lock na SET NX EX
    -zwalnianie tylko przez wlasciciela (lua)
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None, **kwargs):
        super().__init__(**kwargs)
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )

    @redis_retry()
    def acquire(self, key: str, owner: str, ttl: int) -> bool:
        logger.debug(f"Acquire lock {key} for {owner}")
        #SET cart:1:lock "abc" NX EX 30
        return bool(self.redis.set(
            name=f"{key}:lock",
            value=owner,
            nx=True, #tylko jesli klucz nie istnieje
            ex=ttl, #wygasa sam, jesli proces padnie
        ))

    @redis_retry()
    def release(self, key: str, owner: str) -> bool:
        logger.debug(f"Release lock {key} for {owner}")
        res = self.redis.eval(_RELEASE_LUA, 1, f"{key}:lock", owner)
        return bool(res)


class LocalLockService(LockService):
    """Locki w pamieci procesu, ta sama semantyka co RedisLockService."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._mutex = threading.Lock()
        self._locks: Dict[str, Tuple[str, float]] = {}

    def acquire(self, key: str, owner: str, ttl: int) -> bool:
        now = time.monotonic()
        with self._mutex:
            held = self._locks.get(key)
            if held and held[1] > now:
                return False
            self._locks[key] = (owner, now + ttl)
            return True

    def release(self, key: str, owner: str) -> bool:
        with self._mutex:
            held = self._locks.get(key)
            if not held or held[0] != owner:
                return False
            del self._locks[key]
            return True


def build_lock_service(backend: str | None = None) -> LockService:
    backend = (backend or LOCK_BACKEND).lower()
    if backend == "redis":
        return RedisLockService()
    if backend == "local":
        return LocalLockService()
    raise ValueError(f"Unknown lock backend: {backend}")
