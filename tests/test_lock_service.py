import time
from unittest.mock import MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from shop.domain.errors import Conflict
from shop.services.lock_service import (
    LocalLockService,
    RedisLockService,
    build_lock_service,
)


def test_local_lock_is_exclusive_per_key():
    locks = LocalLockService()

    assert locks.acquire("cart:1", "a", ttl=30) is True
    assert locks.acquire("cart:1", "b", ttl=30) is False
    # inny klucz nie jest blokowany
    assert locks.acquire("cart:2", "b", ttl=30) is True


def test_local_lock_release_only_by_owner():
    locks = LocalLockService()
    locks.acquire("cart:1", "a", ttl=30)

    assert locks.release("cart:1", "b") is False
    assert locks.acquire("cart:1", "b", ttl=30) is False
    assert locks.release("cart:1", "a") is True
    assert locks.acquire("cart:1", "b", ttl=30) is True


def test_local_lock_expires_after_ttl():
    locks = LocalLockService()
    locks.acquire("cart:1", "a", ttl=0)

    assert locks.acquire("cart:1", "b", ttl=30) is True


def test_hold_raises_conflict_when_busy():
    locks = LocalLockService(wait=0.05)
    locks.acquire("cart:1", "someone-else", ttl=30)

    started = time.monotonic()
    with pytest.raises(Conflict):
        with locks.hold("cart:1"):
            pass
    assert time.monotonic() - started < 2


def test_hold_releases_on_error():
    locks = LocalLockService(wait=0.05)

    with pytest.raises(RuntimeError):
        with locks.hold("cart:1"):
            raise RuntimeError("boom")

    with locks.hold("cart:1") as owner:
        assert owner


def test_redis_lock_uses_set_nx_with_ttl():
    client = MagicMock()
    client.set.return_value = True
    locks = RedisLockService(client=client)

    assert locks.acquire("cart:7", "owner-1", ttl=30) is True
    client.set.assert_called_once_with(name="cart:7:lock", value="owner-1", nx=True, ex=30)


def test_redis_lock_not_acquired_when_key_exists():
    client = MagicMock()
    client.set.return_value = None
    locks = RedisLockService(client=client)

    assert locks.acquire("cart:7", "owner-1", ttl=30) is False


def test_redis_release_compares_owner_in_lua():
    client = MagicMock()
    client.eval.return_value = 1
    locks = RedisLockService(client=client)

    assert locks.release("cart:7", "owner-1") is True
    args = client.eval.call_args.args
    assert args[1:] == (1, "cart:7:lock", "owner-1")
    assert "redis.call('DEL'" in args[0]


def test_redis_errors_are_retried():
    client = MagicMock()
    client.set.side_effect = [RedisConnectionError("down"), True]
    locks = RedisLockService(client=client)

    assert locks.acquire("cart:7", "owner-1", ttl=30) is True
    assert client.set.call_count == 2


def test_build_lock_service():
    assert isinstance(build_lock_service("local"), LocalLockService)
    with pytest.raises(ValueError):
        build_lock_service("zookeeper")
