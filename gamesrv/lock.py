"""Distributed locks on Redis: a blocking mutex, optimistic WATCH loops, a try-lock."""

from __future__ import annotations

import base64
import logging
import os
import random
import time
from typing import Any, Callable

import redis
from redis.exceptions import WatchError

from gamesrv import snowflake

log = logging.getLogger(__name__)

MAX_RETRIES = 100
_TX_TIMEOUT = 8.0

_UNLOCK_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
else
    return 0
end"""


class LockError(Exception):
    """The lock could not be acquired."""


class Locker:
    """A mutex held as a Redis key with an expiry, acquired with retries."""

    def __init__(
        self,
        client: Any,
        key: str,
        *,
        expiry: float = 8.0,
        tries: int = 32,
        retry_delay: tuple[float, float] = (0.05, 0.25),
    ) -> None:
        self.client = client
        self.key = key
        self.expiry = expiry
        self.tries = tries
        self.retry_delay = retry_delay
        self._value = base64.b64encode(os.urandom(16)).decode()

    def lock(self) -> None:
        """Acquire the lock, retrying; raise LockError if every try fails."""
        for attempt in range(self.tries):
            if attempt:
                time.sleep(random.uniform(*self.retry_delay))
            if self.client.set(self.key, self._value, nx=True, px=int(self.expiry * 1000)):
                return
        raise LockError(f"failed to acquire lock {self.key}")

    def unlock(self) -> None:
        """Release the lock if still held; failures are logged, not raised."""
        try:
            released = self.client.eval(_UNLOCK_SCRIPT, 1, self.key, self._value)
        except redis.RedisError as exc:
            log.error("unlock failed key=%s: %s", self.key, exc)
            return
        if not released:
            log.error("unlock failed key=%s: lock already expired", self.key)


def locked_do(client: Any, key: str, fn: Callable[[], Any]) -> Any:
    """Run ``fn`` while holding the distributed lock ``lock_<key>``."""
    locker = Locker(client, "lock_" + key)
    locker.lock()
    try:
        return fn()
    finally:
        locker.unlock()


class _SavePipe:
    """Records commands to be run later inside the transaction."""

    def __init__(self) -> None:
        self._calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def __getattr__(self, name: str) -> Callable[..., _SavePipe]:
        if name.startswith("_"):
            raise AttributeError(name)

        def record(*args: Any, **kwargs: Any) -> _SavePipe:
            self._calls.append((name, args, kwargs))
            return self

        return record


def _replay(save: _SavePipe, pipe: Any) -> None:
    for name, args, kwargs in save._calls:
        getattr(pipe, name)(*args, **kwargs)


def _watch_loop(client: Any, key: str, attempt: Callable[[Any], Any], pause: float) -> Any:
    deadline = time.monotonic() + _TX_TIMEOUT
    for _ in range(MAX_RETRIES):
        if time.monotonic() > deadline:
            raise TimeoutError(f"optimistic lock on {key} timed out")
        with client.pipeline() as tx:
            try:
                tx.watch(key)
                return attempt(tx)
            except WatchError as exc:
                log.debug("lock tx failed key=%s: %s", key, exc)
                time.sleep(pause)
    return None


def do(client: Any, key: str, fn: Callable[[Any], Any]) -> Any:
    """Run ``fn(tx)`` with ``key`` watched, retrying when the key changes.

    ``tx`` reads immediately; ``fn`` saves with ``tx.multi()`` and
    ``tx.execute()``. Returns what ``fn`` returned, or None if every retry
    conflicted.
    """
    return _watch_loop(client, key, fn, 0.001)


def do_with_save_pipe(client: Any, key: str, fn: Callable[[Any, Any], Any]) -> Any:
    """Like :func:`do`, but ``fn(tx, save)`` queues writes on ``save``.

    The queued writes run as one transaction after ``fn`` returns.
    """

    def attempt(tx: Any) -> Any:
        save = _SavePipe()
        result = fn(tx, save)
        tx.multi()
        _replay(save, tx)
        tx.execute()
        return result

    return _watch_loop(client, key, attempt, 0.01)


class SimpleLock:
    """A try-lock: fails at once instead of waiting when the key is held."""

    def __init__(self, client: Any, key: str, expiration: float) -> None:
        self.client = client
        self.key = key
        self.value = snowflake.gen()
        self.expiration = expiration

    def lock(self) -> bool:
        """Try to take the lock; True if it was taken."""
        return bool(
            self.client.set(self.key, self.value, nx=True, px=int(self.expiration * 1000))
        )

    def unlock(self) -> None:
        """Release the lock if this instance still holds it."""
        self.client.eval(_UNLOCK_SCRIPT, 1, self.key, self.value)