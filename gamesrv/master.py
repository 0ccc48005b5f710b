"""Electing one master process per service with a Redis key."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

import redis

log = logging.getLogger(__name__)

_ACQUIRE_SCRIPT = """
if redis.call("set", KEYS[1], ARGV[1], "NX", "EX", ARGV[2]) then
    return redis.status_reply("OK")
end
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("set", KEYS[1], ARGV[1], "EX", ARGV[2])
end
"""

_RELEASE_SCRIPT = """
if redis.call("get", KEYS[1]) == ARGV[1] then
    return redis.call("del", KEYS[1])
end
"""

_is_master = False


def _key(service: str) -> str:
    return "master:" + service


def _seconds(ttl: float | timedelta) -> float | int:
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    return int(seconds) if seconds.is_integer() else seconds


def check_and_set_master(client: Any, service: str, value: int, ttl: float | timedelta) -> bool:
    """Claim or refresh mastership of ``service``; False if another holds it."""
    global _is_master
    try:
        result = client.eval(_ACQUIRE_SCRIPT, 1, _key(service), value, _seconds(ttl))
    except redis.RedisError as exc:
        log.warning("master check failed: %s", exc)
        result = None
    _is_master = result is not None
    log.info("isMaster=%s", _is_master)
    return _is_master


def is_master() -> bool:
    """True if the last check made this process the master."""
    return _is_master


def delete_master_flag(client: Any, service: str, value: int) -> bool:
    """Give up mastership; True if the key held ``value`` and was deleted."""
    global _is_master
    log.debug("delete master flag key=%s val=%s", _key(service), value)
    try:
        result = client.eval(_RELEASE_SCRIPT, 1, _key(service), value)
    except redis.RedisError as exc:
        log.warning("master release failed: %s", exc)
        result = None
    _is_master = False
    return result is not None