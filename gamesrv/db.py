"""Redis and MongoDB client construction and index helpers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import pymongo
import redis
import redis.cluster
from redis.backoff import ExponentialBackoff
from redis.retry import Retry
from pymongo.server_api import ServerApi

log = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10
_DEFAULT_ADDR = "127.0.0.1:6379"


@dataclass
class RedisConfig:
    """Where and how to reach Redis; several addresses mean a cluster."""

    addr: list[str] = field(default_factory=list)
    password: str = ""
    db: int = 0
    name: str = ""


@dataclass
class MongoConfig:
    """Where to reach MongoDB."""

    uri: str = ""
    db_name: str = "admin"


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr, 6379
    return host, int(port)


def new_redis(conf: RedisConfig, pool_size: int = 0) -> Any:
    """Create a Redis client and check it answers a ping."""
    if pool_size <= 0:
        pool_size = DEFAULT_POOL_SIZE
    common: dict[str, Any] = {
        "password": conf.password or None,
        "client_name": conf.name or None,
        "socket_connect_timeout": 5.0,
        "socket_timeout": 3.0,
        "max_connections": pool_size,
        "retry": Retry(ExponentialBackoff(cap=0.512, base=0.008), 3),
    }
    if len(conf.addr) > 1:
        nodes = [redis.cluster.ClusterNode(*_split_addr(a)) for a in conf.addr]
        client = redis.cluster.RedisCluster(startup_nodes=nodes, **common)
    else:
        host, port = _split_addr(conf.addr[0] if conf.addr else _DEFAULT_ADDR)
        client = redis.Redis(host=host, port=port, db=conf.db, **common)
    try:
        client.ping()
    except redis.RedisError as exc:
        raise redis.ConnectionError(f"redis ping failed: {exc}") from exc
    log.info("redis connected addr=%s db=%d", conf.addr, conf.db)
    return client


def new_mongo(conf: MongoConfig, min_pool_size: int, max_pool_size: int) -> Any:
    """Create a MongoDB client with the standard pool and timeout settings."""
    client = pymongo.MongoClient(
        conf.uri,
        server_api=ServerApi("1"),
        maxPoolSize=max_pool_size,
        minPoolSize=min_pool_size,
        connectTimeoutMS=3000,
        timeoutMS=10000,
        maxIdleTimeMS=300000,
    )
    log.info("connect to mongo uri=%s", conf.uri)
    return client


def create_index_if_not_exist(database: Any, table: str, indexes: Mapping[str, Any]) -> list[str]:
    """Create the named indexes a collection lacks; existing ones are left alone.

    Returns the names of the indexes that were created.
    """
    collection = database[table]
    existing = {doc["name"] for doc in collection.list_indexes() if "name" in doc}
    created = []
    for name, model in indexes.items():
        if name in existing:
            continue
        collection.create_indexes([model])
        log.info("table %s create index %s", table, name)
        created.append(name)
    return created