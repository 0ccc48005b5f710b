"""Start-up options of a server process, from the command line and environment."""

from __future__ import annotations

import argparse
import os
import re
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

_INT_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Flags:
    """Options every server process starts with."""

    etcd_addr: str = "127.0.0.1:2379"
    name: str = "local"
    svc_index: int = 0
    rpc_port: int = 0
    http_port: int = 0
    tcp_port: int = 3001
    srv_type: Any = None


def _atoi(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def _build_parser() -> argparse.ArgumentParser:
    defaults = Flags()
    parser = argparse.ArgumentParser()
    parser.add_argument("--etcd-addr", default=defaults.etcd_addr, help="etcd address")
    parser.add_argument("--name", default=defaults.name, help="merchant id")
    parser.add_argument("--index", type=int, default=defaults.svc_index, help="service index")
    parser.add_argument("--rpc-port", type=int, default=defaults.rpc_port, help="rpc listen port")
    parser.add_argument("--http-port", type=int, default=defaults.http_port, help="http listen port")
    parser.add_argument("--tcp-port", type=int, default=defaults.tcp_port, help="tcp listen port")
    return parser


def parse_flags(
    server_type: Any,
    argv: Sequence[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Flags:
    """Parse ``argv``, then let HOSTNAME, RPC_PORT and HTTP_PORT override."""
    env = os.environ if environ is None else environ
    args = _build_parser().parse_args(argv)
    flags = Flags(
        etcd_addr=args.etcd_addr,
        name=args.name,
        svc_index=args.index,
        rpc_port=args.rpc_port,
        http_port=args.http_port,
        tcp_port=args.tcp_port,
        srv_type=server_type,
    )
    host_name = env.get("HOSTNAME", "")
    if host_name:
        host_index = split_host_name(host_name)
        if host_index >= 0:
            flags.svc_index = host_index
    rpc_port = env.get("RPC_PORT", "")
    if rpc_port:
        try:
            flags.rpc_port = _atoi(rpc_port)
        except ValueError as exc:
            raise ValueError(f"rpc port error: {exc}") from exc
    http_port = env.get("HTTP_PORT", "")
    if http_port:
        try:
            flags.http_port = _atoi(http_port)
        except ValueError as exc:
            raise ValueError(f"http port error: {exc}") from exc
    return flags


def split_host_name(host_name: str) -> int:
    """The number after the last '-' of a host name, or -1 if there is no '-'."""
    if "-" not in host_name:
        return -1
    pos = host_name.rfind("-")
    suffix = host_name[pos + 1:]
    if not suffix:
        raise ValueError(f"split host name err: {host_name}")
    try:
        return _atoi(suffix)
    except ValueError as exc:
        raise ValueError(f"split host name err: {host_name}") from exc


_ready = threading.Event()


def is_ready() -> bool:
    """True once the service has finished starting."""
    return _ready.is_set()


def set_ready() -> None:
    """Mark the service as started."""
    _ready.set()