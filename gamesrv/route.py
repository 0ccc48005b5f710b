"""Dispatching decoded server messages to their handlers by id."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Collection

log = logging.getLogger(__name__)

DEFAULT_SIZE = 65536


@dataclass
class _Handler:
    create: Callable[[], Any] | None
    handle: Callable[[Any, Any], Any]


class Route:
    """A fixed-size table of message handlers indexed by message id."""

    def __init__(self, size: int = DEFAULT_SIZE, quiet_ids: Collection[int] = ()) -> None:
        self.size = size
        self.quiet_ids = frozenset(quiet_ids)
        self._handlers: dict[int, _Handler] = {}

    def register(
        self,
        msg_id: int,
        create: Callable[[], Any] | None,
        handle: Callable[[Any, Any], Any],
    ) -> None:
        """Bind ``msg_id`` to a message factory and a handler."""
        if not 0 <= msg_id < self.size:
            raise IndexError(f"msg id {msg_id} out of range [0, {self.size})")
        self._handlers[msg_id] = _Handler(create, handle)

    def handle(self, msg_id: int, data: bytes, session: Any) -> bool:
        """Decode ``data`` and run its handler; False if unregistered or undecodable.

        A message that fails to decode closes the session.
        """
        node = self._handlers.get(msg_id)
        if node is None or node.create is None:
            return False
        msg = node.create()
        if msg is not None:
            try:
                msg.ParseFromString(data)
            except Exception as exc:
                log.warning("%s parser msg %d error:%s", session, msg_id, exc)
                session.close()
                return False
        if msg_id not in self.quiet_ids:
            log.debug("%s recv [%d] msg:%s", session, msg_id, msg)
        node.handle(msg, session)
        return True