"""Mapping between message ids and message types."""

from __future__ import annotations

from typing import Any, Callable


class UnknownMessageError(LookupError):
    """A message type has no registered id."""


class TypeMeta:
    """Two-way registry of message ids and the factories that build them."""

    def __init__(self) -> None:
        self._factory_by_id: dict[int, Callable[[], Any]] = {}
        self._id_by_type: dict[type, int] = {}

    def register(self, msg_id: int, factory: Callable[[], Any]) -> None:
        """Bind ``msg_id`` to ``factory``.

        ``factory`` is usually a message class; any other callable is called
        once to learn the type of the messages it builds.
        """
        msg_type = factory if isinstance(factory, type) else type(factory())
        self._factory_by_id[msg_id] = factory
        self._id_by_type[msg_type] = msg_id

    def new(self, msg_id: int) -> Any:
        """A fresh message for ``msg_id``, or None if the id is unknown."""
        factory = self._factory_by_id.get(msg_id)
        return factory() if factory is not None else None

    def new_func(self, msg_id: int) -> Callable[[], Any] | None:
        """The factory for ``msg_id``, or None if the id is unknown."""
        return self._factory_by_id.get(msg_id)

    def msg_id(self, msg: Any) -> int:
        """The id registered for the type of ``msg``."""
        try:
            return self._id_by_type[type(msg)]
        except KeyError:
            raise UnknownMessageError(
                f"msg id for {type(msg).__name__} no exist"
            ) from None


c2s = TypeMeta()
s2c = TypeMeta()
s2s = TypeMeta()