import pytest

from gamesrv.route import Route


class FakeMsg:
    def __init__(self):
        self.raw = None

    def ParseFromString(self, data):
        if data == b"bad":
            raise ValueError("broken")
        self.raw = data


class FakeSession:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True

    def __str__(self):
        return "1_127.0.0.1"


def test_handle_dispatches_parsed_message():
    route = Route(16)
    seen = []
    route.register(3, FakeMsg, lambda msg, s: seen.append((msg.raw, s)))
    session = FakeSession()
    assert route.handle(3, b"hello", session) is True
    assert seen == [(b"hello", session)]


def test_unregistered_id_is_rejected():
    route = Route(16)
    assert route.handle(4, b"", FakeSession()) is False


def test_id_beyond_size_is_rejected():
    route = Route(16)
    assert route.handle(100, b"", FakeSession()) is False


def test_missing_factory_is_rejected():
    route = Route(16)
    seen = []
    route.register(2, None, lambda msg, s: seen.append(msg))
    assert route.handle(2, b"", FakeSession()) is False
    assert seen == []


def test_factory_returning_none_passes_none():
    route = Route(16)
    seen = []
    route.register(2, lambda: None, lambda msg, s: seen.append(msg))
    assert route.handle(2, b"ignored", FakeSession()) is True
    assert seen == [None]


def test_parse_error_closes_session():
    route = Route(16)
    seen = []
    route.register(5, FakeMsg, lambda msg, s: seen.append(msg))
    session = FakeSession()
    assert route.handle(5, b"bad", session) is False
    assert session.closed is True
    assert seen == []


def test_register_out_of_range():
    route = Route(8)
    with pytest.raises(IndexError):
        route.register(8, FakeMsg, lambda msg, s: None)


def test_quiet_id_still_handled():
    route = Route(16, quiet_ids={1})
    seen = []
    route.register(1, FakeMsg, lambda msg, s: seen.append(msg.raw))
    assert route.handle(1, b"beat", FakeSession()) is True
    assert seen == [b"beat"]