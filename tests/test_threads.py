import subprocess
import sys

import pytest

from gamesrv import threads


def _boom():
    raise RuntimeError("boom")


def test_run_safe_none_returns_false():
    assert threads.run_safe(None) is False


def test_run_safe_catches_when_capturing(monkeypatch):
    monkeypatch.setattr(threads, "CAPTURE_PANIC", True)
    assert threads.run_safe(_boom) is True


def test_run_safe_propagates_when_not_capturing(monkeypatch):
    monkeypatch.setattr(threads, "CAPTURE_PANIC", False)
    with pytest.raises(RuntimeError):
        threads.run_safe(_boom)


def test_run_safe_runs_function(monkeypatch):
    monkeypatch.setattr(threads, "CAPTURE_PANIC", True)
    calls = []
    assert threads.run_safe(lambda: calls.append(1)) is False
    assert calls == [1]


def test_go_safe_sets_event_after_running():
    calls = []
    done = threads.go_safe(lambda: calls.append("ran"))
    assert done.wait(2.0)
    assert calls == ["ran"]


def test_go_safe_sets_event_even_after_exception(monkeypatch):
    monkeypatch.setattr(threads, "CAPTURE_PANIC", True)
    done = threads.go_safe(_boom)
    assert done.wait(2.0)


def test_print_stack_includes_values():
    text = threads.print_stack("alpha", 7)
    assert text.startswith("alpha\n7\n")
    assert "test_print_stack_includes_values" in text


def test_func_caller_lists_frames():
    text = threads.func_caller(1)
    first = text.splitlines()[0]
    assert first.startswith("frame 1:[func:test_func_caller_lists_frames,")


def test_func_caller_beyond_stack_is_empty():
    assert threads.func_caller(100000) == ""


def test_exec_command_collects_lines():
    lines = threads.exec_command(sys.executable, ["-c", "print('a'); print('b')"])
    assert lines == ["a\n", "b\n"]


def test_exec_command_failure_raises():
    with pytest.raises(subprocess.CalledProcessError) as info:
        threads.exec_command(sys.executable, ["-c", "import sys; print('x'); sys.exit(3)"])
    assert info.value.returncode == 3
    assert info.value.output == "x\n"