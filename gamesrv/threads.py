"""Running callables safely, waiting for exit signals and running commands."""

from __future__ import annotations

import logging
import signal
import subprocess
import sys
import threading
import traceback
from typing import Any, Callable

log = logging.getLogger(__name__)

# Exceptions escape in debug runs and are caught and logged in optimised (-O) runs.
CAPTURE_PANIC = not __debug__


def run_safe(fn: Callable[[], Any] | None) -> bool:
    """Call ``fn``; return True if it raised and the exception was caught."""
    if fn is None:
        return False
    if not CAPTURE_PANIC:
        fn()
        return False
    try:
        fn()
    except Exception as exc:
        log.error("[PANIC]", exc_info=True, extra={"exception": repr(exc)})
        print_stack()
        return True
    return False


def go_safe(fn: Callable[[], Any] | None) -> threading.Event:
    """Run ``fn`` through :func:`run_safe` in a daemon thread.

    The returned event is set once ``fn`` has finished.
    """
    done = threading.Event()

    def target() -> None:
        try:
            run_safe(fn)
        finally:
            done.set()

    threading.Thread(target=target, daemon=True).start()
    return done


def wait_exit() -> int:
    """Block the main thread until SIGINT, SIGTERM or SIGQUIT arrives; return it."""
    received: list[int] = []
    arrived = threading.Event()

    def handler(signum: int, _frame: Any) -> None:
        received.append(signum)
        arrived.set()

    wanted = [signal.SIGINT, signal.SIGTERM]
    if hasattr(signal, "SIGQUIT"):
        wanted.append(signal.SIGQUIT)
    previous = {sig: signal.signal(sig, handler) for sig in wanted}
    try:
        while not arrived.wait(0.5):
            pass
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)
    signum = received[0]
    log.info("Signal[%s] server closing ...", signal.Signals(signum).name)
    return signum


def print_stack(*args: Any) -> str:
    """Log the given values followed by the current stack; return the text."""
    parts = [f"{value}\n" for value in args]
    parts.append("".join(traceback.format_stack()))
    text = "".join(parts)
    log.error("%s", text)
    return text


def func_caller(level: int) -> str:
    """Describe the call stack starting ``level`` frames above this function."""
    try:
        frame = sys._getframe(level)
    except ValueError:
        return ""
    lines = []
    while frame is not None:
        code = frame.f_code
        lines.append(
            f"frame {level}:[func:{code.co_name},file:{code.co_filename},line:{frame.f_lineno}]\n"
        )
        level += 1
        frame = frame.f_back
    return "".join(lines)


def exec_command(name: str, params: list[str]) -> list[str]:
    """Run a command, echoing and collecting each complete output line.

    A final line without a newline is not collected. A non-zero exit status
    raises :class:`subprocess.CalledProcessError` carrying the collected output.
    """
    cmd = [name, *params]
    print("exec: " + " ".join(cmd))
    lines: list[str] = []
    with subprocess.Popen(cmd, stdout=subprocess.PIPE, text=True) as proc:
        assert proc.stdout is not None
        for line in proc.stdout:
            if not line.endswith("\n"):
                break
            print(line, end="", flush=True)
            lines.append(line)
        code = proc.wait()
    if code:
        raise subprocess.CalledProcessError(code, cmd, output="".join(lines))
    return lines