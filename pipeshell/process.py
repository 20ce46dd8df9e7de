"""
Fork/wait primitives.

spawn() returns a tagged result so callers branch exactly once:
Parent(pid) in the calling process, Child() in the new one.
A child must leave through exit_child(), never by returning.
"""
import contextlib
import logging
import os
import sys
from dataclasses import dataclass

from pipeshell.config import EXIT_EXEC_FAILED

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parent:
    pid: int


@dataclass(frozen=True)
class Child:
    pass


def spawn():
    """Fork the current process. Returns Parent(pid) or Child()"""
    # Buffered output would otherwise be written twice
    sys.stdout.flush()
    sys.stderr.flush()
    pid = os.fork()
    if pid == 0:
        return Child()
    logger.debug("forked child %d", pid)
    return Parent(pid)


def exit_child(status):
    """Flush Python buffers and terminate the child without unwinding"""
    for stream in (sys.stdout, sys.stderr):
        with contextlib.suppress(OSError, ValueError):
            stream.flush()
    os._exit(status)


def run_child(target, *args):
    """
    Run target(*args) as the body of a forked child and exit with its
    return value. Any exception ends the child with EXIT_EXEC_FAILED.
    """
    status = EXIT_EXEC_FAILED
    try:
        status = target(*args)
    except Exception:
        logger.exception("child %d failed", os.getpid())
    finally:
        exit_child(status)


def wait_for(pid):
    """
    Block until pid terminates.
    Stop notifications are observed but do not end the wait.
    Returns: exit code, or -signal if the child was killed
    """
    while True:
        _, status = os.waitpid(pid, os.WUNTRACED)
        if os.WIFSTOPPED(status):
            logger.debug("child %d stopped by signal %d", pid, os.WSTOPSIG(status))
            continue
        code = os.waitstatus_to_exitcode(status)
        logger.debug("child %d exited with %d", pid, code)
        return code
