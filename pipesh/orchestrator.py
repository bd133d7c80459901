import os
import sys
from typing import NoReturn

from pipesh.errors import DupError, ForkError, PipeError, ShellError


def _flush_stdio() -> None:
    #unflushed python buffers would otherwise be written twice, once per side of the fork
    for stream in (sys.stdout, sys.stderr):
        if stream is not None:
            stream.flush()


def spawn() -> int:
    """Fork the calling process. Returns 0 in the copy and the child pid in the original."""
    _flush_stdio()
    try:
        return os.fork()
    except OSError as e:
        raise ForkError(f"fork: {e.strerror}") from e


def spawn_detached() -> int:
    """
    Fork a process that nobody has to wait for.

    The intermediate child forks again and exits right away, so the
    grandchild is reparented to init which reaps it. Returns 0 in the
    grandchild and the (already reaped) intermediate pid in the caller.

    Each call creates two processes, the short-lived intermediate and the
    stage itself, not one.
    """
    pid = spawn()
    if pid == 0:
        try:
            if spawn() != 0:
                os._exit(0)
        except ShellError as e:
            fatal(e)
        return 0

    _, status = os.waitpid(pid, 0)
    if not os.WIFEXITED(status) or os.WEXITSTATUS(status) != 0:
        raise ForkError("fork: could not start pipeline stage")
    return pid


def make_pipe() -> tuple[int, int]:
    try:
        return os.pipe()
    except OSError as e:
        raise PipeError(f"pipe: {e.strerror}") from e


def duplicate(fd: int) -> int:
    try:
        return os.dup(fd)
    except OSError as e:
        raise DupError(f"dup: {e.strerror}") from e


def duplicate_onto(fd: int, target: int) -> None:
    try:
        if fd == target:
            #dup2 onto itself is a no-op and would leave close-on-exec set
            os.set_inheritable(fd, True)
        else:
            os.dup2(fd, target)
    except OSError as e:
        raise DupError(f"dup2: {e.strerror}") from e


def fatal(error: ShellError) -> NoReturn:
    """Report error and end the calling process. Only for code running after a fork."""
    print(f"pipesh: {error}", file=sys.stderr)
    _flush_stdio()
    os._exit(error.status)
