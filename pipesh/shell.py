import os
import signal
import sys
import traceback
from collections.abc import Sequence

from pipesh.config import ShellConfig
from pipesh.errors import ParseError, ShellError
from pipesh.foreground import ForegroundTracker
from pipesh.orchestrator import spawn
from pipesh.pipeline import execute, is_operator, parse
from pipesh.tokenizer import tokenize


def signal_name(sig: int) -> str:
    try:
        return signal.Signals(sig).name
    except ValueError:
        #real-time signals have no enum member
        return signal.strsignal(sig) or f"signal {sig}"


def describe_status(pid: int, status: int) -> str:
    if os.WIFSIGNALED(status):
        sig = os.WTERMSIG(status)
        return f"Child {pid} terminated by signal {sig} ({signal_name(sig)})."
    return f"Child {pid} exited with status {os.WEXITSTATUS(status)}."


def wait_for(pid: int) -> int:
    """Block until pid has exited or been killed. Stops are waited through."""
    while True:
        _, status = os.waitpid(pid, os.WUNTRACED)
        if os.WIFEXITED(status) or os.WIFSIGNALED(status):
            return status


def run_line(tokens: Sequence[str], tracker: ForegroundTracker | None = None) -> tuple[int, int]:
    """
    Fork the line process for tokens and wait for it.

    Returns (pid, raw wait status). Raises ParseError before forking
    anything if the line is malformed, and ForkError if the line process
    could not be created.
    """
    pipeline = parse(tokens)
    if tracker is None:
        tracker = ForegroundTracker()

    pid = spawn()
    if pid == 0:
        try:
            #the child's copy of the tracker is stale, let interrupts kill it normally
            signal.signal(signal.SIGINT, signal.SIG_DFL)
            #python starts with SIGPIPE ignored and exec would keep it that way
            signal.signal(signal.SIGPIPE, signal.SIG_DFL)
            execute(pipeline)
        except BaseException:
            traceback.print_exc()
            sys.stderr.flush()
        finally:
            os._exit(1)

    tracker.track(pid)
    try:
        status = wait_for(pid)
    finally:
        tracker.clear()
    return pid, status


def dispatch(tokens: list[str], config: ShellConfig, tracker: ForegroundTracker) -> None:
    name = tokens[0]
    builtin = config.builtins.get(name)
    if builtin is not None:
        if any(is_operator(t) for t in tokens[1:]):
            print(f"{name}: redirection and pipes are not supported for built-in commands", file=sys.stderr)
            return
        builtin(tokens)
        return

    try:
        pid, status = run_line(tokens, tracker)
    except ParseError as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        return
    except ShellError as e:
        print(f"pipesh: {e}", file=sys.stderr)
        return
    print(describe_status(pid, status), file=sys.stderr)


def main(config: ShellConfig | None = None) -> int:
    if config is None:
        config = ShellConfig.from_environ()
    tracker = ForegroundTracker()
    tracker.install()

    while True:
        try:
            line = input(config.prompt)
        except EOFError:
            if sys.stdin.isatty():
                print()
            break

        tokens = tokenize(line)
        if not tokens:
            continue
        if tokens[0] == config.exit_keyword:
            break

        dispatch(tokens, config, tracker)

    return 0

