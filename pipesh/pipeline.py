"""
Turn a line's tokens into a pipeline of stages and run it.

parse() has no side effects: it only builds a Pipeline description.
execute() is meant to run inside the line process that the interactive
loop forks. It spawns every stage except the last one, and then replaces
its own image with the last stage's program, so it never returns.
"""

import os
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NoReturn

from pipesh import redirect
from pipesh.errors import ExecError, ParseError, ShellError
from pipesh.orchestrator import duplicate_onto, fatal, make_pipe, spawn_detached
from pipesh.redirect import OPERATORS, Redirection

PIPE = "|"


@dataclass(frozen=True)
class Stage:
    argv: tuple[str, ...]
    redirections: tuple[Redirection, ...] = ()


@dataclass(frozen=True)
class Pipeline:
    stages: tuple[Stage, ...]


def is_operator(token: str) -> bool:
    """< > | on their own, or any two character token ending in >."""
    return (len(token) == 1 and token in "<>|") or (len(token) == 2 and token[1] == ">")


def parse(tokens: Sequence[str]) -> Pipeline:
    stages: list[Stage] = []
    argv: list[str] = []
    redirections: list[Redirection] = []

    i = 0
    while i < len(tokens):
        t = tokens[i]
        if not is_operator(t):
            argv.append(t)
            i += 1
        elif t == PIPE:
            if not argv:
                raise ParseError("missing command before |")
            stages.append(Stage(tuple(argv), tuple(redirections)))
            argv, redirections = [], []
            i += 1
        elif t in OPERATORS:
            if i + 1 >= len(tokens) or is_operator(tokens[i + 1]):
                raise ParseError(f"missing file name after {t}")
            redirections.append(Redirection(OPERATORS[t], tokens[i + 1]))
            i += 2
        else:
            raise ParseError(f"unsupported operator {t}")

    if not argv:
        if stages:
            raise ParseError("missing command after |")
        raise ParseError("missing command")
    stages.append(Stage(tuple(argv), tuple(redirections)))
    return Pipeline(tuple(stages))


def replace_image(argv: Sequence[str]) -> NoReturn:
    """exec argv[0] with argv. argv[0] must be a path, there is no PATH search."""
    try:
        os.execv(argv[0], list(argv))
    except (OSError, ValueError) as e:
        #ValueError: empty program name or a NUL byte in an argument
        raise ExecError(f"{argv[0]!r}: {getattr(e, 'strerror', None) or e}") from e


def settle(stage: Stage, upstream: int | None = None, downstream: int | None = None) -> None:
    """
    Wire the calling process's descriptors for stage.

    Order matters: the pipe input goes in first so a < on the stage wins
    over it, and the pipe output goes in last so it wins over a > placed
    before the |.
    """
    if upstream is not None:
        duplicate_onto(upstream, redirect.STDIN)
        if upstream != redirect.STDIN:
            os.close(upstream)

    for r in stage.redirections:
        redirect.apply(r)

    if downstream is not None:
        duplicate_onto(downstream, redirect.STDOUT)
        if downstream != redirect.STDOUT:
            os.close(downstream)


def execute(pipeline: Pipeline) -> NoReturn:
    try:
        upstream: int | None = None
        for stage in pipeline.stages[:-1]:
            read_end, write_end = make_pipe()
            if spawn_detached() == 0:
                #stage process: writes into the pipe, never reads from it
                os.close(read_end)
                settle(stage, upstream, write_end)
                replace_image(stage.argv)

            os.close(write_end)
            if upstream is not None:
                os.close(upstream)
            upstream = read_end

        last = pipeline.stages[-1]
        settle(last, upstream)
        replace_image(last.argv)
    except ShellError as e:
        fatal(e)
