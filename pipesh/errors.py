class ShellError(Exception):
    """Base error. status is the exit code used when the error ends a process."""

    status = 1


class ParseError(ShellError, ValueError):
    pass


class RedirectError(ShellError):
    status = 1


class ForkError(ShellError):
    status = 2


class DupError(ShellError):
    status = 3


class PipeError(ShellError):
    status = 4


class ExecError(ShellError):
    status = 127
