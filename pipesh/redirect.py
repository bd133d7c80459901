import os
from dataclasses import dataclass
from enum import Enum

from pipesh.errors import RedirectError
from pipesh.orchestrator import duplicate_onto

STDIN = 0
STDOUT = 1
STDERR = 2

FILE_MODE = 0o644


class RedirectKind(Enum):
    OVERWRITE_STDOUT = ">"
    APPEND_STDOUT = ">>"
    OVERWRITE_STDERR = "2>"
    OVERWRITE_BOTH = "&>"
    READ_STDIN = "<"


OPERATORS: dict[str, RedirectKind] = {kind.value: kind for kind in RedirectKind}

_OVERWRITE = os.O_WRONLY | os.O_CREAT | os.O_TRUNC

_FLAGS: dict[RedirectKind, int] = {
    RedirectKind.OVERWRITE_STDOUT: _OVERWRITE,
    RedirectKind.APPEND_STDOUT: os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    RedirectKind.OVERWRITE_STDERR: _OVERWRITE,
    RedirectKind.OVERWRITE_BOTH: _OVERWRITE,
    RedirectKind.READ_STDIN: os.O_RDONLY,
}

_SLOTS: dict[RedirectKind, tuple[int, ...]] = {
    RedirectKind.OVERWRITE_STDOUT: (STDOUT,),
    RedirectKind.APPEND_STDOUT: (STDOUT,),
    RedirectKind.OVERWRITE_STDERR: (STDERR,),
    RedirectKind.OVERWRITE_BOTH: (STDOUT, STDERR),
    RedirectKind.READ_STDIN: (STDIN,),
}


@dataclass(frozen=True)
class Redirection:
    kind: RedirectKind
    target: str

    @property
    def slots(self) -> tuple[int, ...]:
        return _SLOTS[self.kind]


def apply(redirection: Redirection) -> None:
    """
    Point the standard stream(s) of the calling process at redirection.target.

    Raises RedirectError if the target can't be opened, in which case the
    descriptor table is left untouched.
    """
    try:
        fd = os.open(redirection.target, _FLAGS[redirection.kind], FILE_MODE)
    except (OSError, ValueError) as e:
        #ValueError: the path holds a NUL byte
        raise RedirectError(f"{redirection.target!r}: {getattr(e, 'strerror', None) or e}") from e

    for slot in redirection.slots:
        duplicate_onto(fd, slot)
    #open() may hand back a slot itself when that slot was closed
    if fd not in redirection.slots:
        os.close(fd)
