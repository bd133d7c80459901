import os
import sys


def do_ls(argv: list[str]) -> None:
    #list a directory, defaults to the current one
    path = argv[1] if len(argv) > 1 else "."
    try:
        entries = os.listdir(path)
    except OSError as e:
        print(f"ls: {path}: {e.strerror}", file=sys.stderr)
        return
    for name in sorted(entries):
        print(name)


def do_rm(argv: list[str]) -> None:
    if len(argv) < 2:
        print("rm: no file specified", file=sys.stderr)
        return
    for path in argv[1:]:
        try:
            os.unlink(path)
        except OSError as e:
            print(f"rm: cannot remove '{path}': {e.strerror}", file=sys.stderr)


BUILTINS = {
    "ls": do_ls,
    "rm": do_rm,
}
