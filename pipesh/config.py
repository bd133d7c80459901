import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

from pipesh.builtins import BUILTINS

EXIT_KEYWORD = "exit"


@dataclass
class ShellConfig:
    prompt: str
    exit_keyword: str = EXIT_KEYWORD
    builtins: Mapping[str, Callable[[list[str]], None]] = field(default_factory=lambda: dict(BUILTINS))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "ShellConfig":
        """PS1 sets the prompt; without it the prompt shows the shell's pid."""
        if environ is None:
            environ = os.environ
        prompt = environ.get("PS1")
        if prompt is None:
            prompt = f"({os.getpid()}) $ "
        return cls(prompt=prompt)
