"""pipesh: a small educational UNIX shell built on fork, exec, pipe and dup2."""

__version__ = "0.1.0"
