import re

_WORD_RE = re.compile(r'''(?x)
    "(?:\\.|[^"\\])*"   |   #double quoted
    '(?:\\.|[^'\\])*'   |   #single quoted
    \S+                     #bare word
''')

_ESCAPES = re.compile(r'''\\(["'\\])''')


def _unquote(word: str) -> str:
    if len(word) >= 2 and word[0] == word[-1] and word[0] in "\"'":
        word = word[1:-1]
    return _ESCAPES.sub(r"\1", word)


def tokenize(line: str) -> list[str]:
    """Split one input line into words. Quoted words keep their spaces."""
    return [_unquote(m.group(0)) for m in _WORD_RE.finditer(line)]
