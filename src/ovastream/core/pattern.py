"""Shell-style glob matching against archive entry base names."""

from __future__ import annotations
import re
from functools import lru_cache

from .model import InvalidPatternError


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Return (literal char, next index) for one class item character."""
    if i >= len(pattern):
        raise InvalidPatternError(f"unterminated character class in {pattern!r}")
    ch = pattern[i]
    if ch in "-]":
        raise InvalidPatternError(f"unexpected {ch!r} in character class of {pattern!r}")
    if ch == "\\":
        i += 1
        if i >= len(pattern):
            raise InvalidPatternError(f"trailing backslash in {pattern!r}")
        ch = pattern[i]
    return ch, i + 1


def _translate_class(pattern: str, i: int) -> tuple[str, int]:
    """Translate the class starting after '[' at index i."""
    negate = False
    if i < len(pattern) and pattern[i] in "^!":
        negate = True
        i += 1

    items = []
    while True:
        if i < len(pattern) and pattern[i] == "]" and items:
            i += 1
            break
        lo, i = _class_char(pattern, i)
        hi = lo
        if i < len(pattern) and pattern[i] == "-":
            hi, i = _class_char(pattern, i + 1)
            if hi < lo:
                raise InvalidPatternError(f"reversed range {lo}-{hi} in {pattern!r}")
        if lo == hi:
            items.append(re.escape(lo))
        else:
            items.append(f"{re.escape(lo)}-{re.escape(hi)}")

    body = "".join(items)
    if negate:
        return f"[^{body}]", i
    return f"[{body}]", i


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern:
    """Compile `pattern` to a regex that must match a whole base name."""
    out = []
    i = 0
    while i < len(pattern):
        ch = pattern[i]
        if ch == "*":
            while i < len(pattern) and pattern[i] == "*":
                i += 1
            out.append("[^/]*")
            continue
        if ch == "?":
            out.append("[^/]")
        elif ch == "[":
            cls, i = _translate_class(pattern, i + 1)
            out.append(cls)
            continue
        elif ch == "\\":
            i += 1
            if i >= len(pattern):
                raise InvalidPatternError(f"trailing backslash in {pattern!r}")
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(ch))
        i += 1
    return re.compile("".join(out), re.DOTALL)


def base_name(name: str) -> str:
    """Return `name` with trailing slashes and any directory prefix removed."""
    stripped = name.rstrip("/")
    return stripped.rsplit("/", 1)[-1]


def match_base(pattern: str, name: str) -> bool:
    return compile_glob(pattern).fullmatch(base_name(name)) is not None
