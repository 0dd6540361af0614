from __future__ import annotations

import re
from typing import Callable

# Unescaped dollar signs only; "\$" is a literal currency sign.
DISPLAY_MATH_RE = re.compile(r"(?<!\\)\$\$([\s\S]+?)(?<!\\)\$\$")
INLINE_MATH_RE = re.compile(r"(?<!\\)\$([^$\n]+?)(?<!\\)\$")
DOLLAR_RE = re.compile(r"(?<!\\)\$")

COMMAND_RE = re.compile(r"\\[a-zA-Z]+")
# Markup that marks a fragment as LaTeX: a command or a braced sub/superscript.
MARKUP_TOKEN_RE = re.compile(r"\\[a-zA-Z]+|[_^]\{")

_MATH_SEGMENT_RE = re.compile(r"((?<!\\)\$\$[\s\S]+?(?<!\\)\$\$|(?<!\\)\$[^$\n]+?(?<!\\)\$)")


def _map_outside_math(text: str, fn: Callable[[str], str]) -> str:
    """Apply fn to the stretches of text that are not inside $...$ / $$...$$."""
    parts = _MATH_SEGMENT_RE.split(text)
    # re.split with one capture group: even indices are text, odd are math segments.
    for i in range(0, len(parts), 2):
        if parts[i]:
            parts[i] = fn(parts[i])
    return "".join(parts)


def _markup_density(s: str) -> int:
    return len(MARKUP_TOKEN_RE.findall(s or ""))


def _group_end(s: str, i: int, open_ch: str = "{", close_ch: str = "}") -> int:
    """
    Index just past the balanced group that opens at s[i], or -1.

    Groups never span a newline so wrapped inline math stays on one line.
    Backslash-escaped characters (\\{, \\}) do not count towards nesting.
    """
    if i >= len(s) or s[i] != open_ch:
        return -1
    depth = 0
    j = i
    n = len(s)
    while j < n:
        ch = s[j]
        if ch == "\n":
            return -1
        if ch == "\\":
            j += 2
            continue
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return j + 1
        j += 1
    return -1


def _script_end(s: str, i: int, *, braced_only: bool) -> int:
    """Index just past a `_x` / `^{...}` script that starts at s[i], or -1."""
    if i >= len(s) or s[i] not in "_^":
        return -1
    j = i + 1
    if j < len(s) and s[j] == "{":
        return _group_end(s, j)
    if braced_only:
        return -1
    if j < len(s) and s[j].isascii() and s[j].isalnum():
        return j + 1
    return -1
