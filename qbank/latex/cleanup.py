from __future__ import annotations

import re

# "$30^{$\circ$}$": the degree symbol was wrapped a second time inside its caret group.
_NESTED_DEGREE_RE = re.compile(r"\$(\d+)\^\{\$\\circ\$\}\$")
_BARE_NESTED_DEGREE_RE = re.compile(r"(?<![$\d])(\d+)\^\{\$\\circ\$\}")
_PAIR_RE = re.compile(r"(?<!\\)\$([^$\n]*?)(?<!\\)\$")
_DOLLAR_RUN_RE = re.compile(r"(?<!\\)\${2,}")


def _drop_empty_pairs(text: str) -> str:
    def _repl(m: re.Match) -> str:
        return " " if not (m.group(1) or "").strip() else m.group(0)

    return _PAIR_RE.sub(_repl, text)


def cleanup_delimiters(text: str) -> str:
    """
    Final tidy-up after wrapping and merging:
    - fix degree symbols wrapped twice inside a caret group
    - turn empty pairs ("$$", "$ $") into a single space
    - collapse leftover runs of "$" into one

    Display math must already be out of the text (still protected), otherwise
    its "$$" would be collapsed too.
    """
    if not text or "$" not in text:
        return text
    s = _NESTED_DEGREE_RE.sub(lambda m: "$" + m.group(1) + "^{\\circ}$", text)
    s = _BARE_NESTED_DEGREE_RE.sub(lambda m: "$" + m.group(1) + "^{\\circ}$", s)
    s = _drop_empty_pairs(s)
    return _DOLLAR_RUN_RE.sub("$", s)
