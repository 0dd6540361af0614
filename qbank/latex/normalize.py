from __future__ import annotations

import re

from .config import DEFAULT_CONFIG, RepairConfig
from .text_utils import _map_outside_math

# "\\[2pt]" is a LaTeX line break with spacing, not an opening display delimiter.
_DISPLAY_BRACKET_RE = re.compile(r"(?<!\\)\\\[([\s\S]+?)(?<!\\)\\\]")
_INLINE_PAREN_RE = re.compile(r"(?<!\\)\\\(\s*([\s\S]+?)\s*(?<!\\)\\\)")
_CITATION_LIKE_RE = re.compile(r"\s*\d{1,4}(?:\s*[,;\-]\s*\d{1,4})*\s*")


def _display_bracket_repl(m: re.Match) -> str:
    inner = m.group(1) or ""
    # Keep escaped citation brackets like \[24\] untouched.
    if _CITATION_LIKE_RE.fullmatch(inner):
        return m.group(0)
    return "$$" + inner + "$$"


def _wrap_environments(text: str, config: RepairConfig) -> str:
    names = "|".join(re.escape(n) for n in config.math_environments)
    if not names or "\\begin" not in text:
        return text
    env_re = re.compile(r"\\begin\{(" + names + r")\}[\s\S]*?\\end\{\1\}")
    return _map_outside_math(text, lambda seg: env_re.sub(lambda m: "$$" + m.group(0) + "$$", seg))


def normalize_delimiters(text: str, config: RepairConfig = DEFAULT_CONFIG) -> str:
    """
    Rewrite legacy math delimiters into the canonical $...$ / $$...$$ forms:
      \\[ ... \\]  -> $$ ... $$
      \\( ... \\)  -> $...$        (whitespace just inside the markers is dropped)
      \\begin{aligned} ... \\end{aligned} -> $$\\begin{aligned} ... \\end{aligned}$$
    Nothing else in the text changes; running it twice is the same as once.
    """
    if not text:
        return text
    s = text
    if "\\[" in s:
        s = _DISPLAY_BRACKET_RE.sub(_display_bracket_repl, s)
    if "\\(" in s:
        s = _INLINE_PAREN_RE.sub(lambda m: "$" + (m.group(1) or "") + "$", s)
    return _wrap_environments(s, config)
