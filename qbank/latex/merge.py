from __future__ import annotations

import re
from typing import Optional

from .config import DEFAULT_CONFIG, RepairConfig
from .text_utils import INLINE_MATH_RE

_OPERATOR_SEP_RE = re.compile(r"\s*[-+=<>×·∙,]\s*")
_LETTER_SEP_RE = re.compile(r"\s*[a-z]\s*")
_SENTENCE_END_RE = re.compile(r"[.!?;]\s*$")
_DEGREE_BODY_RE = re.compile(r"\d+\s*\^\s*\{\\circ\}")


def merge_connective(
    left: str,
    sep: str,
    right: str,
    config: RepairConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """
    Decide whether `$left$ sep $right$` is one expression.

    Returns the merged span body, or None to keep the two spans apart.
    """
    if "\n" in sep:
        # Also covers "label:\n$...$", which ends a statement.
        return None
    if _SENTENCE_END_RE.search(sep):
        return None
    if not sep.strip():
        trig = "|".join(re.escape(n) for n in config.trig_commands)
        if trig and re.fullmatch(r"\\(?:" + trig + r")", left) and _DEGREE_BODY_RE.fullmatch(right):
            return left + " " + right
        if sep == "" or (len(sep) <= 2 and "\\" in left and "\\" in right):
            return left + sep + right
        return None
    if _OPERATOR_SEP_RE.fullmatch(sep):
        return left + sep + right
    # Known false-merge risk: "$x$ a $y$" in prose reads as one product.
    if _LETTER_SEP_RE.fullmatch(sep):
        return left + sep + right
    return None


def _merge_pass(text: str, config: RepairConfig) -> str:
    found = list(INLINE_MATH_RE.finditer(text))
    if len(found) < 2:
        return text
    out: list[str] = []
    pos = 0
    cur_start, cur_end, cur_body = found[0].start(), found[0].end(), found[0].group(1)
    for m in found[1:]:
        merged = merge_connective(cur_body, text[cur_end:m.start()], m.group(1), config)
        if merged is not None:
            cur_end, cur_body = m.end(), merged
            continue
        out.append(text[pos:cur_start])
        out.append("$" + cur_body + "$")
        pos = cur_end
        cur_start, cur_end, cur_body = m.start(), m.end(), m.group(1)
    out.append(text[pos:cur_start])
    out.append("$" + cur_body + "$")
    out.append(text[cur_end:])
    return "".join(out)


def merge_adjacent_spans(text: str, config: RepairConfig = DEFAULT_CONFIG) -> tuple[str, int]:
    """
    Coalesce neighbouring inline spans joined by compatible connective text,
    until a pass changes nothing or config.max_merge_passes is reached.

    Returns (text, passes_run).
    """
    passes = 0
    if not text or text.count("$") < 4:
        return text, passes
    while passes < config.max_merge_passes:
        passes += 1
        merged = _merge_pass(text, config)
        if merged == text:
            break
        text = merged
    return text, passes
