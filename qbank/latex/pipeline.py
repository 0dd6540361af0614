from __future__ import annotations

from .cleanup import cleanup_delimiters
from .config import DEFAULT_CONFIG, RepairConfig
from .merge import merge_adjacent_spans
from .normalize import normalize_delimiters
from .rules import BARE_MATH_RULES, wrap_trig_degrees
from .spans import SpanTable


def _repair_once(text: str, config: RepairConfig) -> str:
    doc = normalize_delimiters(text, config)
    spans = SpanTable(doc)

    doc = wrap_trig_degrees(doc, spans, config)
    doc = spans.protect_existing(doc)
    for rule in BARE_MATH_RULES:
        doc = rule(doc, spans, config)

    # Merging works on "$" characters, so inline spans come back first.
    # Display blocks stay sealed until the very end.
    doc = spans.restore(doc, display=False)
    doc, _ = merge_adjacent_spans(doc, config)
    doc = cleanup_delimiters(doc)
    return spans.restore(doc)


def repair(text: str, config: RepairConfig = DEFAULT_CONFIG) -> str:
    """
    Deterministic LaTeX delimiter repair for question/solution text.

    Every mathematical expression ends up inside $...$ or $$...$$, spans that
    were already delimited come back byte for byte, and repair(repair(s)) ==
    repair(s). Never raises on malformed input; at worst the text comes back
    with only its legacy delimiters normalized.

    One pass sees its own new spans only as plain text, while the next pass sees
    them as protected tokens (e.g. "$\\frac{a}{b}$ = c" can still grow into one
    equation). Passes repeat until the text stops changing, at most
    config.max_repair_passes times.
    """
    if not text:
        return text
    out = text
    for _ in range(config.max_repair_passes):
        nxt = _repair_once(out, config)
        if nxt == out:
            break
        out = nxt
    return out
