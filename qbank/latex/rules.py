from __future__ import annotations

import re
from typing import Callable, Iterator, Optional

from .config import RepairConfig
from .spans import SpanTable
from .text_utils import COMMAND_RE, MARKUP_TOKEN_RE, _group_end, _markup_density, _script_end

Rule = Callable[[str, SpanTable, RepairConfig], str]

_COMPARISON_OP_RE = re.compile(r"[<>=]")
# A binary operator between two operands: "u + a t", "m/s", "5 - 2".
_ALGEBRA_RE = re.compile(r"[\w)\]][ \t]*(?:[+*/×·^]|[ \t]-[ \t])[ \t]*[\w(\[\\]")

_COMMAND_DEGREE_RE = re.compile(r"\\[a-zA-Z]+[ \t]+\d+[ \t]*\^[ \t]*\{\\circ\}")
_DEGREE_RE = re.compile(r"\d+[ \t]*\^[ \t]*\{\\circ\}")
_SCRIPTED_IDENT_RE = re.compile(r"(?<![\\\w])[a-zA-Z_]\w*(?=[_^]\{)")


def _after_backslash(doc: str, start: int) -> bool:
    # A "$" placed here would read as an escaped "\$".
    return start > 0 and doc[start - 1] == "\\"


def _wrap_fragment(fragment: str, spans: SpanTable) -> Optional[str]:
    """Wrap the stripped fragment as inline math, keeping its outer whitespace."""
    core = fragment.strip()
    if not core or core.endswith("\\"):
        return None
    tok = spans.wrap(core)
    if tok is None:
        return None
    lead = fragment[: len(fragment) - len(fragment.lstrip())]
    trail = fragment[len(fragment.rstrip()):]
    return lead + tok + trail


def _wrap_ranges(doc: str, ranges: Iterator[tuple[int, int]], spans: SpanTable) -> str:
    out: list[str] = []
    pos = 0
    for start, end in ranges:
        frag = doc[start:end]
        if spans.has_placeholder(frag) or "$" in frag or _after_backslash(doc, start):
            continue
        wrapped = _wrap_fragment(frag, spans)
        if wrapped is None:
            continue
        out.append(doc[pos:start])
        out.append(wrapped)
        pos = end
    if not out:
        return doc
    out.append(doc[pos:])
    return "".join(out)


def wrap_trig_degrees(doc: str, spans: SpanTable, config: RepairConfig) -> str:
    """
    \\cos 45^{\\circ} -> $\\cos 45^{\\circ}$, protected before anything else so the
    generic command rule cannot split it into "\\cos" and "45^{\\circ}".
    """
    if "\\circ" not in doc or not config.trig_commands:
        return doc
    names = "|".join(re.escape(n) for n in config.trig_commands)
    trig_re = re.compile(r"(?<!\\)\\(?:" + names + r")[ \t]*\d+[ \t]*\^[ \t]*\{\\circ\}")
    return trig_re.sub(lambda m: spans.wrap(m.group(0)) or m.group(0), doc)


def _opener_re(config: RepairConfig) -> re.Pattern:
    words = "|".join(re.escape(w) for w in config.sentence_openers)
    alts = r"[A-Z][a-z]{2,}|[a-z]{2,}" + ("|" + words if words else "")
    return re.compile(r"^(?:" + alts + r")\s")


def _is_comparison_line(line: str) -> bool:
    # Markup on both sides of a comparison/equality operator.
    if "$" in line:
        return False
    toks = list(MARKUP_TOKEN_RE.finditer(line))
    if len(toks) < 2:
        return False
    first_end = toks[0].end()
    last_start = toks[-1].start()
    return any(first_end <= m.start() < last_start for m in _COMPARISON_OP_RE.finditer(line))


def wrap_comparison_lines(doc: str, spans: SpanTable, config: RepairConfig) -> str:
    """
    A whole line such as "\\frac{a}{b} \\geq \\sqrt{ab} = c_{0}" becomes one inline span.
    Lines that read like a sentence ("Hence ...", "the force ...") are skipped.
    """
    if "\\" not in doc and "{" not in doc:
        return doc
    opener = _opener_re(config)
    lines = doc.split("\n")
    changed = False
    for i, line in enumerate(lines):
        if not line.strip() or spans.has_placeholder(line):
            continue
        if not _is_comparison_line(line):
            continue
        if opener.match(line.strip()):
            continue
        if _markup_density(line) < config.min_line_density:
            continue
        wrapped = _wrap_fragment(line, spans)
        if wrapped is not None:
            lines[i] = wrapped
            changed = True
    return "\n".join(lines) if changed else doc


def _equation_re(spans: SpanTable, config: RepairConfig) -> re.Pattern:
    kw = "|".join(re.escape(k) for k in config.clause_keywords) or r"(?!)"
    # LHS: placeholder, \cmd with flat {..}/[..] arguments, NN^{\circ}, or an identifier;
    # never starting inside a command name.
    lhs = (
        r"(?:" + spans.placeholder_pattern
        + r"|(?<!\\)\\[a-zA-Z]+(?:\{[^{}\n]*\}|\[[^\[\]\n]*\])*"
        + r"|(?<![\\\w])\d+[ \t]*\^[ \t]*\{\\circ\}"
        + r"|(?<![\\\w])[a-zA-Z_]\w*)"
    )
    return re.compile(
        lhs + r"(?:[_^](?:\{[^}\n]+\}|[a-zA-Z0-9]))*[ \t]*=[ \t]*"
        r"(?:(?!(?:" + kw + r")\b).)+?:?"
        r"(?=\s+(?:" + kw + r")\b|\s*\n|[.!?;](?:\s|\Z)|\Z)"
    )


def _is_math_equation(fragment: str, spans: SpanTable) -> bool:
    if MARKUP_TOKEN_RE.search(fragment) or spans.has_placeholder(fragment):
        return True
    # Plain "x = 5" is prose; "v = u + a t" is a formula even without markup.
    rhs = fragment.split("=", 1)[1] if "=" in fragment else ""
    return bool(_ALGEBRA_RE.search(rhs))


def wrap_equations(doc: str, spans: SpanTable, config: RepairConfig) -> str:
    """
    LHS = RHS, stopping at a sentence end, a newline, or a trailing clause
    keyword ("where", "for", ...), which stays outside the math.
    """
    if "=" not in doc:
        return doc
    eq_re = _equation_re(spans, config)

    def _repl(m: re.Match) -> str:
        frag = m.group(0)
        if "$" in frag or _after_backslash(doc, m.start()):
            return frag
        if not _is_math_equation(frag, spans):
            return frag
        return _wrap_fragment(frag, spans) or frag

    return eq_re.sub(_repl, doc)


def _command_ranges(doc: str) -> Iterator[tuple[int, int]]:
    # \cmd, then any {..}/[..] arguments, then any _x / ^{..} scripts.
    pos = 0
    while True:
        m = COMMAND_RE.search(doc, pos)
        if not m:
            return
        end = m.end()
        while True:
            nxt = _group_end(doc, end, "{", "}")
            if nxt < 0:
                nxt = _group_end(doc, end, "[", "]")
            if nxt < 0:
                break
            end = nxt
        while True:
            nxt = _script_end(doc, end, braced_only=False)
            if nxt < 0:
                break
            end = nxt
        yield m.start(), end
        pos = end


def _scripted_ident_ranges(doc: str) -> Iterator[tuple[int, int]]:
    pos = 0
    while True:
        m = _SCRIPTED_IDENT_RE.search(doc, pos)
        if not m:
            return
        end = m.end()
        while True:
            nxt = _script_end(doc, end, braced_only=True)
            if nxt < 0:
                break
            end = nxt
        if end == m.end():
            pos = end
            continue
        yield m.start(), end
        pos = end


def _regex_ranges(pattern: re.Pattern) -> Callable[[str], Iterator[tuple[int, int]]]:
    def _ranges(doc: str) -> Iterator[tuple[int, int]]:
        for m in pattern.finditer(doc):
            yield m.start(), m.end()

    return _ranges


# Most specific first; degree notation before bare commands so "30^{\circ}" stays whole.
_RESIDUAL_MATCHERS: tuple[Callable[[str], Iterator[tuple[int, int]]], ...] = (
    _regex_ranges(_COMMAND_DEGREE_RE),
    _regex_ranges(_DEGREE_RE),
    _scripted_ident_ranges,
    _command_ranges,
)


def wrap_residual_tokens(doc: str, spans: SpanTable, config: RepairConfig) -> str:
    """Wrap whatever isolated markup is left: commands, x_{i}-style identifiers, degrees."""
    for ranges in _RESIDUAL_MATCHERS:
        doc = _wrap_ranges(doc, ranges(doc), spans)
    return doc


# Order matters: whole lines, then equations, then single tokens.
BARE_MATH_RULES: tuple[Rule, ...] = (
    wrap_comparison_lines,
    wrap_equations,
    wrap_residual_tokens,
)
