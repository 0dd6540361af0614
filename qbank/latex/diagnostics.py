from __future__ import annotations

from .models import LatexStats, ValidationResult
from .text_utils import COMMAND_RE, DISPLAY_MATH_RE, DOLLAR_RE, INLINE_MATH_RE


def _brace_balance(text: str) -> tuple[int, int]:
    """Return (final depth, lowest depth seen); escaped \\{ and \\} are ignored."""
    depth = 0
    lowest = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            lowest = min(lowest, depth)
        i += 1
    return depth, lowest


def validate_latex(text: str) -> ValidationResult:
    """
    Read-only delimiter/brace check. Problems are reported, never raised.
    """
    errors: list[str] = []
    warnings: list[str] = []
    s = text or ""

    if len(DOLLAR_RE.findall(s)) % 2 != 0:
        errors.append("Unmatched $ delimiters")

    depth, lowest = _brace_balance(s)
    if depth != 0 or lowest < 0:
        errors.append("Unmatched braces")

    if COMMAND_RE.search(s) and not DOLLAR_RE.search(s):
        warnings.append("Contains LaTeX commands but no delimiters - needs wrapping")

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def latex_stats(text: str) -> LatexStats:
    s = text or ""
    display = len(DISPLAY_MATH_RE.findall(s))
    # Count inline spans outside display blocks so "$$a$$" is not also one inline span.
    rest = DISPLAY_MATH_RE.sub(" ", s)
    inline = len(INLINE_MATH_RE.findall(rest))
    validation = validate_latex(s)
    return LatexStats(
        inline_math_count=inline,
        display_math_count=display,
        command_count=len(COMMAND_RE.findall(s)),
        total_delimiters=inline + display,
        has_issues=(not validation.is_valid) or bool(validation.warnings),
    )
