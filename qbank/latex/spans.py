from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

# Private-use code points, BMP first; never produced by any rewrite rule.
_MARKER_RANGES = (
    (0xE000, 0xF8FF),
    (0xF0000, 0xFFFFD),
    (0x100000, 0x10FFFD),
)

# Already-delimited math, in priority order: display before inline.
_EXISTING_MATH_RE = re.compile(
    r"(?P<display>(?<!\\)\\\[[\s\S]+?(?<!\\)\\\]|(?<!\\)\$\$[\s\S]+?(?<!\\)\$\$)"
    r"|(?P<inline>(?<!\\)\\\([\s\S]+?(?<!\\)\\\)|(?<!\\)\$[^$\n]+?(?<!\\)\$)"
)


@dataclass(frozen=True)
class ProtectedSpan:
    index: int
    original: str
    inner: str
    display: bool = False


def _pick_markers(text: str) -> tuple[str, str]:
    used = set(text or "")
    free: list[str] = []
    for start, end in _MARKER_RANGES:
        for cp in range(start, end + 1):
            ch = chr(cp)
            if ch not in used:
                free.append(ch)
                if len(free) == 2:
                    return free[0], free[1]
    # Only reachable for a text holding every private-use code point.
    raise ValueError("no free private-use characters for placeholders")


def _strip_delimiters(original: str) -> str:
    for left, right in (("$$", "$$"), ("\\[", "\\]"), ("\\(", "\\)"), ("$", "$")):
        if len(original) >= len(left) + len(right) and original.startswith(left) and original.endswith(right):
            return original[len(left): len(original) - len(right)]
    return original


class SpanTable:
    """
    Ordered, append-only table of protected spans for one repair call.

    Each span is swapped out of the document for a placeholder token
    `<open><index><close>`, where open/close are private-use characters that
    do not occur in the source text, so a token can never collide with
    document content or be produced by a rewrite rule.
    """

    def __init__(self, text: str) -> None:
        self._open, self._close = _pick_markers(text)
        self._spans: list[ProtectedSpan] = []
        self.placeholder_pattern = re.escape(self._open) + r"(\d+)" + re.escape(self._close)
        self._placeholder_re = re.compile(self.placeholder_pattern)

    def __len__(self) -> int:
        return len(self._spans)

    @property
    def spans(self) -> tuple[ProtectedSpan, ...]:
        return tuple(self._spans)

    def token(self, index: int) -> str:
        return f"{self._open}{index}{self._close}"

    def has_placeholder(self, s: str) -> bool:
        return bool(s) and (self._open in s)

    def _span_of(self, m: re.Match) -> ProtectedSpan:
        return self._spans[int(m.group(1))]

    def _has_display_placeholder(self, s: str) -> bool:
        return any(self._span_of(m).display for m in self._placeholder_re.finditer(s))

    def _flatten(self, s: str) -> str:
        # Inline spans inside a new span contribute their bare content, so
        # delimiters never nest ("$x$ = $y$" -> "x = y").
        def _repl(m: re.Match) -> str:
            span = self._span_of(m)
            return m.group(0) if span.display else span.inner

        return self._placeholder_re.sub(_repl, s)

    def protect(self, original: str, display: bool = False) -> str:
        original = self._flatten(original)
        span = ProtectedSpan(
            index=len(self._spans),
            original=original,
            inner=_strip_delimiters(original),
            display=display,
        )
        self._spans.append(span)
        return self.token(span.index)

    def wrap(self, content: str, display: bool = False) -> Optional[str]:
        """
        Delimit content as math and protect the result.

        Returns None when inline content would swallow a display span; the
        caller leaves that text alone.
        """
        if not display and self._has_display_placeholder(content):
            return None
        delim = "$$" if display else "$"
        return self.protect(delim + content + delim, display=display)

    def protect_existing(self, doc: str) -> str:
        """Swap every already-delimited math span for a placeholder, scanning left to right."""
        if not doc:
            return doc

        def _repl(m: re.Match) -> str:
            return self.protect(m.group(0), display=m.group("display") is not None)

        return _EXISTING_MATH_RE.sub(_repl, doc)

    def restore(self, doc: str, display: Optional[bool] = None) -> str:
        """
        Put protected text back, newest span first so nested tokens resolve.
        display=False restores inline spans only, True display spans only.
        """
        if not self.has_placeholder(doc):
            return doc
        for span in reversed(self._spans):
            if display is not None and span.display != display:
                continue
            tok = self.token(span.index)
            if tok in doc:
                doc = doc.replace(tok, span.original)
        return doc
