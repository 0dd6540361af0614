from __future__ import annotations

import sys
from typing import Iterable, Optional

from .latex import latex_stats, repair, validate_latex
from .models import FixPreview
from .question_store import EDITABLE_FIELDS, QuestionStore


def preview_fix(text: str, question_id: Optional[str] = None, field: Optional[str] = None) -> FixPreview:
    """Run the quick (pattern-based) LaTeX fix on raw text without storing anything."""
    if not isinstance(text, str) or not text:
        raise ValueError("Text is required")
    fixed = repair(text)
    return FixPreview(
        question_id=question_id,
        field=field,
        before=text,
        after=fixed,
        changed=fixed != text,
        validation=validate_latex(fixed),
        stats=latex_stats(fixed),
    )


def fix_question(
    store: QuestionStore,
    question_id: str,
    fields: Iterable[str] = EDITABLE_FIELDS,
    apply: bool = False,
) -> list[FixPreview]:
    """
    Preview (and optionally write back) the quick fix for a stored question.
    Empty fields are skipped.
    """
    question = store.get(question_id)
    previews: list[FixPreview] = []
    for field in fields:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"field must be one of {EDITABLE_FIELDS}, got {field!r}")
        text = getattr(question, field) or ""
        if not text.strip():
            continue
        preview = preview_fix(text, question_id=question_id, field=field)
        if apply and preview.changed:
            store.update_text(question_id, field, preview.after)
            print(f"[latex_fix] {question_id}.{field} updated", file=sys.stderr, flush=True)
        previews.append(preview)
    return previews
