# Keep source ASCII-stable: UI strings live here.
S = {
    "title": "Question Bank Admin",
    "filters": "Filters",
    "subject": "Subject",
    "chapter": "Chapter",
    "topic": "Topic",
    "status": "Status",
    "level": "Difficulty level",
    "level_any": "Any",
    "page": "Page",
    "user": "Signed in as",
    "not_admin": "You are not allowed to use this dashboard.",
    "need_topic": "Pick a subject, chapter and topic to list questions.",
    "empty": "No questions match these filters.",
    "question": "Question",
    "solution": "Solution",
    "verify": "Verify",
    "discard": "Discard",
    "restore": "Back to pending",
    "quick_fix": "Quick LaTeX fix",
    "apply_fix": "Apply fix",
    "before": "Before",
    "after": "After",
    "no_change": "Already clean, nothing to change.",
    "valid": "Delimiters balanced",
    "invalid": "Delimiter problems",
    "duplicates": "Possible duplicates",
}

S.update(
    {
        "page_review": "Review questions",
        "page_playground": "LaTeX fix playground",
        "playground_hint": "Paste question or solution text to preview the quick fix.",
        "run_fix": "Preview fix",
        "text_required": "Text is required",
        "saved": "Saved",
        "prev": "Prev",
        "next": "Next",
        "open": "Open",
        "prev_question": "Previous question",
        "next_question": "Next question",
        "back_to_list": "Back to list",
        "counts": "Pending {PENDING} | Verified {VERIFIED} | Discarded {DISCARDED}",
    }
)
