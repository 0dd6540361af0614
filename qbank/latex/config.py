from __future__ import annotations

from dataclasses import dataclass

# Upper bound on merge passes; each pass is linear in the document length.
MAX_MERGE_PASSES = 15
# Upper bound on whole-pipeline passes while looking for a fixed point.
MAX_REPAIR_PASSES = 5


@dataclass(frozen=True)
class RepairConfig:
    """
    Tunable data for the delimiter repair heuristics.

    The word lists are English-specific and empirically tuned on exam solutions.
    Keep them as-is unless a concrete corpus shows a regression.
    """

    # Lines opening with one of these (or any ordinary word) are prose, not a formula.
    sentence_openers: tuple[str, ...] = (
        "Hence",
        "Therefore",
        "Since",
        "Thus",
        "Then",
        "Also",
        "According",
    )
    # Keywords that start a trailing clause after an equation: "v = u + at where t is time".
    clause_keywords: tuple[str, ...] = ("where", "with", "when", "and", "exactly", "for")
    trig_commands: tuple[str, ...] = ("sin", "cos", "tan", "cot", "sec", "csc")
    # Block environments that are display math on their own.
    math_environments: tuple[str, ...] = (
        "equation",
        "equation*",
        "align",
        "align*",
        "aligned",
        "alignat",
        "alignat*",
        "gather",
        "gather*",
        "gathered",
        "multline",
        "multline*",
        "eqnarray",
        "eqnarray*",
        "split",
    )
    min_line_density: int = 2
    max_merge_passes: int = MAX_MERGE_PASSES
    max_repair_passes: int = MAX_REPAIR_PASSES


DEFAULT_CONFIG = RepairConfig()
