from .config import DEFAULT_CONFIG, MAX_MERGE_PASSES, MAX_REPAIR_PASSES, RepairConfig
from .diagnostics import latex_stats, validate_latex
from .models import LatexStats, ValidationResult
from .pipeline import repair

__all__ = [
    "repair",
    "validate_latex",
    "latex_stats",
    "RepairConfig",
    "DEFAULT_CONFIG",
    "MAX_MERGE_PASSES",
    "MAX_REPAIR_PASSES",
    "LatexStats",
    "ValidationResult",
]
