from __future__ import annotations

from pydantic import BaseModel, Field


class ValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class LatexStats(BaseModel):
    inline_math_count: int = 0
    display_math_count: int = 0
    command_count: int = 0
    total_delimiters: int = 0  # inline + display spans
    has_issues: bool = False
