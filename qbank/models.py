from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .latex.models import LatexStats, ValidationResult


class QuestionStatus(str, Enum):
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    DISCARDED = "DISCARDED"


class Question(BaseModel):
    question_id: str
    subject: str
    chapter_name: str
    identified_topic: str
    difficulty_level: Optional[int] = None
    question_text: str = ""
    solution_text: str = ""
    status: QuestionStatus = QuestionStatus.PENDING
    verified_by: Optional[str] = None
    verified_at: Optional[float] = None
    created_at: float = 0.0
    updated_at: float = 0.0


class QuestionPage(BaseModel):
    questions: list[Question] = Field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 7
    total_pages: int = 0


class FixPreview(BaseModel):
    question_id: Optional[str] = None
    field: Optional[str] = None
    before: str
    after: str
    changed: bool
    validation: ValidationResult
    stats: LatexStats
