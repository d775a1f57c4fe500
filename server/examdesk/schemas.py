from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Optional, List, Union
from datetime import datetime


Marks = Union[int, float]

DEFAULT_MARKS = 1


class WireModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Question Schemas
# =============================================================================

class QuestionCreate(WireModel):
    """Operator request to register a question."""
    question: str = ""
    options: List[str] = Field(default_factory=list)
    correct_answer: str = ""
    marks: Optional[Marks] = None  # None or 0 falls back to DEFAULT_MARKS
    file_url: Optional[str] = None

    @field_validator("marks")
    @classmethod
    def marks_not_negative(cls, value):
        if value is not None and value < 0:
            raise ValueError("marks must not be negative")
        return value


class Question(WireModel):
    """A committed question as stored and served."""
    id: int = Field(ge=1)
    question: str = ""
    options: List[str] = Field(default_factory=list)
    correct_answer: str = ""
    marks: Marks = DEFAULT_MARKS
    file_url: Optional[str] = None
    created_at: datetime

    @field_validator("marks")
    @classmethod
    def marks_positive(cls, value):
        if value <= 0:
            raise ValueError("marks must be positive")
        return value


class QuestionCreatedResponse(BaseModel):
    message: str
    question: Question


class CandidateQuestion(WireModel):
    """Parser output awaiting operator confirmation. Never persisted."""
    question: str
    options: List[str] = Field(default_factory=list)
    correct_answer: str = ""


# =============================================================================
# Upload Schemas
# =============================================================================

class UploadedFile(BaseModel):
    message: str
    filename: str
    originalname: str
    path: str


class ParsedFile(WireModel):
    message: str
    questions: List[CandidateQuestion]
    file_url: str


# =============================================================================
# Exam Schemas
# =============================================================================

class AnswerEntry(WireModel):
    # Raw JSON values; only integral numbers can resolve to a question.
    question_id: Any = None
    selected_option: Any = None


class SubmitExamRequest(WireModel):
    """Submit all exam answers."""
    student_name: Optional[str] = None
    answers: List[AnswerEntry] = Field(default_factory=list)


class QuestionOutcome(WireModel):
    question_id: int
    question: str
    selected_option: Any = None
    correct_answer: str
    is_correct: bool
    marks: Marks


class ExamResult(WireModel):
    """Student's graded exam."""
    student_name: Optional[str] = None
    score: Marks
    total_marks: Marks
    percentage: str
    results: List[QuestionOutcome]
    submitted_at: datetime
