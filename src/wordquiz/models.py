from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Direction(str, Enum):
    FORWARD = "forward"  # source -> target
    REVERSE = "reverse"  # target -> source


class AnswerStyle(str, Enum):
    CHOICE = "choice"
    INPUT = "input"


class SessionKind(str, Enum):
    NORMAL = "normal"
    REMEDIATION = "remediation"


class SessionStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Word(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source: str
    target: str
    alt_source: str = ""
    category: str = ""
    input_eligible: bool = True


class PerformanceRecord(BaseModel):
    times_seen: int = 0
    times_correct: int = 0
    times_wrong: int = 0
    last_answered_at: Optional[datetime] = None

    @field_validator("last_answered_at")
    @classmethod
    def assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Timestamps without an offset are taken as UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class Question(BaseModel):
    word_id: str
    prompt: str
    answer: str
    acceptable_answers: List[str]
    options: List[str] = Field(default_factory=list)
    style: AnswerStyle = AnswerStyle.CHOICE


class AnswerRecord(BaseModel):
    word_id: str
    prompt: str
    user_answer: str
    correct_answer: str
    is_correct: bool


class SessionSettings(BaseModel):
    direction: Direction = Direction.FORWARD
    style: AnswerStyle = AnswerStyle.CHOICE
    category: str = "all"
    # None means every word in the filtered pool
    count: Optional[int] = Field(default=None, ge=1)


class Session(BaseModel):
    words: List[Word]
    questions: List[Question] = Field(default_factory=list)
    kind: SessionKind = SessionKind.NORMAL
    cursor: int = 0
    correct_count: int = 0
    missed: List[str] = Field(default_factory=list)
    answers: List[AnswerRecord] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.words)

    @property
    def status(self) -> SessionStatus:
        if self.cursor >= len(self.words):
            return SessionStatus.COMPLETED
        return SessionStatus.IN_PROGRESS

    @property
    def current_word(self) -> Optional[Word]:
        if self.cursor < len(self.words):
            return self.words[self.cursor]
        return None

    def is_judged(self, index: Optional[int] = None) -> bool:
        index = self.cursor if index is None else index
        return index < len(self.answers)


class SessionSummary(BaseModel):
    kind: SessionKind
    correct_count: int
    total_questions: int
    score_percentage: float
    message: str
    missed_count: int
    answers: List[AnswerRecord]


class CategoryInfo(BaseModel):
    id: str
    name: str
    count: int


PerformanceMap = Dict[str, PerformanceRecord]
CountOption = Union[int, str, None]
