from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime


class AssignmentStatus(str, Enum):
    DRAFT = "Draft"
    PUBLISHED = "Published"
    COMPLETED = "Completed"


# stati visibili agli studenti
VISIBLE_STATUSES = (AssignmentStatus.PUBLISHED.value, AssignmentStatus.COMPLETED.value)


class AssignmentCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    dueDate: Optional[datetime] = None


class AssignmentUpdate(BaseModel):
    """Update parziale: solo i campi presenti nel body vengono applicati."""
    model_config = ConfigDict(use_enum_values=True)

    title: Optional[str] = None
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    status: Optional[AssignmentStatus] = None


class SubmissionCreate(BaseModel):
    # studentName/studentEmail nel body vengono ignorati: arrivano dal token
    model_config = ConfigDict(extra="ignore")

    answer: Optional[str] = None

    @field_validator("answer", mode="before")
    @classmethod
    def _numbers_as_text(cls, v):
        # {"answer": 42} è una risposta valida quanto {"answer": "42"}
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class Submission(BaseModel):
    id: str
    studentName: str
    studentEmail: str
    answer: str
    submittedAt: datetime
    reviewed: bool = False


class Assignment(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    id: str
    title: str
    description: Optional[str] = None
    dueDate: Optional[datetime] = None
    status: AssignmentStatus = AssignmentStatus.DRAFT
    submissions: List[Submission] = Field(default_factory=list)
    createdAt: datetime
    updatedAt: datetime
