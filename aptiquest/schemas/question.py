from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, validator


class CategoryEnum(str, Enum):
    QUANTITATIVE = "quantitative"
    LOGICAL = "logical"
    VERBAL = "verbal"
    NUMERICAL = "numerical"
    SPATIAL = "spatial"
    MECHANICAL = "mechanical"
    TECHNICAL = "technical"
    REASONING = "reasoning"
    GENERAL = "general"


# Sentinel tag meaning "no category filter"
ALL_CATEGORIES = "all"
CATEGORIES = [c.value for c in CategoryEnum]


class SourceEnum(str, Enum):
    MANUAL = "manual"
    CSV = "csv"


class QuestionBase(BaseModel):
    question: str
    options: List[str]
    category: str
    explanation: str = ""


class QuestionCreate(BaseModel):
    question: Optional[str] = None
    options: Optional[List[str]] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    explanation: Optional[str] = None
    source: SourceEnum = SourceEnum.MANUAL


class QuestionUpdate(BaseModel):
    question: Optional[str] = None
    options: Optional[List[str]] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    explanation: Optional[str] = None

    @validator("question", "answer")
    def validate_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Field cannot be empty")
        return v


class QuestionResponse(QuestionBase):
    id: str
    answer: str
    source: str = SourceEnum.MANUAL.value
    batch_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PublicQuestionResponse(QuestionBase):
    """A question as served to a test-taker: the correct answer is withheld"""

    id: str

    class Config:
        from_attributes = True


class QuestionImportResponse(BaseModel):
    id: str
    filename: str
    uploaded_by: Optional[str] = None
    inserted: int = 0
    skipped: int = 0
    uploaded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CSVImportResponse(BaseModel):
    batch_id: str = Field(..., description="Identifier of the import batch")
    inserted: int = Field(..., description="Number of questions created")
    skipped: int = Field(..., description="Number of rows rejected")
