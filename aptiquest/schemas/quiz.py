from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from aptiquest.core.config import settings
from aptiquest.schemas.question import PublicQuestionResponse, QuestionResponse


class QuizCreate(BaseModel):
    title: Optional[str] = Field(None, description="Quiz title")
    categories: Union[List[str], str] = Field(
        default_factory=lambda: ["all"],
        description="Category tags, or 'all' for the whole question bank",
    )
    count: int = Field(
        settings.DEFAULT_QUIZ_COUNT, description="Requested number of questions"
    )
    duration: int = Field(
        settings.DEFAULT_QUIZ_DURATION, description="Time limit in seconds"
    )
    description: str = ""
    created_by: Optional[str] = Field(
        None, description="Creator name, used only when the caller has no username"
    )
    certificate_enabled: bool = False
    certificate_template: str = ""
    certificate_passing_score: int = 0


class QuizSummary(BaseModel):
    id: str
    title: str
    num_questions: int
    duration: int
    categories: List[str]
    certificate_enabled: bool = False
    certificate_passing_score: int = 0


class QuizListItem(QuizSummary):
    created_by: str
    created_at: Optional[datetime] = None


class QuizAttemptResponse(BaseModel):
    """A quiz ready to be taken, questions in presentation order"""

    id: str
    title: str
    categories: List[str]
    num_questions: int
    duration: int
    created_by: str
    certificate_enabled: bool = False
    certificate_template: str = ""
    certificate_passing_score: int = 0
    questions: List[PublicQuestionResponse]


class DemoQuizResponse(BaseModel):
    id: str
    title: str
    categories: List[str]
    num_questions: int
    duration: int
    created_by: str = "system"
    demo: bool = True
    questions: List[QuestionResponse]
