from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from aptiquest.schemas.question import QuestionResponse

UNKNOWN_QUESTION = "Unknown question"
NO_EXPLANATION = "No explanation provided"


class ResultCreate(BaseModel):
    quiz_id: Optional[str] = Field(None, description="ID of the attempted quiz")
    student_name: Optional[str] = Field(None, description="Respondent display name")
    user_id: Optional[str] = Field(None, description="Respondent user ID")
    answers: Optional[Dict[str, Optional[str]]] = Field(
        None,
        description="Map of question ID to the chosen answer text (null when unanswered)",
    )
    score: Optional[int] = Field(None, description="Client-computed score")
    total: Optional[int] = Field(None, description="Client-computed total")
    time_taken: int = Field(0, description="Elapsed time in seconds", ge=0)
    question_order: Optional[List[str]] = Field(
        None, description="Question IDs in the order they were presented"
    )


class AnswerSnapshot(BaseModel):
    question_id: str
    question: str
    options: List[str] = []
    correct_answer: str = ""
    explanation: str = NO_EXPLANATION
    chosen_answer: Optional[str] = None
    correct: bool = False


class QuizRef(BaseModel):
    id: str
    title: str
    categories: List[str] = []
    num_questions: int = 0
    duration: int = 0
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserRef(BaseModel):
    id: str
    username: str
    email: str
    role: str

    class Config:
        from_attributes = True


class ResultResponse(BaseModel):
    id: str
    quiz_id: str
    user_id: Optional[str] = None
    student_name: str
    question_order: List[str]
    answers: List[AnswerSnapshot]
    score: int
    total_questions: int
    correct_answers: int
    wrong_answers: int
    time_taken: int
    attempted_at: datetime

    class Config:
        from_attributes = True


class ResultListItem(ResultResponse):
    quiz: Optional[QuizRef] = None
    user: Optional[UserRef] = None


class ResultDetail(ResultListItem):
    questions: List[QuestionResponse] = Field(
        default_factory=list,
        description="Current questions resolved in the stored presentation order",
    )


class ResultListResponse(BaseModel):
    results: List[ResultListItem]
