from sqlalchemy import Column, Integer, String
from sqlalchemy.types import JSON, DateTime

from aptiquest.core.database import Base, utcnow
from aptiquest.core.ids import new_id


class Result(Base):
    __tablename__ = "result"

    id = Column(String(32), primary_key=True, default=new_id)
    # Plain references: quizzes and users may be deleted after the attempt
    quiz_id = Column(String(32), nullable=False, index=True)
    user_id = Column(String(32), nullable=True, index=True)
    student_name = Column(String(255), nullable=False, index=True)
    question_order = Column(JSON, nullable=False, default=list)
    answers = Column(JSON, nullable=False, default=list)
    score = Column(Integer, nullable=False)
    total_questions = Column(Integer, nullable=False)
    correct_answers = Column(Integer, nullable=False, default=0)
    wrong_answers = Column(Integer, nullable=False, default=0)
    time_taken = Column(Integer, nullable=False, default=0)
    attempted_at = Column(DateTime(timezone=True), default=utcnow, index=True)
