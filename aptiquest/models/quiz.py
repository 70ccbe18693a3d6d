from sqlalchemy import Boolean, Column, Integer, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import JSON, DateTime

from aptiquest.core.database import Base, utcnow
from aptiquest.core.ids import new_id


class Quiz(Base):
    __tablename__ = "quiz"

    id = Column(String(32), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    categories = Column(JSON, nullable=False, default=lambda: ["all"])
    num_questions = Column(Integer, nullable=False)
    # Assembly order, fixed at creation
    question_ids = Column(JSON, nullable=False, default=list)
    duration = Column(Integer, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_by = Column(String(255), nullable=False)
    certificate_enabled = Column(Boolean, nullable=False, default=False)
    certificate_template = Column(String(255), nullable=False, default="")
    certificate_passing_score = Column(Integer, nullable=False, default=0)
    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True
    )
