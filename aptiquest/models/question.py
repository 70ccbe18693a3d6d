from sqlalchemy import Column, ForeignKey, String, Text
from sqlalchemy.sql import func
from sqlalchemy.types import JSON, DateTime

from aptiquest.core.database import Base
from aptiquest.core.ids import new_id


class Question(Base):
    __tablename__ = "question"

    id = Column(String(32), primary_key=True, default=new_id)
    question = Column(Text, nullable=False, unique=True)
    options = Column(JSON, nullable=False)
    answer = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    explanation = Column(Text, nullable=False, default="")
    source = Column(String(20), nullable=False, default="manual")
    batch_id = Column(
        String(32), ForeignKey("question_import.id"), nullable=True, index=True
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
