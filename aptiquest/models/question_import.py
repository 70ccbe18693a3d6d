from sqlalchemy import Column, Integer, String
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from aptiquest.core.database import Base, utcnow
from aptiquest.core.ids import new_id


class QuestionImport(Base):
    """Metadata of one CSV batch upload"""

    __tablename__ = "question_import"

    id = Column(String(32), primary_key=True, default=new_id)
    filename = Column(String(500), nullable=False)
    uploaded_by = Column(String(255), nullable=True)
    inserted = Column(Integer, nullable=False, default=0)
    skipped = Column(Integer, nullable=False, default=0)
    uploaded_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True
    )
