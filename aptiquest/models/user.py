from sqlalchemy import Column, String
from sqlalchemy.sql import func
from sqlalchemy.types import DateTime

from aptiquest.core.database import Base
from aptiquest.core.ids import new_id


class User(Base):
    __tablename__ = "user"

    id = Column(String(32), primary_key=True, default=new_id)
    username = Column(String(150), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True)
    role = Column(String(20), nullable=False, default="student")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
