from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from aptiquest.models.user import User


class UserRepository:
    """Repository for User database operations following DDD pattern"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_by_ids(self, user_ids: List[str]) -> List[User]:
        if not user_ids:
            return []
        return self.db.query(User).filter(User.id.in_(user_ids)).all()

    def get_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_by_username_or_email(self, username: str, email: str) -> Optional[User]:
        return (
            self.db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )

    def create(self, user_data: dict) -> User:
        db_user = User(**user_data)
        self.db.add(db_user)
        self.db.commit()
        self.db.refresh(db_user)
        return db_user

    def delete(self, user: User) -> bool:
        self.db.delete(user)
        self.db.commit()
        return True

    def get_all(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def count(self, role: Optional[str] = None) -> int:
        """Count users, optionally only those with the given role"""
        query = self.db.query(User)
        if role:
            query = query.filter(User.role == role)
        return query.count()
