from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.models.quiz import Quiz


class QuizRepository:
    """Repository for Quiz database operations following DDD pattern"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, quiz_id: str) -> Optional[Quiz]:
        """Get a quiz entry by ID"""
        return self.db.query(Quiz).filter(Quiz.id == quiz_id).first()

    def get_by_ids(self, quiz_ids: List[str]) -> List[Quiz]:
        """Get quiz entries for a set of IDs (missing IDs skipped)"""
        if not quiz_ids:
            return []
        return self.db.query(Quiz).filter(Quiz.id.in_(quiz_ids)).all()

    def create(self, quiz_data: dict) -> Quiz:
        """Create a new quiz entry"""
        db_quiz = Quiz(**quiz_data)
        self.db.add(db_quiz)
        self.db.commit()
        self.db.refresh(db_quiz)
        return db_quiz

    def delete(self, quiz: Quiz) -> bool:
        """Delete a quiz entry"""
        self.db.delete(quiz)
        self.db.commit()
        return True

    def get_all(self) -> List[Quiz]:
        """Get all quiz entries, newest first"""
        return self.db.query(Quiz).order_by(Quiz.created_at.desc()).all()

    def count(self) -> int:
        return self.db.query(Quiz).count()
