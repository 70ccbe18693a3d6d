from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.models.result import Result


class ResultRepository:
    """Repository for Result database operations. Results are append-only."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, result_id: str) -> Optional[Result]:
        """Get a result by ID"""
        return self.db.query(Result).filter(Result.id == result_id).first()

    def get_all(self) -> List[Result]:
        """Get all results, newest first"""
        return self.db.query(Result).order_by(Result.attempted_at.desc()).all()

    def get_by_quiz_id(self, quiz_id: str) -> List[Result]:
        """Get results for one quiz ranked by score, ties broken by most recent"""
        return (
            self.db.query(Result)
            .filter(Result.quiz_id == quiz_id)
            .order_by(Result.score.desc(), Result.attempted_at.desc())
            .all()
        )

    def get_by_student_name(self, student_name: str) -> List[Result]:
        """Get a respondent's attempt history, newest first"""
        return (
            self.db.query(Result)
            .filter(Result.student_name == student_name)
            .order_by(Result.attempted_at.desc())
            .all()
        )

    def create(self, result_data: dict) -> Result:
        """Create a new result entry"""
        db_result = Result(**result_data)
        self.db.add(db_result)
        self.db.commit()
        self.db.refresh(db_result)
        return db_result

    def delete(self, result: Result) -> bool:
        """Delete a result entry"""
        self.db.delete(result)
        self.db.commit()
        return True

    def count(self) -> int:
        return self.db.query(Result).count()
