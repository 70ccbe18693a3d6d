from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from aptiquest.models.question import Question


class QuestionRepository:
    """Repository for Question database operations following DDD pattern"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, question_id: str) -> Optional[Question]:
        """Get a question by ID"""
        return self.db.query(Question).filter(Question.id == question_id).first()

    def get_by_ids(self, question_ids: Iterable[str]) -> List[Question]:
        """Get every question whose ID is in question_ids (unordered, missing IDs skipped)"""
        ids = list(question_ids)
        if not ids:
            return []
        return self.db.query(Question).filter(Question.id.in_(ids)).all()

    def get_by_text(self, text: str) -> Optional[Question]:
        """Get a question by its exact prompt text"""
        return self.db.query(Question).filter(Question.question == text).first()

    def get_all(self, category: Optional[str] = None) -> List[Question]:
        """Get all questions, optionally restricted to one category"""
        query = self.db.query(Question)
        if category:
            query = query.filter(Question.category == category)
        return query.order_by(Question.created_at.desc()).all()

    def get_ids_by_categories(self, categories: Optional[List[str]]) -> List[str]:
        """Get question IDs in the given categories (None means every category)"""
        query = self.db.query(Question.id)
        if categories is not None:
            query = query.filter(Question.category.in_(categories))
        return [row[0] for row in query.all()]

    def get_by_categories(self, categories: Optional[List[str]]) -> List[Question]:
        query = self.db.query(Question)
        if categories is not None:
            query = query.filter(Question.category.in_(categories))
        return query.all()

    def get_all_texts(self) -> set:
        return {row[0] for row in self.db.query(Question.question).all()}

    def create(self, question_data: dict) -> Question:
        """Create a new question"""
        db_question = Question(**question_data)
        self.db.add(db_question)
        self.db.commit()
        self.db.refresh(db_question)
        return db_question

    def create_bulk(self, question_data_list: List[dict]) -> List[Question]:
        """Create multiple questions"""
        db_question_list = [Question(**data) for data in question_data_list]
        self.db.add_all(db_question_list)
        self.db.commit()
        return db_question_list

    def update(self, question: Question, update_data: dict) -> Question:
        """Update a question"""
        for field, value in update_data.items():
            setattr(question, field, value)
        self.db.commit()
        self.db.refresh(question)
        return question

    def delete(self, question: Question) -> bool:
        """Delete a question"""
        self.db.delete(question)
        self.db.commit()
        return True

    def delete_by_batch_id(self, batch_id: str) -> int:
        """Delete every question imported in a batch (uncommitted)"""
        return (
            self.db.query(Question)
            .filter(Question.batch_id == batch_id)
            .delete(synchronize_session=False)
        )

    def delete_all(self) -> int:
        """Delete every question (uncommitted)"""
        return self.db.query(Question).delete(synchronize_session=False)
