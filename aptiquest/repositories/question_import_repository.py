from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.models.question_import import QuestionImport


class QuestionImportRepository:
    """Repository for CSV import batch metadata"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, batch_id: str) -> Optional[QuestionImport]:
        return self.db.query(QuestionImport).filter(QuestionImport.id == batch_id).first()

    def get_all(self) -> List[QuestionImport]:
        return (
            self.db.query(QuestionImport)
            .order_by(QuestionImport.uploaded_at.desc())
            .all()
        )

    def add(self, import_data: dict) -> QuestionImport:
        """Stage a batch record in the current transaction"""
        db_import = QuestionImport(**import_data)
        self.db.add(db_import)
        self.db.flush()
        return db_import

    def delete(self, batch: QuestionImport) -> None:
        """Stage deletion of a batch record"""
        self.db.delete(batch)

    def delete_all(self) -> int:
        return self.db.query(QuestionImport).delete(synchronize_session=False)
