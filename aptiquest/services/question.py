import csv
import io
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.core.database import db_errors
from aptiquest.core.exceptions import ConflictError, NotFoundError, ValidationError
from aptiquest.core.ids import ensure_valid_id, new_id
from aptiquest.domain.quiz_domain import QuizDomain
from aptiquest.repositories.question_import_repository import QuestionImportRepository
from aptiquest.repositories.question_repository import QuestionRepository
from aptiquest.schemas.question import (
    ALL_CATEGORIES,
    CATEGORIES,
    CategoryEnum,
    CSVImportResponse,
    QuestionCreate,
    QuestionImportResponse,
    QuestionResponse,
    QuestionUpdate,
    SourceEnum,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "question",
    "option1",
    "option2",
    "option3",
    "option4",
    "answer",
    "category",
    "explanation",
]

SAMPLE_ROWS = [
    ["What is 2+2?", "2", "3", "4", "5", "4", "quantitative", "Because 2+2 = 4"],
    [
        "Which planet is red?",
        "Earth",
        "Mars",
        "Jupiter",
        "Saturn",
        "Mars",
        "general",
        "Mars looks red due to iron oxide",
    ],
]


def clean_options(options: Optional[List[str]]) -> List[str]:
    """Trim options and drop the blank ones"""
    return [o.strip() for o in options or [] if o is not None and o.strip()]


class QuestionService:
    """Question bank management: manual entry, edits, deletion and CSV batches"""

    def __init__(self, db: Session):
        self.db = db
        self.question_repository = QuestionRepository(db)
        self.import_repository = QuestionImportRepository(db)

    def list_questions(self, category: Optional[str] = None) -> List[QuestionResponse]:
        tag = (category or "").strip().lower()
        with db_errors(self.db, "fetching questions"):
            questions = self.question_repository.get_all(
                tag if tag and tag != ALL_CATEGORIES else None
            )
        return [QuestionResponse.model_validate(q) for q in questions]

    def create_question(self, payload: QuestionCreate) -> QuestionResponse:
        text = (payload.question or "").strip()
        answer = (payload.answer or "").strip()
        options = clean_options(payload.options)
        if not text or not answer or len(options) < 2:
            raise ValidationError(
                "Please provide question, at least two options, and the correct answer."
            )
        category = self._category(payload.category)

        with db_errors(self.db, "adding question"):
            if self.question_repository.get_by_text(text):
                raise ConflictError("Question already exists")
            question = self.question_repository.create(
                {
                    "question": text,
                    "options": options,
                    "answer": answer,
                    "category": category,
                    "explanation": (payload.explanation or "").strip(),
                    "source": payload.source.value,
                }
            )

        logger.info(f"✅ Question added: {question.id} [{category}]")
        return QuestionResponse.model_validate(question)

    def update_question(self, question_id: str, payload: QuestionUpdate) -> QuestionResponse:
        """
        Edit a question in place. Results already recorded keep their own
        snapshot and are not affected.
        """
        question_id = ensure_valid_id(question_id, "question ID")
        update_data = payload.model_dump(exclude_unset=True)

        if "category" in update_data:
            if update_data["category"] is None:
                del update_data["category"]
            else:
                update_data["category"] = self._category(update_data["category"])
        if "options" in update_data:
            options = clean_options(update_data["options"])
            if len(options) < 2:
                raise ValidationError("At least two options are required")
            update_data["options"] = options
        for field in ("question", "answer"):
            if field in update_data:
                if update_data[field] is None:
                    del update_data[field]
                else:
                    update_data[field] = update_data[field].strip()
        if "explanation" in update_data:
            update_data["explanation"] = (update_data["explanation"] or "").strip()

        with db_errors(self.db, "updating question"):
            question = self.question_repository.get_by_id(question_id)
            if not question:
                raise NotFoundError("Question not found")
            if "question" in update_data:
                existing = self.question_repository.get_by_text(update_data["question"])
                if existing and existing.id != question.id:
                    raise ConflictError("Question already exists")
            question = self.question_repository.update(question, update_data)

        return QuestionResponse.model_validate(question)

    def delete_question(self, question_id: str) -> None:
        question_id = ensure_valid_id(question_id, "question ID")
        with db_errors(self.db, "deleting question"):
            question = self.question_repository.get_by_id(question_id)
            if not question:
                raise NotFoundError("Question not found")
            self.question_repository.delete(question)
        logger.info(f"🗑️ Question deleted: {question_id}")

    def delete_all_questions(self) -> int:
        """Remove every question along with all CSV batch metadata"""
        with db_errors(self.db, "deleting questions"):
            deleted = self.question_repository.delete_all()
            self.import_repository.delete_all()
            self.db.commit()
        logger.info(f"🗑️ Deleted {deleted} questions and all CSV imports")
        return deleted

    def import_csv(
        self, filename: str, content: bytes, uploaded_by: Optional[str] = None
    ) -> CSVImportResponse:
        """
        Import questions from a CSV file as one batch.

        Rows missing a question or answer, with an unknown category, with
        fewer than two options, or duplicating an existing question are
        skipped and counted.
        """
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise ValidationError("CSV file must be UTF-8 encoded")

        reader = csv.DictReader(io.StringIO(text))
        if not reader.fieldnames or "question" not in reader.fieldnames:
            raise ValidationError("CSV header must include a 'question' column")

        batch_id = new_id()
        inserted, skipped = [], 0

        with db_errors(self.db, "processing CSV"):
            seen = self.question_repository.get_all_texts()
            for row in reader:
                question = self._row_to_question(row, seen, batch_id)
                if question is None:
                    skipped += 1
                    continue
                seen.add(question["question"])
                inserted.append(question)

            self.import_repository.add(
                {
                    "id": batch_id,
                    "filename": filename or "upload.csv",
                    "uploaded_by": uploaded_by,
                    "inserted": len(inserted),
                    "skipped": skipped,
                }
            )
            if inserted:
                self.question_repository.create_bulk(inserted)
            else:
                self.db.commit()

        logger.info(
            f"📥 CSV processed: {filename} batch={batch_id} "
            f"inserted={len(inserted)} skipped={skipped}"
        )
        return CSVImportResponse(batch_id=batch_id, inserted=len(inserted), skipped=skipped)

    @staticmethod
    def _row_to_question(row: dict, seen: set, batch_id: str) -> Optional[dict]:
        text = (row.get("question") or "").strip()
        answer = (row.get("answer") or "").strip()
        if not text or not answer:
            return None

        category = (row.get("category") or "").strip().lower() or CategoryEnum.GENERAL.value
        if category not in CATEGORIES:
            return None
        if text in seen:
            return None

        options = clean_options([row.get(f"option{i}") for i in range(1, 5)])
        if len(options) < 2:
            return None

        return {
            "question": text,
            "options": options,
            "answer": answer,
            "category": category,
            "explanation": (row.get("explanation") or "").strip(),
            "source": SourceEnum.CSV.value,
            "batch_id": batch_id,
        }

    def list_imports(self) -> List[QuestionImportResponse]:
        with db_errors(self.db, "fetching CSV imports"):
            batches = self.import_repository.get_all()
        return [QuestionImportResponse.model_validate(b) for b in batches]

    def delete_import(self, batch_id: str) -> int:
        """Delete a CSV batch and every question it created"""
        batch_id = ensure_valid_id(batch_id, "batch ID")
        with db_errors(self.db, "deleting CSV import"):
            batch = self.import_repository.get_by_id(batch_id)
            if not batch:
                raise NotFoundError("CSV import not found")
            deleted = self.question_repository.delete_by_batch_id(batch_id)
            self.import_repository.delete(batch)
            self.db.commit()
        logger.info(f"🗑️ CSV import {batch_id} deleted with {deleted} questions")
        return deleted

    @staticmethod
    def sample_csv() -> str:
        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSV_COLUMNS)
        writer.writerows(SAMPLE_ROWS)
        return buffer.getvalue()

    @staticmethod
    def _category(category: Optional[str]) -> str:
        """Normalize a single question category; 'all' is not a question category"""
        tag = QuizDomain.normalize_category(
            (category or "").strip() or CategoryEnum.GENERAL.value
        )
        if tag == ALL_CATEGORIES:
            raise ValidationError(f"Invalid category: {tag}")
        return tag
