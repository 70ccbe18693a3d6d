import logging
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.core.config import settings
from aptiquest.core.database import db_errors
from aptiquest.core.exceptions import NotFoundError, ValidationError
from aptiquest.core.ids import ensure_valid_id
from aptiquest.domain.quiz_domain import QuizDomain
from aptiquest.repositories.question_repository import QuestionRepository
from aptiquest.repositories.quiz_repository import QuizRepository
from aptiquest.schemas.quiz import (
    DemoQuizResponse,
    QuizAttemptResponse,
    QuizCreate,
    QuizListItem,
    QuizSummary,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class QuizService:
    """Assembles quizzes from the question bank and serves them to test-takers"""

    def __init__(self, db: Session):
        self.db = db
        self.quiz_repository = QuizRepository(db)
        self.question_repository = QuestionRepository(db)

    def create_quiz(self, quiz: QuizCreate, creator: Optional[str] = None) -> QuizSummary:
        """
        Create a quiz by sampling questions from the requested categories.

        The sampled IDs are stored in assembly order; the count is clamped to
        the pool size. Raises ValidationError for bad input and NotFoundError
        when no question matches the categories.
        """
        categories = QuizDomain.normalize_categories(quiz.categories)
        if quiz.count < 1:
            raise ValidationError("Question count must be at least 1")
        if quiz.duration < 1:
            raise ValidationError("Duration must be at least 1 second")

        created_by = creator or (quiz.created_by or "").strip()
        if not created_by:
            raise ValidationError("Quiz creator is required")

        with db_errors(self.db, "creating quiz"):
            pool = self.question_repository.get_ids_by_categories(
                QuizDomain.category_filter(categories)
            )
            if not pool:
                raise NotFoundError("No questions available for chosen categories")

            selected_ids = QuizDomain.sample(pool, quiz.count)
            title = (quiz.title or "").strip() or f"Quiz ({', '.join(categories)})"

            db_quiz = self.quiz_repository.create(
                {
                    "title": title,
                    "categories": categories,
                    "num_questions": len(selected_ids),
                    "question_ids": selected_ids,
                    "duration": quiz.duration,
                    "description": quiz.description or "",
                    "created_by": created_by,
                    "certificate_enabled": quiz.certificate_enabled,
                    "certificate_template": quiz.certificate_template or "",
                    "certificate_passing_score": quiz.certificate_passing_score,
                }
            )

        logger.info(
            f"✅ Quiz created: {db_quiz.title} ({db_quiz.id}) "
            f"with {len(selected_ids)} of {len(pool)} pooled questions"
        )
        return QuizDomain.to_summary(db_quiz)

    def get_quiz_for_attempt(self, quiz_id: str) -> QuizAttemptResponse:
        """
        Load a quiz with its questions in a fresh random order.

        IDs that no longer resolve are dropped. The correct answers are not
        part of the returned payload.
        """
        quiz_id = ensure_valid_id(quiz_id, "quiz ID")

        with db_errors(self.db, "fetching quiz"):
            quiz = self.quiz_repository.get_by_id(quiz_id)
            if not quiz:
                raise NotFoundError("Quiz not found")

            found = {
                q.id: q for q in self.question_repository.get_by_ids(quiz.question_ids or [])
            }

        resolved = [found[qid] for qid in quiz.question_ids or [] if qid in found]
        dropped = len(quiz.question_ids or []) - len(resolved)
        if dropped:
            logger.warning(f"⚠️ Quiz {quiz.id}: {dropped} question(s) no longer exist")
        if not resolved:
            raise NotFoundError("No questions available for this quiz")

        questions = [QuizDomain.to_public_question(q) for q in QuizDomain.shuffled(resolved)]

        logger.info(f"🚀 Serving {len(questions)} questions for quiz \"{quiz.title}\"")
        return QuizAttemptResponse(
            id=quiz.id,
            title=quiz.title,
            categories=QuizDomain.display_categories(quiz.categories),
            num_questions=quiz.num_questions,
            duration=quiz.duration,
            created_by=quiz.created_by,
            certificate_enabled=bool(quiz.certificate_enabled),
            certificate_template=quiz.certificate_template or "",
            certificate_passing_score=quiz.certificate_passing_score or 0,
            questions=questions,
        )

    def list_quizzes(self) -> List[QuizListItem]:
        with db_errors(self.db, "fetching quizzes"):
            quizzes = self.quiz_repository.get_all()
        return [QuizDomain.to_list_item(q) for q in quizzes]

    def delete_quiz(self, quiz_id: str) -> None:
        """Delete a quiz. Results recorded against it are kept."""
        quiz_id = ensure_valid_id(quiz_id, "quiz ID")
        with db_errors(self.db, "deleting quiz"):
            quiz = self.quiz_repository.get_by_id(quiz_id)
            if not quiz:
                raise NotFoundError("Quiz not found")
            self.quiz_repository.delete(quiz)
        logger.info(f"🗑️ Quiz deleted: {quiz_id}")

    def get_demo_quiz(self, category: Optional[str]) -> DemoQuizResponse:
        """Build an unsaved practice quiz; answers are included for self-grading"""
        tag = QuizDomain.normalize_category(category)

        with db_errors(self.db, "fetching demo quiz"):
            pool = self.question_repository.get_by_categories(
                QuizDomain.category_filter([tag])
            )
        if not pool:
            raise NotFoundError("No questions available in this category")

        selected = QuizDomain.sample(pool, settings.DEMO_QUIZ_SIZE)
        return DemoQuizResponse(
            id=f"demo_{int(time.time() * 1000)}",
            title=f"Demo Quiz ({tag})",
            categories=[tag],
            num_questions=len(selected),
            duration=settings.DEMO_QUIZ_DURATION,
            questions=[QuizDomain.to_question(q) for q in selected],
        )
