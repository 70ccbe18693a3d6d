import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData
from aptiquest.core.database import db_errors
from aptiquest.core.exceptions import NotFoundError, ValidationError
from aptiquest.core.ids import ensure_valid_id, is_valid_id
from aptiquest.domain.quiz_domain import QuizDomain
from aptiquest.domain.result_domain import ResultDomain
from aptiquest.models.result import Result
from aptiquest.repositories.question_repository import QuestionRepository
from aptiquest.repositories.quiz_repository import QuizRepository
from aptiquest.repositories.result_repository import ResultRepository
from aptiquest.repositories.user_repository import UserRepository
from aptiquest.schemas.result import (
    ResultCreate,
    ResultDetail,
    ResultListItem,
    ResultResponse,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ANONYMOUS = "Anonymous"


class ResultService:
    """Records scored quiz attempts and serves the reporting views over them"""

    def __init__(self, db: Session):
        self.db = db
        self.result_repository = ResultRepository(db)
        self.question_repository = QuestionRepository(db)
        self.quiz_repository = QuizRepository(db)
        self.user_repository = UserRepository(db)

    def record_result(
        self, payload: ResultCreate, user: Optional[TokenData] = None
    ) -> ResultResponse:
        """
        Score a submitted attempt and store it as an immutable snapshot.

        Submitted answers are re-checked against the stored questions; the
        question text, options, answer and explanation are copied into the
        result so later edits to the bank do not alter it. Answers for
        questions that cannot be found are kept as wrong "Unknown question"
        entries. Every call creates a new result.
        """
        if not payload.quiz_id:
            raise ValidationError("Quiz ID and answers are required")
        if not payload.answers:
            raise ValidationError("Quiz ID and answers are required")
        quiz_id = ensure_valid_id(payload.quiz_id, "quiz ID")

        answers = payload.answers
        with db_errors(self.db, "saving result"):
            questions = self.question_repository.get_by_ids(
                [qid for qid in answers if is_valid_id(qid)]
            )
            snapshots = ResultDomain.build_snapshots(answers, questions)
            tally = ResultDomain.tally(snapshots)

            result = self.result_repository.create(
                {
                    "quiz_id": quiz_id,
                    "user_id": self._respondent_id(payload, user),
                    "student_name": self._respondent_name(payload, user),
                    "question_order": list(payload.question_order or answers.keys()),
                    "answers": [s.model_dump() for s in snapshots],
                    "score": (
                        payload.score
                        if payload.score is not None
                        else tally["correct_answers"]
                    ),
                    "total_questions": (
                        payload.total if payload.total is not None else len(snapshots)
                    ),
                    "correct_answers": tally["correct_answers"],
                    "wrong_answers": tally["wrong_answers"],
                    "time_taken": payload.time_taken,
                }
            )

        unknown = len(snapshots) - len(questions)
        if unknown:
            logger.warning(f"⚠️ Result {result.id}: {unknown} unknown question(s)")
        logger.info(
            f"✅ Result saved: {result.id} for {result.student_name} "
            f"({result.score}/{result.total_questions})"
        )
        return ResultDomain.to_response(result)

    @staticmethod
    def _respondent_id(payload: ResultCreate, user: Optional[TokenData]) -> Optional[str]:
        if user is not None:
            return user.sub
        return payload.user_id if is_valid_id(payload.user_id) else None

    @staticmethod
    def _respondent_name(payload: ResultCreate, user: Optional[TokenData]) -> str:
        name = (payload.student_name or "").strip()
        if name:
            return name
        if user is not None and user.username:
            return user.username
        return ANONYMOUS

    def list_results(self) -> List[ResultListItem]:
        """All results, newest first, joined with quiz and user"""
        with db_errors(self.db, "fetching results"):
            return self._join(self.result_repository.get_all())

    def list_results_by_quiz(self, quiz_id: str) -> List[ResultListItem]:
        """Results of one quiz, best score first, then most recent"""
        quiz_id = ensure_valid_id(quiz_id, "quiz ID")
        with db_errors(self.db, "fetching quiz results"):
            return self._join(self.result_repository.get_by_quiz_id(quiz_id))

    def list_results_by_respondent(self, student_name: str) -> List[ResultListItem]:
        """A respondent's attempts, newest first; empty when there are none"""
        with db_errors(self.db, "fetching student results"):
            return self._join(
                self.result_repository.get_by_student_name(student_name.strip())
            )

    def get_result_detail(self, result_id: str) -> ResultDetail:
        """
        A single result with its snapshot and the questions it was built from,
        resolved in the stored presentation order. Questions that no longer
        exist are left out.
        """
        result_id = ensure_valid_id(result_id, "result ID")
        with db_errors(self.db, "fetching result details"):
            result = self.result_repository.get_by_id(result_id)
            if not result:
                raise NotFoundError("No details found for this attempt")

            item = self._join([result])[0]
            order = result.question_order or []
            found = {
                q.id: q
                for q in self.question_repository.get_by_ids(
                    [qid for qid in order if is_valid_id(qid)]
                )
            }

        questions = [QuizDomain.to_question(found[qid]) for qid in order if qid in found]
        return ResultDetail(**item.model_dump(), questions=questions)

    def delete_result(self, result_id: str) -> None:
        result_id = ensure_valid_id(result_id, "result ID")
        with db_errors(self.db, "deleting result"):
            result = self.result_repository.get_by_id(result_id)
            if not result:
                raise NotFoundError("Result not found")
            self.result_repository.delete(result)
        logger.info(f"🗑️ Result deleted: {result_id}")

    def _join(self, results: List[Result]) -> List[ResultListItem]:
        """Attach quiz and user summaries; missing documents become None"""
        quizzes = {
            q.id: q
            for q in self.quiz_repository.get_by_ids(list({r.quiz_id for r in results}))
        }
        user_ids = list({r.user_id for r in results if r.user_id})
        users = {u.id: u for u in self.user_repository.get_by_ids(user_ids)}
        return [
            ResultDomain.to_list_item(r, quizzes.get(r.quiz_id), users.get(r.user_id))
            for r in results
        ]
