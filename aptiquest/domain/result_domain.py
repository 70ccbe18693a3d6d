from typing import Dict, List, Optional

from aptiquest.models.question import Question
from aptiquest.models.quiz import Quiz
from aptiquest.models.result import Result
from aptiquest.models.user import User
from aptiquest.schemas.result import (
    NO_EXPLANATION,
    UNKNOWN_QUESTION,
    AnswerSnapshot,
    QuizRef,
    ResultListItem,
    ResultResponse,
    UserRef,
)


class ResultDomain:
    """Domain logic for scoring attempts and shaping Result views"""

    @staticmethod
    def is_correct(chosen: Optional[str], answer: Optional[str]) -> bool:
        # Trimmed and case-sensitive
        if chosen is None or answer is None:
            return False
        return chosen.strip() == answer.strip()

    @staticmethod
    def snapshot(
        question_id: str, chosen: Optional[str], question: Optional[Question]
    ) -> AnswerSnapshot:
        """Freeze what was asked and answered for one question"""
        if question is None:
            return AnswerSnapshot(
                question_id=question_id,
                question=UNKNOWN_QUESTION,
                options=[],
                correct_answer="",
                explanation=NO_EXPLANATION,
                chosen_answer=chosen,
                correct=False,
            )
        return AnswerSnapshot(
            question_id=question.id,
            question=question.question,
            options=list(question.options or []),
            correct_answer=question.answer,
            explanation=question.explanation or NO_EXPLANATION,
            chosen_answer=chosen,
            correct=ResultDomain.is_correct(chosen, question.answer),
        )

    @staticmethod
    def build_snapshots(
        answers: Dict[str, Optional[str]], questions: List[Question]
    ) -> List[AnswerSnapshot]:
        by_id = {q.id: q for q in questions}
        return [
            ResultDomain.snapshot(question_id, chosen, by_id.get(question_id))
            for question_id, chosen in answers.items()
        ]

    @staticmethod
    def tally(snapshots: List[AnswerSnapshot]) -> Dict[str, int]:
        correct = sum(1 for s in snapshots if s.correct)
        return {"correct_answers": correct, "wrong_answers": len(snapshots) - correct}

    @staticmethod
    def to_response(result: Result) -> ResultResponse:
        return ResultResponse.model_validate(result)

    @staticmethod
    def to_list_item(
        result: Result, quiz: Optional[Quiz], user: Optional[User]
    ) -> ResultListItem:
        """Join a result with its quiz and user, either of which may be gone"""
        return ResultListItem(
            **ResultDomain.to_response(result).model_dump(),
            quiz=QuizRef.model_validate(quiz) if quiz else None,
            user=UserRef.model_validate(user) if user else None,
        )
