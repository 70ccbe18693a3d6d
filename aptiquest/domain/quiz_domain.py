import random
from typing import List, Sequence, TypeVar, Union

from aptiquest.core.exceptions import ValidationError
from aptiquest.models.question import Question
from aptiquest.models.quiz import Quiz
from aptiquest.schemas.question import (
    ALL_CATEGORIES,
    CATEGORIES,
    PublicQuestionResponse,
    QuestionResponse,
)
from aptiquest.schemas.quiz import QuizListItem, QuizSummary

T = TypeVar("T")

# Seeded from the OS entropy source; seeds are never stored
_rng = random.SystemRandom()

ALLOWED_CATEGORIES = [ALL_CATEGORIES] + CATEGORIES


class QuizDomain:
    """Domain logic for Quiz assembly and presentation"""

    @staticmethod
    def normalize_categories(categories: Union[List[str], str, None]) -> List[str]:
        """
        Trim and lowercase category tags, rejecting unknown ones.

        Every invalid tag is reported in a single ValidationError.
        """
        if categories is None:
            categories = []
        if isinstance(categories, str):
            categories = [categories]

        normalized = []
        for category in categories:
            tag = str(category).strip().lower()
            if tag not in normalized:
                normalized.append(tag)

        if not normalized:
            return [ALL_CATEGORIES]

        invalid = [c for c in normalized if c not in ALLOWED_CATEGORIES]
        if invalid:
            raise ValidationError(f"Invalid categories: {', '.join(invalid)}")
        return normalized

    @staticmethod
    def normalize_category(category: str) -> str:
        tag = (category or "").strip().lower()
        if tag not in ALLOWED_CATEGORIES:
            raise ValidationError(f"Invalid category: {tag}")
        return tag

    @staticmethod
    def category_filter(categories: List[str]):
        """Categories to filter the pool by, or None for the whole bank"""
        if ALL_CATEGORIES in categories:
            return None
        return categories

    @staticmethod
    def shuffled(items: Sequence[T]) -> List[T]:
        """Return a uniformly shuffled copy (Fisher-Yates)"""
        result = list(items)
        _rng.shuffle(result)
        return result

    @staticmethod
    def sample(items: Sequence[T], count: int) -> List[T]:
        """Pick min(count, len(items)) items without replacement"""
        return QuizDomain.shuffled(items)[: max(0, min(count, len(items)))]

    @staticmethod
    def display_categories(categories: List[str]) -> List[str]:
        return [c[:1].upper() + c[1:] for c in categories or []]

    @staticmethod
    def to_summary(quiz: Quiz) -> QuizSummary:
        return QuizSummary(
            id=quiz.id,
            title=quiz.title,
            num_questions=quiz.num_questions,
            duration=quiz.duration,
            categories=QuizDomain.display_categories(quiz.categories),
            certificate_enabled=bool(quiz.certificate_enabled),
            certificate_passing_score=quiz.certificate_passing_score or 0,
        )

    @staticmethod
    def to_list_item(quiz: Quiz) -> QuizListItem:
        return QuizListItem(
            **QuizDomain.to_summary(quiz).model_dump(),
            created_by=quiz.created_by,
            created_at=quiz.created_at,
        )

    @staticmethod
    def to_public_question(question: Question) -> PublicQuestionResponse:
        """Serialize a question for a test-taker, without its answer"""
        return PublicQuestionResponse(
            id=question.id,
            question=question.question,
            options=list(question.options or []),
            category=question.category,
            explanation=question.explanation or "",
        )

    @staticmethod
    def to_question(question: Question) -> QuestionResponse:
        return QuestionResponse.model_validate(question)
