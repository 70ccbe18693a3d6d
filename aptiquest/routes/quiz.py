from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData, require_staff
from aptiquest.core.database import get_db
from aptiquest.core.exceptions import (
    NotFoundError,
    QuizAppError,
    internal_error,
    to_http_exception,
)
from aptiquest.schemas.common import DeleteResponse
from aptiquest.schemas.quiz import (
    DemoQuizResponse,
    QuizAttemptResponse,
    QuizCreate,
    QuizListItem,
    QuizSummary,
)
from aptiquest.services.quiz import QuizService

router = APIRouter(tags=["quiz"], prefix="/quizzes")


@router.post(
    "",
    response_model=QuizSummary,
    status_code=status.HTTP_201_CREATED,
)
def create_quiz(
    request: QuizCreate,
    db: Session = Depends(get_db),
    user: TokenData = Depends(require_staff),
):
    """
    Create a quiz from the question bank (faculty/admin)

    Samples `count` questions at random from the chosen categories
    (or the whole bank for "all"). The count is clamped to the number of
    available questions.
    """
    try:
        service = QuizService(db)
        return service.create_quiz(request, creator=user.username)
    except NotFoundError as e:
        # An empty pool is a bad request for quiz creation
        raise to_http_exception(e, status.HTTP_400_BAD_REQUEST)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("", response_model=List[QuizListItem])
def list_quizzes(db: Session = Depends(get_db)):
    """List all quizzes, newest first"""
    try:
        return QuizService(db).list_quizzes()
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/demo/{category}", response_model=DemoQuizResponse)
def get_demo_quiz(category: str, db: Session = Depends(get_db)):
    """Practice quiz of up to 10 random questions. Not saved; answers included."""
    try:
        return QuizService(db).get_demo_quiz(category)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/{quiz_id}", response_model=QuizAttemptResponse)
def get_quiz_for_attempt(quiz_id: str, db: Session = Depends(get_db)):
    """
    Fetch a quiz to take

    Questions come back in a new random order on every call and without
    their correct answers.
    """
    if quiz_id.strip().startswith("demo_"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_id", "message": "Demo quizzes are not stored"},
        )
    try:
        return QuizService(db).get_quiz_for_attempt(quiz_id)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.delete(
    "/{quiz_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_staff)],
)
def delete_quiz(quiz_id: str, db: Session = Depends(get_db)):
    """Delete a quiz (faculty/admin). Recorded results are kept."""
    try:
        QuizService(db).delete_quiz(quiz_id)
        return DeleteResponse(message="Quiz deleted successfully", deleted=1)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
