from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData, get_optional_user, require_staff
from aptiquest.core.database import get_db
from aptiquest.core.exceptions import QuizAppError, internal_error, to_http_exception
from aptiquest.schemas.common import DeleteResponse
from aptiquest.schemas.result import (
    ResultCreate,
    ResultDetail,
    ResultListResponse,
    ResultResponse,
)
from aptiquest.services.result import ResultService

router = APIRouter(tags=["results"], prefix="/results")


@router.post(
    "",
    response_model=ResultResponse,
    status_code=status.HTTP_201_CREATED,
)
def record_result(
    request: ResultCreate,
    db: Session = Depends(get_db),
    user: Optional[TokenData] = Depends(get_optional_user),
):
    """
    Save a quiz attempt

    Answers are scored against the stored questions and saved together
    with a copy of each question. Send `question_order` with the order the
    questions were shown in; otherwise the order of `answers` is used.
    """
    try:
        return ResultService(db).record_result(request, user)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get(
    "",
    response_model=ResultListResponse,
    dependencies=[Depends(require_staff)],
)
def list_results(db: Session = Depends(get_db)):
    """All results, newest first (faculty/admin)"""
    try:
        return ResultListResponse(results=ResultService(db).list_results())
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get(
    "/quiz/{quiz_id}",
    response_model=ResultListResponse,
    dependencies=[Depends(require_staff)],
)
def list_results_by_quiz(quiz_id: str, db: Session = Depends(get_db)):
    """Leaderboard for one quiz: highest score first, ties by most recent"""
    try:
        return ResultListResponse(results=ResultService(db).list_results_by_quiz(quiz_id))
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/student/{student_name}", response_model=ResultListResponse)
def list_results_by_respondent(student_name: str, db: Session = Depends(get_db)):
    """A student's attempt history, newest first"""
    try:
        return ResultListResponse(
            results=ResultService(db).list_results_by_respondent(student_name)
        )
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/{result_id}", response_model=ResultDetail)
def get_result_detail(result_id: str, db: Session = Depends(get_db)):
    """One attempt with its answer snapshot and questions in the order shown"""
    try:
        return ResultService(db).get_result_detail(result_id)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.delete(
    "/{result_id}",
    response_model=DeleteResponse,
    dependencies=[Depends(require_staff)],
)
def delete_result(result_id: str, db: Session = Depends(get_db)):
    try:
        ResultService(db).delete_result(result_id)
        return DeleteResponse(message="Result deleted", deleted=1)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
