from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData, require_staff
from aptiquest.core.database import get_db
from aptiquest.core.exceptions import QuizAppError, internal_error, to_http_exception
from aptiquest.schemas.common import DeleteResponse
from aptiquest.schemas.question import (
    CSVImportResponse,
    QuestionCreate,
    QuestionImportResponse,
    QuestionResponse,
    QuestionUpdate,
)
from aptiquest.services.question import QuestionService

router = APIRouter(
    tags=["questions"], prefix="/questions", dependencies=[Depends(require_staff)]
)


# =====================================================
# Question bank
# =====================================================
@router.get("", response_model=List[QuestionResponse])
def list_questions(category: Optional[str] = None, db: Session = Depends(get_db)):
    """List questions, optionally filtered by category ("all" means no filter)"""
    try:
        return QuestionService(db).list_questions(category)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.post(
    "",
    response_model=QuestionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_question(request: QuestionCreate, db: Session = Depends(get_db)):
    """Add a question manually. Question text must be unique."""
    try:
        return QuestionService(db).create_question(request)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.delete("", response_model=DeleteResponse)
def delete_all_questions(db: Session = Depends(get_db)):
    """Delete every question and all CSV import records"""
    try:
        deleted = QuestionService(db).delete_all_questions()
        return DeleteResponse(
            message="All questions and CSV uploads deleted", deleted=deleted
        )
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


# =====================================================
# CSV import
# =====================================================
@router.post("/upload-csv", response_model=CSVImportResponse)
async def upload_csv(
    file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    user: TokenData = Depends(require_staff),
):
    """
    Import questions from a CSV file

    Expected header: question, option1, option2, option3, option4, answer,
    category, explanation. Invalid and duplicate rows are skipped.
    """
    if file is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "validation_error", "message": "No file uploaded"},
        )
    try:
        content = await file.read()
        return QuestionService(db).import_csv(file.filename, content, user.username)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/imports", response_model=List[QuestionImportResponse])
def list_imports(db: Session = Depends(get_db)):
    try:
        return QuestionService(db).list_imports()
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.delete("/imports/{batch_id}", response_model=DeleteResponse)
def delete_import(batch_id: str, db: Session = Depends(get_db)):
    """Delete a CSV batch together with the questions it created"""
    try:
        deleted = QuestionService(db).delete_import(batch_id)
        return DeleteResponse(
            message="CSV import and its questions deleted", deleted=deleted
        )
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.get("/sample-csv")
def download_sample_csv():
    return Response(
        content=QuestionService.sample_csv(),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="sample_questions.csv"'},
    )


# =====================================================
# Single question
# =====================================================
@router.put("/{question_id}", response_model=QuestionResponse)
def update_question(
    question_id: str, request: QuestionUpdate, db: Session = Depends(get_db)
):
    """Edit a question. Results already recorded keep their original copy."""
    try:
        return QuestionService(db).update_question(question_id, request)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@router.delete("/{question_id}", response_model=DeleteResponse)
def delete_question(question_id: str, db: Session = Depends(get_db)):
    try:
        QuestionService(db).delete_question(question_id)
        return DeleteResponse(message="Question deleted", deleted=1)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
