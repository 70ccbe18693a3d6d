from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData, require_admin
from aptiquest.core.database import get_db
from aptiquest.core.exceptions import QuizAppError, internal_error, to_http_exception
from aptiquest.schemas.common import DeleteResponse
from aptiquest.schemas.user import (
    AdminSummaryResponse,
    MockLogin,
    TokenResponse,
    UserCreate,
    UserResponse,
)
from aptiquest.services.user import UserService

auth_router = APIRouter(tags=["auth"], prefix="/auth")
admin_router = APIRouter(tags=["admin"], prefix="/admin")


@auth_router.post("/mock-login", response_model=TokenResponse)
def mock_login(request: MockLogin, db: Session = Depends(get_db)):
    """Issue a bearer token for an existing user (development environment only)"""
    try:
        return UserService(db).mock_login(request.username)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@admin_router.get(
    "/users",
    response_model=List[UserResponse],
    dependencies=[Depends(require_admin)],
)
def list_users(db: Session = Depends(get_db)):
    try:
        return UserService(db).list_users()
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@admin_router.post(
    "/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_user(request: UserCreate, db: Session = Depends(get_db)):
    try:
        return UserService(db).create_user(request)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@admin_router.delete("/users/{user_id}", response_model=DeleteResponse)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    admin: TokenData = Depends(require_admin),
):
    """Delete a user. Admins cannot delete themselves."""
    try:
        UserService(db).delete_user(user_id, admin)
        return DeleteResponse(message="User deleted successfully", deleted=1)
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)


@admin_router.get(
    "/summary",
    response_model=AdminSummaryResponse,
    dependencies=[Depends(require_admin)],
)
def admin_summary(db: Session = Depends(get_db)):
    """User counts by role plus quiz and result totals"""
    try:
        return UserService(db).summary()
    except QuizAppError as e:
        raise to_http_exception(e)
    except Exception as e:
        raise internal_error(e)
