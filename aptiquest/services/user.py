import logging
from typing import List

from sqlalchemy.orm import Session

from aptiquest.core.auth import TokenData, create_access_token
from aptiquest.core.config import settings
from aptiquest.core.database import db_errors
from aptiquest.core.exceptions import ConflictError, NotFoundError, ValidationError
from aptiquest.core.ids import ensure_valid_id
from aptiquest.repositories.quiz_repository import QuizRepository
from aptiquest.repositories.result_repository import ResultRepository
from aptiquest.repositories.user_repository import UserRepository
from aptiquest.schemas.user import (
    AdminStats,
    AdminSummaryResponse,
    RoleEnum,
    TokenResponse,
    UserCreate,
    UserResponse,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class UserService:
    """User records for respondent joins and role checks"""

    def __init__(self, db: Session):
        self.db = db
        self.user_repository = UserRepository(db)
        self.quiz_repository = QuizRepository(db)
        self.result_repository = ResultRepository(db)

    def list_users(self) -> List[UserResponse]:
        with db_errors(self.db, "fetching users"):
            users = self.user_repository.get_all()
        return [UserResponse.model_validate(u) for u in users]

    def create_user(self, payload: UserCreate) -> UserResponse:
        with db_errors(self.db, "creating user"):
            if self.user_repository.get_by_username_or_email(
                payload.username, payload.email
            ):
                raise ConflictError("User already exists")
            user = self.user_repository.create(
                {
                    "username": payload.username,
                    "email": payload.email,
                    "role": payload.role.value,
                }
            )
        logger.info(f"✅ {user.role} created: {user.username}")
        return UserResponse.model_validate(user)

    def delete_user(self, user_id: str, current: TokenData) -> None:
        user_id = ensure_valid_id(user_id, "user ID")
        if current.sub == user_id:
            raise ValidationError("You cannot delete your own account")
        with db_errors(self.db, "deleting user"):
            user = self.user_repository.get_by_id(user_id)
            if not user:
                raise NotFoundError("User not found")
            self.user_repository.delete(user)
        logger.info(f"🗑️ User deleted: {user_id}")

    def summary(self) -> AdminSummaryResponse:
        """Headline counts for the admin dashboard"""
        with db_errors(self.db, "fetching summary"):
            stats = AdminStats(
                total_users=self.user_repository.count(),
                total_admins=self.user_repository.count(RoleEnum.ADMIN.value),
                total_faculties=self.user_repository.count(RoleEnum.FACULTY.value),
                total_students=self.user_repository.count(RoleEnum.STUDENT.value),
                total_quizzes=self.quiz_repository.count(),
                total_results=self.result_repository.count(),
            )
        return AdminSummaryResponse(stats=stats)

    def mock_login(self, username: str) -> TokenResponse:
        """Issue a token for an existing user. Development only."""
        if settings.ENVIRONMENT != "development":
            raise NotFoundError("Mock login is disabled")
        with db_errors(self.db, "logging in"):
            user = self.user_repository.get_by_username(username.strip())
        if not user:
            raise NotFoundError("User not found")
        token = create_access_token(user.id, user.username, user.role)
        return TokenResponse(access_token=token, role=user.role)
