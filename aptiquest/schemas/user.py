from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, validator


class RoleEnum(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    ADMIN = "admin"


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=255)
    role: RoleEnum = RoleEnum.STUDENT

    @validator("username")
    def validate_username(cls, v):
        if not v.strip():
            raise ValueError("Username cannot be empty")
        return v.strip()

    @validator("email")
    def validate_email(cls, v):
        if "@" not in v:
            raise ValueError("Email must contain '@'")
        return v.strip().lower()


class UserResponse(BaseModel):
    id: str
    username: str
    email: str
    role: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MockLogin(BaseModel):
    username: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str


class AdminStats(BaseModel):
    total_users: int = 0
    total_admins: int = 0
    total_faculties: int = 0
    total_students: int = 0
    total_quizzes: int = 0
    total_results: int = 0


class AdminSummaryResponse(BaseModel):
    message: str = "Admin summary"
    stats: AdminStats
