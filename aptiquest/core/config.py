from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"

    DATABASE_URL: str = "sqlite:///./aptiquest.db"
    SECRET_KEY: str = "supersecret"
    PROJECT_NAME: str = "AptiQuest Quiz Backend"

    # Token verification
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Frontend origins allowed by CORS
    CORS_ORIGINS: List[str] = ["http://localhost:5174"]

    # Quiz defaults
    DEFAULT_QUIZ_COUNT: int = 10
    DEFAULT_QUIZ_DURATION: int = 600
    DEMO_QUIZ_SIZE: int = 10
    DEMO_QUIZ_DURATION: int = 300

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
