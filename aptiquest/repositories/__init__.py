from .question_import_repository import QuestionImportRepository
from .question_repository import QuestionRepository
from .quiz_repository import QuizRepository
from .result_repository import ResultRepository
from .user_repository import UserRepository

__all__ = [
    "QuestionRepository",
    "QuestionImportRepository",
    "QuizRepository",
    "ResultRepository",
    "UserRepository",
]
