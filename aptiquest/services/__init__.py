from .question import QuestionService
from .quiz import QuizService
from .result import ResultService
from .user import UserService

__all__ = ["QuestionService", "QuizService", "ResultService", "UserService"]
