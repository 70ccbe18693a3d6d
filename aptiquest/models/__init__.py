from .question import Question
from .question_import import QuestionImport
from .quiz import Quiz
from .result import Result
from .user import User

__all__ = ["Question", "QuestionImport", "Quiz", "Result", "User"]
