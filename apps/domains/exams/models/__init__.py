# apps/domains/exams/models/__init__.py
from .exam import Exam
from .question import ExamQuestion, McqOption

__all__ = [
    "Exam",
    "ExamQuestion",
    "McqOption",
]
