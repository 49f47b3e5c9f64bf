# apps/domains/results/models/__init__.py

from .exam_attempt import ExamAttempt
from .exam_answer import ExamAnswer
from .exam_result import ExamResult

__all__ = [
    "ExamAttempt",
    "ExamAnswer",
    "ExamResult",
]
