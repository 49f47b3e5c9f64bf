# PATH: apps/domains/results/views/__init__.py
"""
results.views public exports
"""

from .admin_exam_results_view import AdminExamResultsView
from .admin_exam_rewrite_view import AdminExamRewriteView
from .student_exam_attempt_view import (
    MyExamAnswerView,
    MyExamAttemptView,
    MyExamSubmitView,
)
from .student_exam_result_view import MyExamResultsView, MyExamResultView

__all__ = [
    "AdminExamResultsView",
    "AdminExamRewriteView",
    "MyExamAnswerView",
    "MyExamAttemptView",
    "MyExamResultView",
    "MyExamResultsView",
    "MyExamSubmitView",
]
