# PATH: apps/domains/results/urls.py

from django.urls import path

from apps.domains.results.views import (
    AdminExamResultsView,
    AdminExamRewriteView,
    MyExamAnswerView,
    MyExamAttemptView,
    MyExamResultsView,
    MyExamResultView,
    MyExamSubmitView,
)

urlpatterns = [
    # ======================================================
    # Student (/me)
    # ======================================================
    path("me/results/", MyExamResultsView.as_view()),
    path("me/exams/<int:exam_id>/attempt/", MyExamAttemptView.as_view()),
    path(
        "me/exams/<int:exam_id>/answers/<int:question_id>/",
        MyExamAnswerView.as_view(),
    ),
    path("me/exams/<int:exam_id>/submit/", MyExamSubmitView.as_view()),
    path("me/exams/<int:exam_id>/result/", MyExamResultView.as_view()),

    # ======================================================
    # Admin / Instructor (본인 출제 시험만, 관리자는 전체)
    # ======================================================
    path("admin/exams/<int:exam_id>/results/", AdminExamResultsView.as_view()),
    path(
        "admin/exams/<int:exam_id>/students/<int:student_id>/rewrite/",
        AdminExamRewriteView.as_view(),
    ),
]
