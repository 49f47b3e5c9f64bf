# PATH: apps/domains/results/views/student_exam_attempt_view.py
"""
학생 본인 응시 API (/me/*)

- POST   me/exams/<exam_id>/attempt/                   → 시작/재개 (+ 문제지)
- GET    me/exams/<exam_id>/attempt/                   → 상태 조회
- PUT    me/exams/<exam_id>/answers/<question_id>/     → 답안 autosave
- POST   me/exams/<exam_id>/submit/                    → 최종 제출
"""
from __future__ import annotations

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsStudent
from apps.domains.exams.models import ExamQuestion
from apps.domains.results.serializers.attempt_window import (
    AttemptWindowSerializer,
    QuestionPaperSerializer,
)
from apps.domains.results.serializers.submission import (
    SaveAnswerSerializer,
    SubmissionOutcomeSerializer,
    SubmitExamSerializer,
)
from apps.domains.results.services.attempt_service import ExamAttemptService
from apps.domains.results.services.submission_service import ExamSubmissionService
from apps.domains.results.views.base import ExamAttemptErrorMixin


class MyExamAttemptView(ExamAttemptErrorMixin, APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def post(self, request, exam_id: int):
        window = ExamAttemptService.start_or_resume(
            exam_id=int(exam_id),
            student_id=request.user.id,
        )

        questions = (
            ExamQuestion.objects
            .filter(exam_id=int(exam_id))
            .prefetch_related("options")
            .order_by("order", "id")
        )

        data = dict(AttemptWindowSerializer(window).data)
        data["questions"] = QuestionPaperSerializer(questions, many=True).data
        return Response(data, status=status.HTTP_200_OK)

    def get(self, request, exam_id: int):
        window = ExamAttemptService.get_status(
            exam_id=int(exam_id),
            student_id=request.user.id,
        )
        return Response(AttemptWindowSerializer(window).data, status=status.HTTP_200_OK)


class MyExamAnswerView(ExamAttemptErrorMixin, APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def put(self, request, exam_id: int, question_id: int):
        serializer = SaveAnswerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        v = serializer.validated_data

        answer = ExamSubmissionService.save_answer(
            exam_id=int(exam_id),
            student_id=request.user.id,
            question_id=int(question_id),
            selected_option_id=v.get("selected_option_id"),
            answer_text=v.get("answer_text") or "",
            code=v.get("code") or "",
        )

        # 채점 결과는 제출 전까지 노출하지 않는다
        return Response(
            {
                "question_id": answer.question_id,
                "saved": True,
                "saved_at": answer.updated_at,
            },
            status=status.HTTP_200_OK,
        )


class MyExamSubmitView(ExamAttemptErrorMixin, APIView):
    permission_classes = [IsAuthenticated, IsStudent]

    def post(self, request, exam_id: int):
        serializer = SubmitExamSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome = ExamSubmissionService.submit_exam(
            exam_id=int(exam_id),
            student_id=request.user.id,
            answers=serializer.to_answer_inputs(),
        )
        return Response(SubmissionOutcomeSerializer(outcome).data, status=status.HTTP_200_OK)
