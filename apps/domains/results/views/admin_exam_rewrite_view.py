# PATH: apps/domains/results/views/admin_exam_rewrite_view.py
"""
재응시(rewrite): 강사/관리자 전용

기존 답안/결과 삭제 후 now 기준으로 창을 다시 연다.
- 관리자: 모든 시험
- 강사: 본인 출제 시험(exam.instructor)만
"""
from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsInstructorOrAdmin
from apps.domains.exams.models import Exam
from apps.domains.results.permissions import IsExamOwnerOrAdmin
from apps.domains.results.serializers.attempt_window import AttemptWindowSerializer
from apps.domains.results.services.attempt_service import ExamAttemptService
from apps.domains.results.views.base import ExamAttemptErrorMixin

logger = logging.getLogger(__name__)


class AdminExamRewriteView(ExamAttemptErrorMixin, APIView):
    permission_classes = [IsAuthenticated, IsInstructorOrAdmin, IsExamOwnerOrAdmin]

    def post(self, request, exam_id: int, student_id: int):
        exam = get_object_or_404(Exam, id=int(exam_id))
        self.check_object_permissions(request, exam)

        student = get_object_or_404(get_user_model(), id=int(student_id))

        window = ExamAttemptService.rewrite(exam_id=exam.id, student_id=student.id)

        logger.info(
            "[EXAM_REWRITE] requested_by=%s exam=%s student=%s",
            request.user.id, exam.id, student.id,
        )
        return Response(AttemptWindowSerializer(window).data, status=status.HTTP_200_OK)
