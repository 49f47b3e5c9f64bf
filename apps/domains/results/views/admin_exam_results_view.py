# PATH: apps/domains/results/views/admin_exam_results_view.py
from django.shortcuts import get_object_or_404
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated

from apps.core.permissions import IsInstructorOrAdmin
from apps.domains.exams.models import Exam
from apps.domains.results.models import ExamResult
from apps.domains.results.permissions import IsExamOwnerOrAdmin
from apps.domains.results.serializers.exam_result import AdminExamResultRowSerializer


class AdminExamResultsView(ListAPIView):
    """
    ✅ 강사/관리자: 시험별 학생 결과 목록 (최근 평가 순)
    강사는 본인 출제 시험만.
    """

    permission_classes = [IsAuthenticated, IsInstructorOrAdmin, IsExamOwnerOrAdmin]
    serializer_class = AdminExamResultRowSerializer

    def get_queryset(self):
        exam = get_object_or_404(Exam, id=int(self.kwargs["exam_id"]))
        self.check_object_permissions(self.request, exam)

        return (
            ExamResult.objects
            .filter(exam=exam)
            .select_related("student")
            .order_by("-evaluated_at", "-id")
        )
