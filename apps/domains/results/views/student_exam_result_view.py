# PATH: apps/domains/results/views/student_exam_result_view.py
from rest_framework.exceptions import NotFound
from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.core.permissions import IsStudent
from apps.domains.results.models import ExamResult
from apps.domains.results.serializers.exam_result import (
    ExamResultSerializer,
    MyExamResultRowSerializer,
)


class MyExamResultView(APIView):
    """
    ✅ 학생 본인 결과 (제출/자동 제출 이후에만 존재)
    """

    permission_classes = [IsAuthenticated, IsStudent]

    def get(self, request, exam_id: int):
        result = ExamResult.objects.filter(
            exam_id=int(exam_id),
            student_id=request.user.id,
        ).first()
        if not result:
            raise NotFound("Result not available.")
        return Response(ExamResultSerializer(result).data)


class MyExamResultsView(ListAPIView):
    """
    ✅ 학생 본인 결과 전체 (시험 제목 / 합격 기준 포함)
    """

    permission_classes = [IsAuthenticated, IsStudent]
    serializer_class = MyExamResultRowSerializer

    def get_queryset(self):
        return (
            ExamResult.objects
            .filter(student_id=self.request.user.id)
            .select_related("exam")
            .order_by("-evaluated_at", "-id")
        )
