# PATH: apps/domains/results/serializers/attempt_window.py
from __future__ import annotations

from rest_framework import serializers

from apps.domains.exams.models import ExamQuestion, McqOption


class AttemptWindowSerializer(serializers.Serializer):
    """
    ✅ 학생 화면: 응시 창 + 서버 시각
    남은 시간 = deadline - server_time (클라이언트 시계 사용 ❌)
    """

    exam_id = serializers.IntegerField(read_only=True)
    status = serializers.CharField(read_only=True)
    start_time = serializers.DateTimeField(read_only=True)
    end_time = serializers.DateTimeField(read_only=True)
    deadline = serializers.DateTimeField(read_only=True)
    server_time = serializers.DateTimeField(read_only=True)
    submitted_at = serializers.DateTimeField(read_only=True, allow_null=True)


class McqOptionPublicSerializer(serializers.ModelSerializer):
    # 정답 플래그(is_correct) 노출 금지
    class Meta:
        model = McqOption
        fields = ["id", "text"]


class QuestionPaperSerializer(serializers.ModelSerializer):
    options = McqOptionPublicSerializer(many=True, read_only=True)

    class Meta:
        model = ExamQuestion
        fields = [
            "id",
            "question_type",
            "text",
            "marks",
            "order",
            "min_word_count",
            "options",
        ]
