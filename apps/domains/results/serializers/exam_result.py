# PATH: apps/domains/results/serializers/exam_result.py
from rest_framework import serializers

from apps.domains.results.models import ExamResult


class ExamResultSerializer(serializers.ModelSerializer):
    class Meta:
        model = ExamResult
        fields = [
            "exam_id",
            "student_id",
            "total_marks",
            "obtained_marks",
            "percentage",
            "passed",
            "evaluated_at",
        ]


class MyExamResultRowSerializer(serializers.ModelSerializer):
    exam_title = serializers.CharField(source="exam.title", read_only=True)
    duration_minutes = serializers.IntegerField(source="exam.duration_minutes", read_only=True)
    pass_percentage = serializers.IntegerField(source="exam.pass_percentage", read_only=True)

    class Meta:
        model = ExamResult
        fields = [
            "exam_id",
            "exam_title",
            "duration_minutes",
            "pass_percentage",
            "total_marks",
            "obtained_marks",
            "percentage",
            "passed",
            "evaluated_at",
        ]


class AdminExamResultRowSerializer(serializers.ModelSerializer):
    student_username = serializers.CharField(source="student.username", read_only=True)
    student_name = serializers.CharField(source="student.name", read_only=True, allow_null=True)
    email = serializers.CharField(source="student.email", read_only=True)

    class Meta:
        model = ExamResult
        fields = [
            "id",
            "student_id",
            "student_username",
            "student_name",
            "email",
            "total_marks",
            "obtained_marks",
            "percentage",
            "passed",
            "evaluated_at",
        ]
