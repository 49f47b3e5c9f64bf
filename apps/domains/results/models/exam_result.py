from __future__ import annotations

from django.conf import settings
from django.db import models

from apps.api.common.models import BaseModel


class ExamResult(BaseModel):
    """
    시험 결과 SSOT (exam, student 당 1개)

    - finalize(제출/자동제출) 에서만 생성/갱신
    - percentage = round_half_up(100 * obtained / total), total=0 이면 0
    """

    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="results",
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exam_results",
    )

    total_marks = models.IntegerField(default=0)
    obtained_marks = models.IntegerField(default=0)
    percentage = models.IntegerField(default=0)
    passed = models.BooleanField(default=False)

    evaluated_at = models.DateTimeField()

    class Meta:
        db_table = "results_exam_result"
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "student"],
                name="unique_result_per_exam_student",
            )
        ]
        indexes = [
            models.Index(fields=["exam", "percentage"], name="results_exam_pct_idx"),
        ]

    def __str__(self):
        return f"ExamResult exam={self.exam_id} student={self.student_id} {self.percentage}%"
