# apps/domains/results/models/exam_attempt.py
from datetime import timedelta

from django.conf import settings
from django.db import models
from apps.api.common.models import BaseModel


class ExamAttempt(BaseModel):
    """
    학생의 시험 응시 세션 (exam, student 당 1개)

    🔥 핵심 불변식
    - end_time 은 생성 시 고정. rewrite 외에는 절대 연장하지 않는다.
    - SUBMITTED 는 terminal. 어떤 연산도 되돌리지 않는다 (rewrite 제외).
    - disconnected_at 은 IN_PROGRESS 위의 직교 플래그 (별도 상태 ❌)

    모든 상태 전이는 transaction + select_for_update 로 이 row 를 잠근 뒤 수행한다.
    """

    class Status(models.TextChoices):
        NOT_STARTED = "not_started", "Not started"
        IN_PROGRESS = "in_progress", "In progress"
        SUBMITTED = "submitted", "Submitted"

    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="attempts",
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exam_attempts",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.NOT_STARTED,
    )

    start_time = models.DateTimeField()
    end_time = models.DateTimeField()

    disconnected_at = models.DateTimeField(null=True, blank=True)
    submitted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "results_exam_attempt"
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "student"],
                name="unique_attempt_per_exam_student",
            )
        ]
        indexes = [
            models.Index(fields=["status", "end_time"], name="results_attempt_sweep_idx"),
            models.Index(fields=["student", "status"], name="results_attempt_student_idx"),
        ]
        ordering = ["-created_at"]

    def __str__(self):
        return (
            f"ExamAttempt exam={self.exam_id} "
            f"student={self.student_id} "
            f"[{self.status}]"
        )

    @property
    def is_submitted(self) -> bool:
        return self.status == self.Status.SUBMITTED

    def grace(self) -> timedelta:
        return timedelta(seconds=int(self.exam.disconnect_grace_seconds or 0))

    def deadline(self):
        """end_time + grace. 이후의 제출은 거부, 재접속은 자동 제출."""
        return self.end_time + self.grace()

    def disconnect_grace_expired(self, now) -> bool:
        if self.disconnected_at is None:
            return False
        return now > self.disconnected_at + self.grace()
