from django.conf import settings
from django.db import models
from apps.api.common.models import BaseModel


class Exam(BaseModel):
    """
    시험 정의 (메타 정보만)

    - 응시 중에는 duration / grace 를 바꾸지 않는다 (grace 는 deadline 계산에 즉시 반영됨)
    - course 가 있으면 해당 강좌 ACTIVE 수강생만 응시 가능
    """

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    duration_minutes = models.PositiveIntegerField()

    # 0~100, 이상이면 합격
    pass_percentage = models.PositiveIntegerField(default=60)

    course = models.ForeignKey(
        "enrollment.Course",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="exams",
    )

    instructor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="authored_exams",
    )

    # 연결 끊김 허용 시간(초). 마감(end_time)에도 동일하게 더해진다.
    disconnect_grace_seconds = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "exams_exam"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title
