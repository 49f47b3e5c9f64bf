from django.conf import settings
from django.db import models

from apps.api.common.models import TimestampModel


# ========================================================
# Course (강좌)
# ========================================================

class Course(TimestampModel):
    """
    강좌 정의. 시험은 선택적으로 강좌에 연결된다.
    강좌 자체의 CRUD 는 이 서비스 범위 밖이며, 시험 응시 권한 판단에만 쓰인다.
    """

    title = models.CharField(max_length=255)

    class Meta:
        db_table = "enrollment_course"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title


# ========================================================
# Enrollment (강좌 단위 수강 등록)
# ========================================================

class Enrollment(TimestampModel):
    """
    학생이 특정 강좌를 수강하는 행위.
    ACTIVE 상태만 강좌 연결 시험 응시 권한으로 인정된다.
    """

    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        INACTIVE = "INACTIVE", "Inactive"
        PENDING = "PENDING", "Pending"

    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name="enrollments",
    )

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
    )

    class Meta:
        db_table = "enrollment_enrollment"
        constraints = [
            models.UniqueConstraint(
                fields=["student", "course"],
                name="unique_enrollment_per_course",
            )
        ]

    def __str__(self):
        return f"{self.student} -> {self.course}"


def is_enrolled(*, student_id: int, course_id: int) -> bool:
    return Enrollment.objects.filter(
        student_id=student_id,
        course_id=course_id,
        status=Enrollment.Status.ACTIVE,
    ).exists()
