from django.conf import settings
from django.db import models

from apps.api.common.models import BaseModel


class ExamAnswer(BaseModel):
    """
    문항별 답안 (exam, question, student 당 1개)

    - 제출 전까지 반복 upsert (autosave)
    - marks_obtained=None 은 "아직 채점 안 됨" (descriptive autosave, coding)
    """

    attempt = models.ForeignKey(
        "results.ExamAttempt",
        on_delete=models.CASCADE,
        related_name="answers",
    )
    exam = models.ForeignKey(
        "exams.Exam",
        on_delete=models.CASCADE,
        related_name="answers",
    )
    question = models.ForeignKey(
        "exams.ExamQuestion",
        on_delete=models.CASCADE,
        related_name="answers",
    )
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="exam_answers",
    )

    selected_option = models.ForeignKey(
        "exams.McqOption",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    answer_text = models.TextField(blank=True, default="")
    code_submission = models.TextField(blank=True, default="")

    marks_obtained = models.IntegerField(null=True, blank=True)

    class Meta:
        db_table = "results_exam_answer"
        constraints = [
            models.UniqueConstraint(
                fields=["exam", "question", "student"],
                name="unique_answer_per_exam_question_student",
            )
        ]

    def __str__(self):
        return f"ExamAnswer q={self.question_id} student={self.student_id} marks={self.marks_obtained}"
