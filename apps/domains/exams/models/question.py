from django.core.validators import MinValueValidator
from django.db import models
from apps.api.common.models import BaseModel
from .exam import Exam


class ExamQuestion(BaseModel):
    """
    시험 문항 정의

    유형별 payload:
    - mcq: McqOption (정답 정확히 1개)
    - descriptive: keywords + min_word_count (키워드 휴리스틱 자동채점)
    - coding: 자동채점 대상 아님
    """

    class QuestionType(models.TextChoices):
        MCQ = "mcq", "Multiple choice"
        DESCRIPTIVE = "descriptive", "Descriptive"
        CODING = "coding", "Coding"

    exam = models.ForeignKey(
        Exam,
        on_delete=models.CASCADE,
        related_name="questions",
    )

    question_type = models.CharField(
        max_length=20,
        choices=QuestionType.choices,
        default=QuestionType.MCQ,
    )

    text = models.TextField()
    marks = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    order = models.PositiveIntegerField(default=1)

    # descriptive 전용
    keywords = models.JSONField(default=list, blank=True)
    min_word_count = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "exams_question"
        ordering = ["order", "id"]

    def __str__(self):
        return f"{self.exam} Q{self.order} ({self.question_type})"


class McqOption(models.Model):
    question = models.ForeignKey(
        ExamQuestion,
        on_delete=models.CASCADE,
        related_name="options",
    )
    text = models.CharField(max_length=500)
    is_correct = models.BooleanField(default=False)

    class Meta:
        db_table = "exams_mcq_option"
        ordering = ["id"]

    def __str__(self):
        return self.text
