import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("exams", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ExamAttempt",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("status", models.CharField(choices=[("not_started", "Not started"), ("in_progress", "In progress"), ("submitted", "Submitted")], default="not_started", max_length=20)),
                ("start_time", models.DateTimeField()),
                ("end_time", models.DateTimeField()),
                ("disconnected_at", models.DateTimeField(blank=True, null=True)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="attempts", to="exams.exam")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_attempts", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "results_exam_attempt",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "end_time"], name="results_attempt_sweep_idx"),
                    models.Index(fields=["student", "status"], name="results_attempt_student_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("exam", "student"), name="unique_attempt_per_exam_student"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ExamAnswer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("answer_text", models.TextField(blank=True, default="")),
                ("code_submission", models.TextField(blank=True, default="")),
                ("marks_obtained", models.IntegerField(blank=True, null=True)),
                ("attempt", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="results.examattempt")),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="exams.exam")),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="answers", to="exams.examquestion")),
                ("selected_option", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="+", to="exams.mcqoption")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_answers", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "results_exam_answer",
                "constraints": [
                    models.UniqueConstraint(fields=("exam", "question", "student"), name="unique_answer_per_exam_question_student"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ExamResult",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("total_marks", models.IntegerField(default=0)),
                ("obtained_marks", models.IntegerField(default=0)),
                ("percentage", models.IntegerField(default=0)),
                ("passed", models.BooleanField(default=False)),
                ("evaluated_at", models.DateTimeField()),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="results", to="exams.exam")),
                ("student", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="exam_results", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "results_exam_result",
                "indexes": [
                    models.Index(fields=["exam", "percentage"], name="results_exam_pct_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(fields=("exam", "student"), name="unique_result_per_exam_student"),
                ],
            },
        ),
    ]
