import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("enrollment", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Exam",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("duration_minutes", models.PositiveIntegerField()),
                ("pass_percentage", models.PositiveIntegerField(default=60)),
                ("disconnect_grace_seconds", models.PositiveIntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("course", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="exams", to="enrollment.course")),
                ("instructor", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="authored_exams", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "exams_exam",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="ExamQuestion",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("question_type", models.CharField(choices=[("mcq", "Multiple choice"), ("descriptive", "Descriptive"), ("coding", "Coding")], default="mcq", max_length=20)),
                ("text", models.TextField()),
                ("marks", models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("order", models.PositiveIntegerField(default=1)),
                ("keywords", models.JSONField(blank=True, default=list)),
                ("min_word_count", models.PositiveIntegerField(default=0)),
                ("exam", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="questions", to="exams.exam")),
            ],
            options={
                "db_table": "exams_question",
                "ordering": ["order", "id"],
            },
        ),
        migrations.CreateModel(
            name="McqOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("text", models.CharField(max_length=500)),
                ("is_correct", models.BooleanField(default=False)),
                ("question", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="options", to="exams.examquestion")),
            ],
            options={
                "db_table": "exams_mcq_option",
                "ordering": ["id"],
            },
        ),
    ]
