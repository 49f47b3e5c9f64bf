from django.contrib import admin

from apps.domains.exams.models import Exam, ExamQuestion, McqOption


class McqOptionInline(admin.TabularInline):
    model = McqOption
    extra = 0


class ExamQuestionInline(admin.StackedInline):
    model = ExamQuestion
    extra = 0


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "duration_minutes", "pass_percentage", "course", "is_active")
    list_filter = ("is_active",)
    inlines = [ExamQuestionInline]


@admin.register(ExamQuestion)
class ExamQuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "exam", "order", "question_type", "marks")
    list_filter = ("question_type",)
    inlines = [McqOptionInline]
