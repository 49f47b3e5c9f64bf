# apps/api/celery.py

from celery import Celery

# ❗ settings는 여기서 지정하지 않는다
# DJANGO_SETTINGS_MODULE은 반드시 외부에서 주입
#   celery -A apps.api.celery worker -l info
#   celery -A apps.api.celery beat -l info

app = Celery("lms")

app.config_from_object(
    "django.conf:settings",
    namespace="CELERY",
)

# ✅ tasks/ 는 패키지 모듈 단위로 등록 (apps.domains.results.tasks.sweep_tasks)
app.autodiscover_tasks(
    lambda: ["apps.domains.results.tasks"],
    related_name="sweep_tasks",
)
