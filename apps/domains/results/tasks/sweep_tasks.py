# apps/domains/results/tasks/sweep_tasks.py
from celery import shared_task

from apps.domains.results.services.expiry_service import sweep_expired_attempts


@shared_task(name="results.sweep_expired_attempts", ignore_result=True)
def sweep_expired_attempts_task(limit: int = 500) -> int:
    return len(sweep_expired_attempts(limit=limit))
