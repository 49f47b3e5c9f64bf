# PATH: apps/domains/results/management/commands/sweep_expired_attempts.py
"""
마감(end_time + grace) 지난 in_progress attempt 자동 제출.

celery beat 없이 cron 으로 돌릴 때:
  python manage.py sweep_expired_attempts
  python manage.py sweep_expired_attempts --limit 1000
"""
from django.core.management.base import BaseCommand

from apps.domains.results.services.expiry_service import (
    DEFAULT_SWEEP_BATCH,
    sweep_expired_attempts,
)


class Command(BaseCommand):
    help = "Auto-submit in-progress exam attempts whose deadline has passed"

    def add_arguments(self, parser):
        parser.add_argument("--limit", type=int, default=DEFAULT_SWEEP_BATCH)

    def handle(self, *args, **options):
        done = sweep_expired_attempts(limit=options["limit"])
        for exam_id, student_id in done:
            self.stdout.write(f"exam={exam_id} student={student_id}")
        self.stdout.write(self.style.SUCCESS(f"Auto-submitted {len(done)} attempt(s)"))
