# apps/domains/results/services/expiry_service.py
"""
마감 지난 in_progress attempt 자동 제출 (안전망)

connect/disconnect 이벤트가 한 번도 오지 않는 이탈 세션 처리용.
celery beat (results.sweep_expired_attempts) 또는 manage.py sweep_expired_attempts 로 실행.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from functools import reduce
from operator import or_
from typing import List, Tuple

from django.db import transaction
from django.db.models import Q

from apps.domains.results.models import ExamAttempt
from apps.domains.results.services import clock
from apps.domains.results.services.finalizer import (
    finalize_attempt,
    lock_attempt,
    run_post_commit,
)

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_BATCH = 500


def _expire_one(exam_id: int, student_id: int) -> bool:
    with transaction.atomic():
        attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
        if attempt is None or attempt.status != ExamAttempt.Status.IN_PROGRESS:
            return False
        now = clock.db_now()
        if now <= attempt.deadline():
            return False
        fin = finalize_attempt(attempt, now=now, auto=True)

    run_post_commit(fin)
    return True


def sweep_expired_attempts(*, limit: int = DEFAULT_SWEEP_BATCH) -> List[Tuple[int, int]]:
    """
    Returns:
        자동 제출된 (exam_id, student_id) 목록
    """
    now = clock.db_now()
    in_progress = ExamAttempt.objects.filter(status=ExamAttempt.Status.IN_PROGRESS)

    # deadline = end_time + grace(시험별) → grace 값마다 end_time 기준 조건을 만든다
    graces = list(
        in_progress
        .filter(end_time__lt=now)
        .order_by()
        .values_list("exam__disconnect_grace_seconds", flat=True)
        .distinct()
    )
    if not graces:
        return []

    past_deadline = reduce(or_, (
        Q(exam__disconnect_grace_seconds=g, end_time__lt=now - timedelta(seconds=int(g)))
        for g in graces
    ))

    # 최종 판정은 lock 후 재확인
    candidates = list(
        in_progress
        .filter(past_deadline)
        .order_by("end_time")
        .values_list("exam_id", "student_id")[: int(limit)]
    )

    done: List[Tuple[int, int]] = []
    for exam_id, student_id in candidates:
        try:
            if _expire_one(exam_id, student_id):
                done.append((exam_id, student_id))
        except Exception:
            logger.exception("[SWEEP] failed exam=%s student=%s", exam_id, student_id)

    if done:
        logger.info("[SWEEP] auto-submitted %s attempt(s)", len(done))
    return done
