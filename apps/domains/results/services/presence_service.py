# apps/domains/results/services/presence_service.py
"""
실시간 연결 기반 끊김/재접속 reconcile

연결 계층(Socket.IO)과 HTTP 요청은 서로 독립적으로 스케줄되므로
만료 판정을 connect / disconnect 양쪽에서 모두 수행한다.
오류는 attempt 단위로 로그만 남기고 삼킨다 (다른 학생/다른 attempt 에 영향 ❌).
"""
from __future__ import annotations

import logging
from typing import Callable, List, Optional

from django.db import transaction

from apps.domains.results.models import ExamAttempt
from apps.domains.results.services import clock
from apps.domains.results.services.finalizer import (
    Finalization,
    finalize_attempt,
    lock_attempt,
    run_post_commit,
)

logger = logging.getLogger(__name__)


def _in_progress_exam_ids(student_id: int) -> List[int]:
    return list(
        ExamAttempt.objects
        .filter(student_id=int(student_id), status=ExamAttempt.Status.IN_PROGRESS)
        .values_list("exam_id", flat=True)
    )


def _for_each_attempt(
    student_id: int,
    step: Callable[[int, int], Optional[Finalization]],
    tag: str,
) -> List[int]:
    submitted: List[int] = []
    for exam_id in _in_progress_exam_ids(student_id):
        try:
            fin = step(exam_id, student_id)
        except Exception:
            logger.exception(
                "[PRESENCE] %s failed exam=%s student=%s", tag, exam_id, student_id,
            )
            continue
        if fin is None:
            continue
        try:
            run_post_commit(fin)
        except Exception:
            logger.exception(
                "[PRESENCE] post-commit failed exam=%s student=%s", exam_id, student_id,
            )
        submitted.append(exam_id)
    return submitted


def _reconnect_one(exam_id: int, student_id: int) -> Optional[Finalization]:
    with transaction.atomic():
        attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
        if attempt is None or attempt.status != ExamAttempt.Status.IN_PROGRESS:
            return None

        now = clock.db_now()

        if now > attempt.deadline() or attempt.disconnect_grace_expired(now):
            logger.info(
                "[PRESENCE] reconnect after grace exam=%s student=%s disconnected_at=%s",
                exam_id, student_id, attempt.disconnected_at,
            )
            return finalize_attempt(attempt, now=now, auto=True)

        if attempt.disconnected_at is not None:
            attempt.disconnected_at = None
            attempt.save(update_fields=["disconnected_at", "updated_at"])
            logger.info("[PRESENCE] reconnected in time exam=%s student=%s", exam_id, student_id)

        return None


def _disconnect_one(exam_id: int, student_id: int) -> Optional[Finalization]:
    with transaction.atomic():
        attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
        if attempt is None or attempt.status != ExamAttempt.Status.IN_PROGRESS:
            return None

        now = clock.db_now()

        # 연결 중에 이미 마감이 지난 경우: 끊김 시점에서야 발견
        if now > attempt.deadline():
            logger.info("[PRESENCE] expired at disconnect exam=%s student=%s", exam_id, student_id)
            return finalize_attempt(attempt, now=now, auto=True)

        if attempt.disconnected_at is None:
            attempt.disconnected_at = now
            attempt.save(update_fields=["disconnected_at", "updated_at"])

        return None


class PresenceService:

    @staticmethod
    def reconcile_on_connect(*, student_id: int) -> List[int]:
        """재접속 / exam:start. 자동 제출된 exam_id 목록 반환."""
        return _for_each_attempt(student_id, _reconnect_one, "reconnect")

    @staticmethod
    def record_disconnect(*, student_id: int) -> List[int]:
        """연결 종료. 자동 제출된 exam_id 목록 반환."""
        return _for_each_attempt(student_id, _disconnect_one, "disconnect")
