# apps/domains/results/services/attempt_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from django.db import IntegrityError, transaction

from apps.domains.enrollment.models import is_enrolled
from apps.domains.exams.models import Exam
from apps.domains.results.errors import (
    AlreadySubmitted,
    AttemptNotFound,
    ExamNotFound,
    NotEnrolled,
)
from apps.domains.results.models import ExamAnswer, ExamAttempt, ExamResult
from apps.domains.results.services import clock
from apps.domains.results.services.finalizer import (
    finalize_attempt,
    lock_attempt,
    run_post_commit,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttemptWindow:
    """클라이언트가 자기 시계를 믿지 않고 남은 시간을 계산할 수 있게 server_time 포함."""

    exam_id: int
    student_id: int
    status: str
    start_time: datetime
    end_time: datetime
    deadline: datetime
    server_time: datetime
    submitted_at: Optional[datetime] = None
    disconnected_at: Optional[datetime] = None

    @staticmethod
    def of(attempt: ExamAttempt, *, now: datetime) -> "AttemptWindow":
        return AttemptWindow(
            exam_id=attempt.exam_id,
            student_id=attempt.student_id,
            status=attempt.status,
            start_time=attempt.start_time,
            end_time=attempt.end_time,
            deadline=attempt.deadline(),
            server_time=now,
            submitted_at=attempt.submitted_at,
            disconnected_at=attempt.disconnected_at,
        )


def load_exam(exam_id: int) -> Exam:
    exam = Exam.objects.filter(id=int(exam_id), is_active=True).first()
    if not exam:
        raise ExamNotFound()
    return exam


def ensure_can_attempt(exam: Exam, student_id: int) -> None:
    if exam.course_id and not is_enrolled(student_id=student_id, course_id=exam.course_id):
        raise NotEnrolled()


class ExamAttemptService:
    """
    ExamAttempt 생성/재개/재응시 전담

    🔥 불변식
    - (exam, student) 당 attempt 1개 (unique constraint + IntegrityError 재조회)
    - end_time 은 생성/rewrite 시점에만 now + duration 으로 설정
    """

    @staticmethod
    def start_or_resume(*, exam_id: int, student_id: int) -> AttemptWindow:
        exam = load_exam(exam_id)
        ensure_can_attempt(exam, student_id)

        fin = None
        with transaction.atomic():
            now = clock.db_now()

            # -------------------------------------------------
            # 1️⃣ (exam, student) lock / 최초 생성
            # -------------------------------------------------
            attempt = lock_attempt(exam_id=exam.id, student_id=student_id)
            if attempt is None:
                attempt = ExamAttemptService._create(exam=exam, student_id=student_id, now=now)

            if attempt.is_submitted:
                raise AlreadySubmitted()

            # -------------------------------------------------
            # 2️⃣ 만료 확인 (마감 경과 / 끊김 허용시간 경과 → 자동 제출)
            # -------------------------------------------------
            if now > attempt.deadline() or attempt.disconnect_grace_expired(now):
                fin = finalize_attempt(attempt, now=now, auto=True)

            # -------------------------------------------------
            # 3️⃣ 허용시간 내 재접속 → 끊김 플래그 해제
            # -------------------------------------------------
            elif attempt.disconnected_at is not None:
                attempt.disconnected_at = None
                attempt.save(update_fields=["disconnected_at", "updated_at"])

            window = AttemptWindow.of(attempt, now=now)

        if fin is not None:
            run_post_commit(fin)
            raise AlreadySubmitted("Exam window expired; the attempt was submitted automatically.")

        return window

    @staticmethod
    def _create(*, exam: Exam, student_id: int, now: datetime) -> ExamAttempt:
        try:
            with transaction.atomic():
                attempt = ExamAttempt.objects.create(
                    exam=exam,
                    student_id=student_id,
                    status=ExamAttempt.Status.IN_PROGRESS,
                    start_time=now,
                    end_time=now + timedelta(minutes=int(exam.duration_minutes)),
                )
        except IntegrityError:
            # 동시 요청이 먼저 생성함 → 그 row 를 잠그고 사용
            attempt = lock_attempt(exam_id=exam.id, student_id=student_id)
            if attempt is None:
                raise
            return attempt

        logger.info(
            "[EXAM_START] exam=%s student=%s end_time=%s",
            exam.id, student_id, attempt.end_time.isoformat(),
        )
        return attempt

    @staticmethod
    @transaction.atomic
    def rewrite(*, exam_id: int, student_id: int) -> AttemptWindow:
        """
        강사/관리자 전용 재응시.
        기존 답안/결과 삭제, now 기준으로 창 재생성, IN_PROGRESS 로 되돌림.
        """
        exam = load_exam(exam_id)
        now = clock.db_now()

        attempt = lock_attempt(exam_id=exam.id, student_id=student_id)
        if attempt is None:
            attempt = ExamAttemptService._create(exam=exam, student_id=student_id, now=now)

        ExamAnswer.objects.filter(exam_id=exam.id, student_id=student_id).delete()
        ExamResult.objects.filter(exam_id=exam.id, student_id=student_id).delete()

        attempt.status = ExamAttempt.Status.IN_PROGRESS
        attempt.start_time = now
        attempt.end_time = now + timedelta(minutes=int(exam.duration_minutes))
        attempt.disconnected_at = None
        attempt.submitted_at = None
        attempt.save(update_fields=[
            "status", "start_time", "end_time",
            "disconnected_at", "submitted_at", "updated_at",
        ])

        logger.info(
            "[EXAM_REWRITE] exam=%s student=%s end_time=%s",
            exam.id, student_id, attempt.end_time.isoformat(),
        )
        return AttemptWindow.of(attempt, now=now)

    @staticmethod
    def get_status(*, exam_id: int, student_id: int) -> AttemptWindow:
        attempt = (
            ExamAttempt.objects
            .select_related("exam")
            .filter(exam_id=int(exam_id), student_id=int(student_id))
            .first()
        )
        if attempt is None:
            raise AttemptNotFound()
        return AttemptWindow.of(attempt, now=clock.db_now())
