# apps/domains/results/services/finalizer.py
"""
Attempt 종결(terminal 전이) 공용 로직

제출 파이프라인 / 자동 제출 / 재접속 reconcile / sweep 이 모두 이 모듈을 통해서만
SUBMITTED 로 전이한다.

✅ 규칙
- lock_attempt / finalize_attempt 는 반드시 transaction.atomic() 안에서 호출
- finalize 직전 status 재확인 (check-then-set 은 row lock 으로 보호)
- 외부 호출(수료증 발급, 실시간 알림)은 commit 이후 run_post_commit 에서만
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from apps.domains.exams.models import ExamQuestion
from apps.domains.results.errors import AlreadySubmitted
from apps.domains.results.models import ExamAnswer, ExamAttempt, ExamResult
from apps.domains.results.services import grader
from apps.infrastructure.certificates.http_issuer import get_certificate_issuer
from apps.realtime.emitter import notify_auto_submitted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Finalization:
    exam_id: int
    student_id: int
    total_marks: int
    obtained_marks: int
    percentage: int
    passed: bool
    submitted_at: datetime
    has_coding: bool
    auto: bool


def attempt_lock_queryset(*, exam_id: int, student_id: int):
    # attempt row 만 잠근다 (join 된 exam row 는 다른 학생과 공유)
    return (
        ExamAttempt.objects
        .select_for_update(of=("self",))
        .select_related("exam")
        .filter(exam_id=int(exam_id), student_id=int(student_id))
    )


def lock_attempt(*, exam_id: int, student_id: int) -> Optional[ExamAttempt]:
    """(exam, student) attempt row 를 잠그고 반환. 없으면 None."""
    return attempt_lock_queryset(exam_id=exam_id, student_id=student_id).first()


def own_option_id(question: ExamQuestion, selected_option_id) -> Optional[int]:
    """다른 문항의 option 을 가리키면 선택 없음으로 본다."""
    if selected_option_id is None:
        return None
    try:
        sid = int(selected_option_id)
    except (TypeError, ValueError):
        return None
    owned = {o.id for o in question.options.all()}
    return sid if sid in owned else None


def score_for(
    question: ExamQuestion,
    *,
    selected_option_id: Optional[int],
    answer_text: Optional[str],
) -> Optional[int]:
    return grader.grade_answer(
        question_type=question.question_type,
        max_marks=question.marks,
        selected_option_id=selected_option_id,
        correct_option_ids=[o.id for o in question.options.all() if o.is_correct],
        answer_text=answer_text,
        keywords=question.keywords,
        min_word_count=question.min_word_count,
    )


def finalize_attempt(attempt: ExamAttempt, *, now: datetime, auto: bool) -> Finalization:
    """
    저장된 답안으로 결과 확정 + SUBMITTED 전이.

    - 미채점(marks_obtained=None) 답안은 여기서 채점 (descriptive autosave)
    - coding 은 None 유지 → 0점
    """
    if attempt.is_submitted:
        raise AlreadySubmitted()

    exam = attempt.exam

    questions = list(
        ExamQuestion.objects
        .filter(exam_id=exam.id)
        .prefetch_related("options")
    )
    answers = {
        a.question_id: a
        for a in ExamAnswer.objects.filter(exam_id=exam.id, student_id=attempt.student_id)
    }

    # ---------------------------
    # 1️⃣ 미채점 답안 채점
    # ---------------------------
    for q in questions:
        a = answers.get(q.id)
        if a is None or a.marks_obtained is not None:
            continue
        marks = score_for(
            q,
            selected_option_id=a.selected_option_id,
            answer_text=a.answer_text,
        )
        if marks is None:
            continue
        a.marks_obtained = marks
        a.save(update_fields=["marks_obtained", "updated_at"])

    # ---------------------------
    # 2️⃣ 집계 (문항 기준, 답안 없는 문항 = 0)
    # ---------------------------
    agg = grader.compute_aggregate(
        question_marks=[q.marks for q in questions],
        obtained=[
            answers[q.id].marks_obtained if q.id in answers else None
            for q in questions
        ],
        pass_percentage=exam.pass_percentage,
    )

    ExamResult.objects.update_or_create(
        exam_id=exam.id,
        student_id=attempt.student_id,
        defaults={
            "total_marks": agg.total_marks,
            "obtained_marks": agg.obtained_marks,
            "percentage": agg.percentage,
            "passed": agg.passed,
            "evaluated_at": now,
        },
    )

    # ---------------------------
    # 3️⃣ terminal 전이
    # ---------------------------
    attempt.status = ExamAttempt.Status.SUBMITTED
    attempt.submitted_at = now
    attempt.disconnected_at = None
    attempt.save(update_fields=["status", "submitted_at", "disconnected_at", "updated_at"])

    logger.info(
        "[EXAM_FINALIZE] exam=%s student=%s obtained=%s/%s pct=%s passed=%s auto=%s",
        exam.id, attempt.student_id, agg.obtained_marks, agg.total_marks,
        agg.percentage, agg.passed, auto,
    )

    return Finalization(
        exam_id=exam.id,
        student_id=attempt.student_id,
        total_marks=agg.total_marks,
        obtained_marks=agg.obtained_marks,
        percentage=agg.percentage,
        passed=agg.passed,
        submitted_at=now,
        has_coding=any(q.question_type == ExamQuestion.QuestionType.CODING for q in questions),
        auto=auto,
    )


def issue_certificate_if_eligible(fin: Finalization) -> bool:
    """
    합격 + coding 문항 없음 → 수료증 발급 요청 (best-effort)
    실패는 로그만 남기고 제출 결과에 영향 주지 않는다.
    """
    if not fin.passed or fin.has_coding:
        return False

    try:
        outcome = get_certificate_issuer().issue(fin.student_id, fin.exam_id, fin.percentage)
    except Exception:
        logger.exception(
            "[CERT] issue failed exam=%s student=%s", fin.exam_id, fin.student_id,
        )
        return False

    if not outcome.issued:
        logger.info(
            "[CERT] not issued exam=%s student=%s reason=%s",
            fin.exam_id, fin.student_id, outcome.reason,
        )
    return bool(outcome.issued)


def run_post_commit(fin: Finalization) -> bool:
    """commit 이후 호출. 수료증 발급 여부 반환."""
    certificate_issued = issue_certificate_if_eligible(fin)
    if fin.auto:
        notify_auto_submitted(
            student_id=fin.student_id,
            exam_id=fin.exam_id,
            submitted_at=fin.submitted_at,
        )
    return certificate_issued
