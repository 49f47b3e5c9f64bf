# apps/domains/results/services/submission_service.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from django.db import DatabaseError, transaction

from apps.domains.exams.models import ExamQuestion
from apps.domains.results.errors import (
    AlreadySubmitted,
    AttemptNotFound,
    InvalidQuestionReference,
    SubmissionFailed,
    WindowClosed,
)
from apps.domains.results.models import ExamAnswer
from apps.domains.results.services import clock
from apps.domains.results.services.finalizer import (
    Finalization,
    finalize_attempt,
    lock_attempt,
    own_option_id,
    run_post_commit,
    score_for,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerInput:
    question_id: int
    selected_option_id: Optional[int] = None
    answer_text: str = ""
    code: str = ""


@dataclass(frozen=True)
class SubmissionOutcome:
    exam_id: int
    student_id: int
    total_marks: int
    obtained_marks: int
    percentage: int
    passed: bool
    certificate_issued: bool
    submitted_at: datetime
    skipped_question_ids: Tuple[int, ...] = field(default_factory=tuple)


def _split_answers(
    answers: Sequence[AnswerInput],
    questions: Dict[int, ExamQuestion],
) -> Tuple[Dict[int, AnswerInput], List[int]]:
    """쓰기 전에 타 시험 문항 참조를 걸러낸다. 같은 문항 중복은 마지막 값 우선."""
    accepted: Dict[int, AnswerInput] = {}
    skipped: List[int] = []
    for a in answers:
        if int(a.question_id) not in questions:
            skipped.append(int(a.question_id))
            continue
        accepted[int(a.question_id)] = a
    return accepted, skipped


class ExamSubmissionService:
    """
    답안 저장 / 최종 제출 / 자동 제출의 유일한 퍼블릭 서비스

    - 모든 쓰기는 attempt row lock 아래에서 수행 (exam, student 단위 상호배제)
    - 마감 = end_time + grace, DB 시계 기준
    """

    # ==================================================
    # SaveAnswer (autosave)
    # ==================================================
    @staticmethod
    @transaction.atomic
    def save_answer(
        *,
        exam_id: int,
        student_id: int,
        question_id: int,
        selected_option_id: Optional[int] = None,
        answer_text: str = "",
        code: str = "",
    ) -> ExamAnswer:
        attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
        if attempt is None:
            raise AttemptNotFound()
        if attempt.is_submitted:
            raise AlreadySubmitted()

        now = clock.db_now()
        if now > attempt.deadline():
            raise WindowClosed()

        question = (
            ExamQuestion.objects
            .prefetch_related("options")
            .filter(id=int(question_id), exam_id=int(exam_id))
            .first()
        )
        if question is None:
            raise InvalidQuestionReference()

        option_id = own_option_id(question, selected_option_id)

        # mcq 는 저장 시점 채점, descriptive 는 finalize 시점 채점
        marks = None
        if question.question_type == ExamQuestion.QuestionType.MCQ:
            marks = score_for(question, selected_option_id=option_id, answer_text=None)

        answer, _ = ExamAnswer.objects.update_or_create(
            exam_id=int(exam_id),
            question_id=question.id,
            student_id=int(student_id),
            defaults={
                "attempt": attempt,
                "selected_option_id": option_id,
                "answer_text": answer_text or "",
                "code_submission": code or "",
                "marks_obtained": marks,
            },
        )
        return answer

    # ==================================================
    # SubmitExam
    # ==================================================
    @staticmethod
    def submit_exam(
        *,
        exam_id: int,
        student_id: int,
        answers: Sequence[AnswerInput],
    ) -> SubmissionOutcome:
        try:
            with transaction.atomic():
                fin, skipped = ExamSubmissionService._submit_locked(
                    exam_id=int(exam_id),
                    student_id=int(student_id),
                    answers=answers,
                )
        except DatabaseError as e:
            logger.exception(
                "[EXAM_SUBMIT] persistence failure exam=%s student=%s", exam_id, student_id,
            )
            raise SubmissionFailed() from e

        # ---------------------------
        # 7️⃣ commit 이후 (best-effort)
        # ---------------------------
        certificate_issued = run_post_commit(fin)

        return SubmissionOutcome(
            exam_id=fin.exam_id,
            student_id=fin.student_id,
            total_marks=fin.total_marks,
            obtained_marks=fin.obtained_marks,
            percentage=fin.percentage,
            passed=fin.passed,
            certificate_issued=certificate_issued,
            submitted_at=fin.submitted_at,
            skipped_question_ids=tuple(skipped),
        )

    @staticmethod
    def _submit_locked(
        *,
        exam_id: int,
        student_id: int,
        answers: Sequence[AnswerInput],
    ) -> Tuple[Finalization, List[int]]:
        # ---------------------------
        # 1️⃣ attempt lock + 창 검증
        # ---------------------------
        attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
        if attempt is None:
            raise AttemptNotFound()
        if attempt.is_submitted:
            raise AlreadySubmitted()

        now = clock.db_now()
        if now > attempt.deadline():
            logger.info(
                "[EXAM_SUBMIT] rejected after deadline exam=%s student=%s deadline=%s now=%s",
                exam_id, student_id, attempt.deadline().isoformat(), now.isoformat(),
            )
            raise WindowClosed()

        questions = {
            q.id: q
            for q in ExamQuestion.objects.filter(exam_id=exam_id).prefetch_related("options")
        }
        accepted, skipped = _split_answers(answers, questions)
        if skipped:
            logger.warning(
                "[EXAM_SUBMIT] skipped foreign questions exam=%s student=%s ids=%s",
                exam_id, student_id, skipped,
            )

        # ---------------------------
        # 2️⃣ 기존 답안 제거 (last write wins)
        # ---------------------------
        ExamAnswer.objects.filter(exam_id=exam_id, student_id=student_id).delete()

        # ---------------------------
        # 3️⃣ 문항별 채점 + 저장
        # ---------------------------
        rows = []
        for qid, a in accepted.items():
            q = questions[qid]
            option_id = own_option_id(q, a.selected_option_id)
            rows.append(ExamAnswer(
                attempt=attempt,
                exam_id=exam_id,
                question_id=qid,
                student_id=student_id,
                selected_option_id=option_id,
                answer_text=a.answer_text or "",
                code_submission=a.code or "",
                marks_obtained=score_for(q, selected_option_id=option_id, answer_text=a.answer_text),
            ))
        ExamAnswer.objects.bulk_create(rows)

        # ---------------------------
        # 4️⃣~5️⃣ 집계 + Result upsert + SUBMITTED
        # ---------------------------
        fin = finalize_attempt(attempt, now=now, auto=False)
        return fin, skipped

    # ==================================================
    # AutoSubmitExam
    # ==================================================
    @staticmethod
    def auto_submit_exam(*, exam_id: int, student_id: int) -> Optional[Finalization]:
        """
        저장된 답안 그대로 종결. attempt 없음 / 이미 제출 → no-op (None).
        호출측(재접속, sweep)이 마감 판단을 끝낸 뒤 부른다.
        """
        with transaction.atomic():
            attempt = lock_attempt(exam_id=exam_id, student_id=student_id)
            if attempt is None or attempt.is_submitted:
                logger.debug(
                    "[EXAM_AUTO_SUBMIT] no-op exam=%s student=%s", exam_id, student_id,
                )
                return None
            fin = finalize_attempt(attempt, now=clock.db_now(), auto=True)

        run_post_commit(fin)
        return fin
