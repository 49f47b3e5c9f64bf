"""
시험 응시(attempt) 도메인 오류 (순수 파이썬)

view 는 code / http_status 를 그대로 응답으로 옮긴다.
"""
from __future__ import annotations

from apps.core.identity import Unauthenticated


class ExamAttemptError(Exception):
    code = "exam_attempt_error"
    http_status = 400
    default_message = "Exam attempt error."

    def __init__(self, message: str | None = None):
        self.message = str(message or self.default_message)
        super().__init__(self.message)


class ExamNotFound(ExamAttemptError):
    code = "exam_not_found"
    http_status = 404
    default_message = "Exam not found."


class NotEnrolled(ExamAttemptError):
    """강좌 연결 시험인데 ACTIVE 수강 등록이 없음."""

    code = "not_enrolled"
    http_status = 403
    default_message = "Student is not enrolled in the course of this exam."


class AttemptNotFound(ExamAttemptError):
    code = "attempt_not_found"
    http_status = 404
    default_message = "Exam attempt has not been started."


class AlreadySubmitted(ExamAttemptError):
    """
    terminal 상태 재진입.
    내부 트리거(자동 제출 경합)에서는 에러가 아니라 no-op 으로 취급한다.
    """

    code = "already_submitted"
    http_status = 409
    default_message = "Exam has already been submitted."


class WindowClosed(ExamAttemptError):
    code = "window_closed"
    http_status = 403
    default_message = "Exam window has closed."


class InvalidQuestionReference(ExamAttemptError):
    code = "invalid_question"
    http_status = 400
    default_message = "Question does not belong to this exam."


class SubmissionFailed(ExamAttemptError):
    """저장 계층 실패. 트랜잭션 전체 롤백 후 일반화된 메시지만 노출."""

    code = "submission_failed"
    http_status = 500
    default_message = "Failed to submit exam."


__all__ = [
    "ExamAttemptError",
    "ExamNotFound",
    "NotEnrolled",
    "AttemptNotFound",
    "AlreadySubmitted",
    "WindowClosed",
    "InvalidQuestionReference",
    "SubmissionFailed",
    "Unauthenticated",
]
