# PATH: apps/domains/results/views/base.py
from __future__ import annotations

import logging

from rest_framework.response import Response

from apps.domains.results.errors import ExamAttemptError

logger = logging.getLogger(__name__)


def domain_error_response(exc: ExamAttemptError) -> Response:
    return Response(
        {"detail": exc.message, "code": exc.code},
        status=exc.http_status,
    )


class ExamAttemptErrorMixin:
    """
    서비스 계층 도메인 예외 → {"detail", "code"} JSON
    그 외 예외는 DRF 기본 처리로 넘긴다.
    """

    def handle_exception(self, exc):
        if isinstance(exc, ExamAttemptError):
            if exc.http_status >= 500:
                logger.error("[EXAM_API] %s: %s", exc.code, exc.message)
            return domain_error_response(exc)
        return super().handle_exception(exc)
