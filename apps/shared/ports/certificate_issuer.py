"""
Certificate Issuer Port (인터페이스)
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from apps.shared.contracts.certificate import IssueOutcome


class ICertificateIssuer(ABC):
    @abstractmethod
    def issue(self, student_id: int, exam_id: int, percentage: int) -> IssueOutcome:
        """합격 결과에 대한 수료증 발급 요청. 실패는 예외로 올려도 된다 (호출측이 흡수)."""
        ...
