# ==============================================================================
# PATH: apps/infrastructure/certificates/http_issuer.py
#
# PURPOSE:
# - 외부 수료증 발급 서비스 어댑터 (ICertificateIssuer 구현)
# - CERTIFICATE_ISSUER_URL 미설정 시 NullCertificateIssuer
# ==============================================================================

from __future__ import annotations

import logging

import requests
from django.conf import settings

from apps.shared.contracts.certificate import IssueOutcome
from apps.shared.ports.certificate_issuer import ICertificateIssuer

logger = logging.getLogger(__name__)


class HttpCertificateIssuer(ICertificateIssuer):
    """POST {base_url}/certificates/ → {"issued": bool, "reason": str?}"""

    def __init__(self, *, base_url: str, token: str = "", timeout: float = 5.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout = timeout

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def issue(self, student_id: int, exam_id: int, percentage: int) -> IssueOutcome:
        url = f"{self._base_url}/certificates/"
        resp = requests.post(
            url,
            json={
                "student_id": int(student_id),
                "exam_id": int(exam_id),
                "percentage": int(percentage),
            },
            headers=self._headers(),
            timeout=self._timeout,
        )

        if resp.status_code >= 400:
            logger.warning(
                "[CERT] issuer rejected student=%s exam=%s status=%s",
                student_id, exam_id, resp.status_code,
            )
            return IssueOutcome.skipped(f"http_{resp.status_code}")

        return IssueOutcome.from_dict(resp.json())


class NullCertificateIssuer(ICertificateIssuer):
    def issue(self, student_id: int, exam_id: int, percentage: int) -> IssueOutcome:
        return IssueOutcome.skipped("issuer_not_configured")


def get_certificate_issuer() -> ICertificateIssuer:
    base_url = getattr(settings, "CERTIFICATE_ISSUER_URL", "") or ""
    if not base_url:
        return NullCertificateIssuer()
    return HttpCertificateIssuer(
        base_url=base_url,
        token=getattr(settings, "CERTIFICATE_ISSUER_TOKEN", "") or "",
        timeout=float(getattr(settings, "CERTIFICATE_ISSUER_TIMEOUT", 5.0)),
    )
