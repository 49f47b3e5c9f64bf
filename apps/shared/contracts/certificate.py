# apps/shared/contracts/certificate.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class IssueOutcome:
    """
    Certificate issuer → API 로 돌아오는 '계약' (Contract)

    issued=False 인 경우 reason 에 사유 (issuer_not_configured, already_issued, http_502 ...)
    """

    issued: bool
    reason: Optional[str] = None

    @staticmethod
    def ok() -> "IssueOutcome":
        return IssueOutcome(issued=True, reason=None)

    @staticmethod
    def skipped(reason: str) -> "IssueOutcome":
        return IssueOutcome(issued=False, reason=str(reason))

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "IssueOutcome":
        d = d or {}
        return IssueOutcome(
            issued=bool(d.get("issued", False)),
            reason=(str(d["reason"]) if d.get("reason") is not None else None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
