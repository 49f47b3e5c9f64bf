# PATH: apps/core/identity.py
"""
Bearer credential → 내부 User 매핑

HTTP 요청은 DRF 의 JWTAuthentication 이 처리하고,
실시간 연결(Socket.IO)은 handshake 단계에서 이 모듈을 직접 사용한다.
"""
from __future__ import annotations

import logging
from typing import Optional

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)


class Unauthenticated(Exception):
    """credential 누락/위조/만료, 또는 비활성 사용자."""

    code = "unauthenticated"
    http_status = 401


def extract_bearer(header_value: Optional[str]) -> str:
    """'Bearer <token>' 형태에서 토큰만 추출. 형식이 아니면 빈 문자열."""
    parts = (header_value or "").strip().split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return ""


def resolve_user(raw_token: Optional[str]):
    """
    raw access token → User

    Raises:
        Unauthenticated
    """
    if not raw_token:
        raise Unauthenticated("Bearer credential missing.")

    auth = JWTAuthentication()
    try:
        validated = auth.get_validated_token(raw_token)
        user = auth.get_user(validated)
    except (InvalidToken, TokenError, AuthenticationFailed) as e:
        logger.info("[IDENTITY] rejected credential: %s", e)
        raise Unauthenticated("Invalid or expired credential.") from e

    if not getattr(user, "is_active", False):
        raise Unauthenticated("User is inactive.")

    return user
