# apps/domains/results/services/clock.py
"""
권위 있는 "now"

마감 비교는 항상 DB 서버 시계를 기준으로 한다 (앱 서버 간 시계 drift 차단).
호출자는 attempt row 를 읽는 같은 트랜잭션 안에서 호출할 것.
"""
from __future__ import annotations

from datetime import datetime

from django.db import connection
from django.utils import timezone


def db_now() -> datetime:
    if connection.vendor == "postgresql":
        with connection.cursor() as cursor:
            # 트랜잭션 시작 시각이 아니라 실제 시각
            cursor.execute("SELECT clock_timestamp()")
            row = cursor.fetchone()
        return row[0]

    # sqlite 등 단일 프로세스 환경 (테스트)
    return timezone.now()
