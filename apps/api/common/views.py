"""
공통 API 뷰
"""
import logging

from django.conf import settings
from django.db import DatabaseError, connection
from django.http import JsonResponse

from apps.domains.results.services import clock

logger = logging.getLogger(__name__)


def health_check(request):
    """
    헬스체크 + DB 시계

    시험 마감 판정은 DB 시계를 쓰므로 server_time 도 DB 기준으로 내려준다.

    Returns:
        - 200: DB 연결 정상
        - 503: DB 연결 실패
    """
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        now = clock.db_now()
    except DatabaseError as e:
        logger.error("[HEALTH] database unavailable: %s", e)
        body = {"status": "unhealthy", "service": "lms-api", "database": "disconnected"}
        if settings.DEBUG:
            body["error"] = str(e)
        return JsonResponse(body, status=503)

    return JsonResponse({
        "status": "healthy",
        "service": "lms-api",
        "database": "connected",
        "server_time": now.isoformat(),
    }, status=200)
