# apps/realtime/emitter.py
"""
서버 → 클라이언트 실시간 알림

- SOCKETIO_MESSAGE_QUEUE 설정 시: redis 큐로 발행 (다른 서버 프로세스 / celery 워커에서도 도달)
- 미설정 시: 같은 프로세스의 Socket.IO 서버로 직접 emit
- 알림 실패는 로그만 남긴다 (시험 상태 전이는 이미 commit 됨)
"""
from __future__ import annotations

import logging
from datetime import datetime
from functools import lru_cache

import socketio
from django.conf import settings

from apps.realtime.rooms import AUTO_SUBMITTED_EVENT, student_room

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _external_manager():
    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "") or ""
    if not url:
        return None
    return socketio.RedisManager(url, write_only=True)


def _emit(event: str, data: dict, *, room: str) -> None:
    manager = _external_manager()
    if manager is not None:
        manager.emit(event, data, room=room)
        return

    from apps.realtime.server import sio

    sio.emit(event, data, room=room)


def notify_auto_submitted(*, student_id: int, exam_id: int, submitted_at: datetime) -> None:
    payload = {
        "examId": int(exam_id),
        "submittedAt": submitted_at.isoformat() if submitted_at else None,
    }
    try:
        _emit(AUTO_SUBMITTED_EVENT, payload, room=student_room(student_id))
    except Exception:
        logger.exception(
            "[PRESENCE] auto-submit notify failed exam=%s student=%s", exam_id, student_id,
        )
