# apps/realtime/server.py
"""
Socket.IO 서버 (시험 진행 중 연결 추적)

- handshake 에서 Bearer 토큰 검증 → 연결 = 학생 1명
- room: user_<student_id> (같은 학생의 모든 탭/기기)
- connect / exam:start → 재접속 reconcile
- disconnect → 끊김 기록 / 마감 경과 시 자동 제출

핸들러 예외는 로그만 남기고 삼킨다 (연결 계층이 죽으면 안 됨).
핸들러는 request/response 주기 밖의 스레드에서 돈다 → DB 를 쓴 핸들러는 끝에서 close_old_connections().
"""
from __future__ import annotations

import logging
from typing import List

import socketio
from django.conf import settings
from django.db import close_old_connections
from socketio import exceptions as sio_exceptions

from apps.core.identity import Unauthenticated, extract_bearer, resolve_user
from apps.domains.results.services.presence_service import PresenceService
from apps.realtime.rooms import EXAM_START_EVENT, student_room

logger = logging.getLogger(__name__)


def _client_manager():
    url = getattr(settings, "SOCKETIO_MESSAGE_QUEUE", "") or ""
    if not url:
        return None
    return socketio.RedisManager(url)


sio = socketio.Server(
    async_mode="threading",
    cors_allowed_origins=getattr(settings, "SOCKETIO_CORS_ORIGINS", []) or [],
    client_manager=_client_manager(),
    logger=False,
    engineio_logger=False,
)


def _token_from(environ: dict, auth) -> str:
    if isinstance(auth, dict) and auth.get("token"):
        token = str(auth["token"])
        return extract_bearer(token) or token
    return extract_bearer(environ.get("HTTP_AUTHORIZATION"))


def _student_id(sid: str):
    try:
        session = sio.get_session(sid)
    except KeyError:
        return None
    return session.get("student_id")


def _reconcile(student_id: int) -> List[int]:
    try:
        return PresenceService.reconcile_on_connect(student_id=student_id)
    except Exception:
        logger.exception("[PRESENCE] reconcile failed student=%s", student_id)
        return []
    finally:
        close_old_connections()


def _has_other_connections(sid: str, student_id: int) -> bool:
    for p in sio.manager.get_participants("/", student_room(student_id)):
        other = p[0] if isinstance(p, tuple) else p
        if other != sid:
            return True
    return False


# ==================================================
# connect
# ==================================================

@sio.event
def connect(sid, environ, auth=None):
    try:
        user = resolve_user(_token_from(environ, auth))
    except Unauthenticated as e:
        logger.info("[PRESENCE] connection refused sid=%s: %s", sid, e)
        raise sio_exceptions.ConnectionRefusedError("unauthenticated") from e
    finally:
        close_old_connections()

    sio.save_session(sid, {"student_id": user.id})
    sio.enter_room(sid, student_room(user.id))
    logger.debug("[PRESENCE] connected sid=%s student=%s", sid, user.id)

    # CONNECT ack 이후에 실행되어야 exam:autoSubmitted 가 이 연결에도 도달한다
    sio.start_background_task(_reconcile, user.id)


# ==================================================
# disconnect
# ==================================================

@sio.event
def disconnect(sid, reason=None):
    student_id = _student_id(sid)
    if student_id is None:
        return

    try:
        if _has_other_connections(sid, student_id):
            logger.debug(
                "[PRESENCE] disconnect ignored, other connections alive student=%s", student_id,
            )
            return
        PresenceService.record_disconnect(student_id=student_id)
    except Exception:
        logger.exception("[PRESENCE] disconnect bookkeeping failed student=%s", student_id)
    finally:
        close_old_connections()


# ==================================================
# exam:start (client → server)
# ==================================================

@sio.on(EXAM_START_EVENT)
def exam_start(sid, data=None):
    student_id = _student_id(sid)
    if student_id is None:
        return {"autoSubmitted": []}
    return {"autoSubmitted": _reconcile(student_id)}
