# PATH: apps/api/config/settings/prod.py
from .base import *
import os

# ==================================================
# PROD MODE (외부 공개 API 서버 기준)
# ==================================================

DEBUG = False

SECRET_KEY = os.environ["SECRET_KEY"]

# ==================================================
# SECURITY
# ==================================================

SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
USE_X_FORWARDED_HOST = True

SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

# ==================================================
# ALLOWED HOSTS
# ==================================================
# prod에서는 "*" 절대 금지

ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if h.strip()
]

# ==================================================
# CORS (Frontend ↔ API 계약)
# ==================================================

CORS_ALLOW_ALL_ORIGINS = False

CORS_ALLOWED_ORIGINS = SOCKETIO_CORS_ORIGINS

CORS_ALLOW_CREDENTIALS = True

CSRF_TRUSTED_ORIGINS = [o for o in CORS_ALLOWED_ORIGINS if o.startswith("https://")]

# ==================================================
# REALTIME
# ==================================================
# 다중 인스턴스 운영: room 주소 공유를 위해 redis 큐 필수

if not SOCKETIO_MESSAGE_QUEUE:
    raise RuntimeError(
        "SOCKETIO_MESSAGE_QUEUE must be set in prod. "
        "Live exam events must reach every server instance."
    )

# ==================================================
# FINAL ASSERTIONS (운영 안정성)
# ==================================================

assert DEBUG is False, "prod.py must run with DEBUG=False"
assert "*" not in ALLOWED_HOSTS, "ALLOWED_HOSTS must be explicit in prod"
