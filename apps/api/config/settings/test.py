# apps/api/config/settings/test.py
from .base import *

DEBUG = False

SECRET_KEY = "test-secret-key-with-enough-length-for-hs256-signing"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# 테스트에서는 외부 협력자 모두 비활성
CELERY_TASK_ALWAYS_EAGER = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

SOCKETIO_MESSAGE_QUEUE = ""
CERTIFICATE_ISSUER_URL = ""

LOGGING["root"]["level"] = "WARNING"
