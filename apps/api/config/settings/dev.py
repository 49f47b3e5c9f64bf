from .base import *

DEBUG = True
ALLOWED_HOSTS = ["*"]

# 🔴 base 설정 유지 + 세션 인증만 추가 (browsable API 용)
REST_FRAMEWORK["DEFAULT_AUTHENTICATION_CLASSES"] = [
    "rest_framework.authentication.SessionAuthentication",
    "rest_framework_simplejwt.authentication.JWTAuthentication",
]

LOGGING["root"]["level"] = "DEBUG"
