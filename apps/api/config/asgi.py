import os
from django.core.asgi import get_asgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    "apps.api.config.settings.prod",
)

# HTTP 전용. 실시간 시험 이벤트(Socket.IO)는 wsgi.py 진입점에서 함께 서빙된다.
application = get_asgi_application()
