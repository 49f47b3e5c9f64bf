import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE",
    "apps.api.config.settings.prod",
)

django_application = get_wsgi_application()

# Socket.IO 서버가 /socket.io/ 를 처리하고 나머지는 Django로 넘긴다.
# django setup 이후에 import 해야 한다 (핸들러가 ORM 사용).
import socketio  # noqa: E402

from apps.realtime.server import sio  # noqa: E402

application = socketio.WSGIApp(sio, django_application)
