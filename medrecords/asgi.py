"""
ASGI config for the medrecords project.

The API is plain request/response, so only the Django HTTP application
is exposed.
"""
import os

from django.core.asgi import get_asgi_application  # type: ignore

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "medrecords.settings")

application = get_asgi_application()
