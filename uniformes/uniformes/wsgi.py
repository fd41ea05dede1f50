"""
WSGI config for the uniformes project.

Экспортирует ``application`` для gunicorn/passenger.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "uniformes.settings")

application = get_wsgi_application()
