"""WSGI entry point for the bazaar marketplace API."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "bazaar.settings")

application = get_wsgi_application()
