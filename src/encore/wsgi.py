"""WSGI config for the Encore project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "encore.settings")

application = get_wsgi_application()
