"""
WSGI entry point for the matrix service.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "matrixsvc.settings")

application = get_wsgi_application()
