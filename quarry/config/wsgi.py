"""WSGI config for the quarry project"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'quarry.config.settings')

application = get_wsgi_application()
