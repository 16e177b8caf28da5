"""
Celery application configuration.

This is the main Celery app for the catalog backend.
It runs background jobs such as provisioning newly registered users.

Usage:
    # Start worker
    celery -A catalog_backend worker -l INFO
"""
import os

from celery import Celery

# Set default Django settings
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "catalog_backend.settings")

# Create Celery app
app = Celery("catalog_backend")

# Load config from Django settings
app.config_from_object("django.conf:settings", namespace="CELERY")

# Auto-discover tasks from all installed apps
app.autodiscover_tasks()
