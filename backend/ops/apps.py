"""Ops app configuration."""

from django.apps import AppConfig


class OpsConfig(AppConfig):
    """Health probes and logging configuration; no models."""

    name = "ops"
    verbose_name = "Operations"
