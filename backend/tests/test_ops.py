# tests/test_ops.py
"""
Tests for operations endpoints and structured logging.
"""

import json
import logging

import pytest
from django.test import override_settings

from accounts.models import Company
from ops.health import HealthCheck
from ops.logging_config import JsonFormatter, get_logging_config


@pytest.mark.django_db
class TestHealth:

    def test_liveness(self, client):
        response = client.get("/_health/live")

        assert response.status_code == 200
        assert response.json() == {"status": "alive"}

    def test_readiness_checks_database(self, client):
        response = client.get("/_health/ready")

        assert response.status_code == 200
        assert response.json()["database"]["status"] == "healthy"

    def test_missing_sentinel_degrades(self):
        assert HealthCheck.check_sentinel_company()["status"] == "degraded"

    def test_trashed_sentinel_is_unhealthy(self):
        sentinel = Company.all_objects.create(name="Main", is_main=True)
        sentinel.delete()

        assert HealthCheck.check_sentinel_company()["status"] == "unhealthy"

    @override_settings(PROVISIONING_SYNC=True)
    def test_full_health_with_sentinel(self, client):
        Company.all_objects.create(name="Main", is_main=True)

        response = client.get("/_health/full")

        assert response.status_code == 200
        body = response.json()
        assert body["checks"]["redis"]["status"] == "skipped"
        assert body["checks"]["sentinel_company"]["status"] == "healthy"


class TestLoggingConfig:

    def test_app_loggers_configured(self):
        config = get_logging_config(debug=True)

        for name in ("accounts", "catalog", "ops", "celery"):
            assert name in config["loggers"]

    def test_json_formatter_lifts_extra(self):
        record = logging.LogRecord("accounts.grants", logging.INFO, __file__, 1, "Grant issued", (), None)
        record.user_id = 5
        record.target_kind = "brand"

        entry = json.loads(JsonFormatter().format(record))

        assert entry["message"] == "Grant issued"
        assert entry["logger"] == "accounts.grants"
        assert entry["extra"] == {"user_id": 5, "target_kind": "brand"}
