"""
Health check endpoints for operations monitoring.

Checks:
- Database connectivity (all configured databases)
- Redis broker connectivity (Celery provisioning queue)
- Sentinel company presence (new users are attached to it)

Endpoints:
- /_health/live    - Kubernetes liveness probe (is the process running?)
- /_health/ready   - Kubernetes readiness probe (can we serve traffic?)
- /_health/full    - Full health report (for debugging/dashboards)
"""
import logging
import time
from typing import Dict, Any

import redis
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import JsonResponse
from django.views import View

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> float:
    return round((time.time() - start) * 1000, 2)


class HealthCheck:
    """Health check implementation. Failures are reported, not raised."""

    @staticmethod
    def check_database(alias: str = "default") -> Dict[str, Any]:
        start = time.time()
        try:
            conn = connections[alias]
            conn.ensure_connection()
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                cursor.fetchone()
        except DatabaseError as e:
            logger.warning("Database health check failed", extra={"alias": alias, "error": str(e)})
            return {
                "status": "unhealthy",
                "alias": alias,
                "error": str(e),
                "duration_ms": _elapsed_ms(start),
            }
        return {"status": "healthy", "alias": alias, "duration_ms": _elapsed_ms(start)}

    @staticmethod
    def check_all_databases() -> Dict[str, Any]:
        results = {alias: HealthCheck.check_database(alias) for alias in settings.DATABASES}
        all_healthy = all(r["status"] == "healthy" for r in results.values())
        return {
            "status": "healthy" if all_healthy else "degraded",
            "databases": results,
        }

    @staticmethod
    def check_redis() -> Dict[str, Any]:
        """Ping the Celery broker unless provisioning runs inline."""
        broker_url = getattr(settings, "CELERY_BROKER_URL", None)
        if not broker_url or settings.PROVISIONING_SYNC:
            return {"status": "skipped", "reason": "Broker not used"}

        start = time.time()
        try:
            redis.from_url(broker_url).ping()
        except redis.RedisError as e:
            logger.warning("Redis health check failed", extra={"error": str(e)})
            return {"status": "unhealthy", "error": str(e), "duration_ms": _elapsed_ms(start)}
        return {"status": "healthy", "duration_ms": _elapsed_ms(start)}

    @staticmethod
    def check_sentinel_company() -> Dict[str, Any]:
        """
        The sentinel is created lazily by the first registration, so its
        absence only degrades the report; a trashed sentinel is unhealthy
        until the next registration restores it.
        """
        from accounts.models import Company

        try:
            sentinel = Company.all_objects.filter(is_main=True).first()
        except DatabaseError as e:
            return {"status": "error", "error": str(e)}

        if sentinel is None:
            return {"status": "degraded", "error": "Sentinel company not provisioned yet"}
        if sentinel.is_trashed:
            return {"status": "unhealthy", "company_id": sentinel.pk, "error": "Sentinel company is trashed"}
        return {"status": "healthy", "company_id": sentinel.pk, "name": sentinel.name}

    @staticmethod
    def get_full_health() -> Dict[str, Any]:
        checks = {
            "databases": HealthCheck.check_all_databases(),
            "redis": HealthCheck.check_redis(),
            "sentinel_company": HealthCheck.check_sentinel_company(),
        }

        statuses = [c.get("status", "unknown") for c in checks.values()]
        if all(s in ("healthy", "skipped") for s in statuses):
            overall = "healthy"
        elif any(s in ("unhealthy", "error") for s in statuses):
            overall = "unhealthy"
        else:
            overall = "degraded"

        return {
            "status": overall,
            "checks": checks,
            "version": getattr(settings, "VERSION", "unknown"),
            "environment": "production" if not settings.DEBUG else "development",
        }


class LivenessView(View):
    """
    Kubernetes liveness probe.

    Returns 200 if the process is running; touches no external dependency.
    """

    def get(self, request):
        return JsonResponse({"status": "alive"})


class ReadinessView(View):
    """Kubernetes readiness probe: 200 when the default database answers."""

    def get(self, request):
        db_check = HealthCheck.check_database("default")

        if db_check["status"] == "healthy":
            return JsonResponse({"status": "ready", "database": db_check})
        return JsonResponse({"status": "not_ready", "database": db_check}, status=503)


class FullHealthView(View):
    """
    Full health check for debugging and dashboards.

    Should be protected in production (internal network only).
    """

    def get(self, request):
        health = HealthCheck.get_full_health()

        status_code = 200 if health["status"] == "healthy" else 503
        return JsonResponse(health, status=status_code)
