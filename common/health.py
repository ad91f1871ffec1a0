"""
common.health
~~~~~~~~~~~~~
GET /health/ – lightweight liveness + readiness probe.

Returns:
    200  {"status": "ok", "db": "ok", "admin_role": "ok"}
    503  {"status": "degraded", "db": "error: <msg>", ...}  – DB unreachable

``admin_role`` reports ``"missing"`` until ``bootstrap_admin`` has been run;
that alone does not degrade the probe.
"""
import structlog
from django.contrib.auth.models import Group
from django.db import DatabaseError, OperationalError, connection
from django.http import JsonResponse

from apps.accounts.roles import system_administrator_role

logger = structlog.get_logger(__name__)


def health_check(request):
    """Return service health including database connectivity status."""
    db_status: str
    role_status = "unknown"
    http_status: int

    try:
        connection.ensure_connection()
        db_status = "ok"
        http_status = 200
    except OperationalError as exc:
        db_status = f"error: {exc}"
        http_status = 503
        logger.error("health_check_db_failure", error=str(exc))

    if http_status == 200:
        try:
            exists = Group.objects.filter(name=system_administrator_role()).exists()
            role_status = "ok" if exists else "missing"
        except DatabaseError as exc:
            role_status = f"error: {exc}"
            logger.warning("health_check_role_lookup_failed", error=str(exc))

    payload = {
        "status": "ok" if http_status == 200 else "degraded",
        "db": db_status,
        "admin_role": role_status,
    }
    return JsonResponse(payload, status=http_status)
