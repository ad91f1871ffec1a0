"""
common.exceptions
~~~~~~~~~~~~~~~~~
Domain error taxonomy and the centralised DRF exception handler.

Service code raises these; :func:`common.results.service_operation` turns them
into failed :class:`~common.results.ServiceResult` envelopes at the operation
boundary.  The DRF handler below only sees errors raised outside a service
operation (e.g. from a view helper).
"""
import structlog
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base application error.  Subclass to define domain-specific errors."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_code: str = "error"
    default_detail: str = _("An error occurred.")

    def __init__(self, detail: str | None = None, code: str | None = None) -> None:
        self.detail = str(detail or self.default_detail)
        self.code = code or self.default_code
        super().__init__(self.detail)

    def __str__(self) -> str:
        return self.detail


class ValidationError(AppError):
    """Input shape, length or required-field violation, raised before any store access."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_code = "validation_error"
    default_detail = _("Invalid data.")


class AccessDeniedError(AppError):
    """Requester missing, locked out, lacking the role, or acting on an inactive organization."""

    status_code = status.HTTP_403_FORBIDDEN
    default_code = "access_denied"
    default_detail = _("Access denied.")


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = "not_found"
    default_detail = _("The requested resource was not found.")


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_code = "conflict"
    default_detail = _("A resource conflict occurred.")


class InvalidOperationError(AppError):
    """Domain rule violation such as a self-loop or a cross-organization connection."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_code = "invalid_operation"
    default_detail = _("The operation is not allowed.")


class InternalError(AppError):
    """Store-layer failure while persisting, including restrict-on-delete violations."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = "internal_error"
    default_detail = _("An internal error occurred.")


#: Error code -> HTTP status, used by views that render ServiceResult envelopes.
STATUS_BY_CODE: dict[str, int] = {
    cls.default_code: cls.status_code
    for cls in (
        ValidationError,
        AccessDeniedError,
        NotFoundError,
        ConflictError,
        InvalidOperationError,
        InternalError,
    )
}


def custom_exception_handler(exc: Exception, context: dict) -> Response | None:
    """
    Global DRF exception handler.
    Converts AppError subclasses to JSON responses and delegates everything
    else to the default DRF handler so standard DRF exceptions still work.
    """
    if isinstance(exc, AppError):
        logger.warning(
            "app_error",
            code=exc.code,
            detail=exc.detail,
            status_code=exc.status_code,
        )
        return Response(
            {"success": False, "data": None, "message": exc.detail, "code": exc.code},
            status=exc.status_code,
        )

    response = drf_exception_handler(exc, context)
    if response is not None:
        logger.warning(
            "drf_error",
            detail=response.data,
            status_code=response.status_code,
        )
    else:
        logger.exception("unhandled_exception", exc_info=exc)

    return response
