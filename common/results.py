"""
common.results
~~~~~~~~~~~~~~
Uniform result envelope returned by every service operation.

Public API
----------
ServiceResult       – ``{success, data, message, code}`` dataclass
service_operation   – decorator converting domain errors into failed results
"""
from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

import structlog
from django.db import DatabaseError, IntegrityError
from django.db.models import ProtectedError
from django.utils.translation import gettext as _

from common.exceptions import AppError, ConflictError, InternalError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        success: ``True`` iff the operation completed.  Callers branch on
            this field only.
        data: Operation payload (new id, ``True``, a list of summaries …) or
            ``None`` on failure.
        message: Human-readable, localized description of the outcome.
        code: Error kind on failure (``"not_found"``, ``"conflict"`` …),
            empty on success.
    """

    success: bool
    data: T | None = None
    message: str = ""
    code: str = ""

    @classmethod
    def ok(cls, data: T | None = None, message: str = "") -> "ServiceResult[T]":
        return cls(success=True, data=data, message=str(message))

    @classmethod
    def fail(cls, error: AppError) -> "ServiceResult[T]":
        return cls(success=False, data=None, message=error.detail, code=error.code)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": self.data,
            "message": self.message,
            "code": self.code,
        }


def _context_id(kwargs: dict, key: str) -> str | None:
    value = kwargs.get(key)
    return str(value) if value is not None else None


def service_operation(func: Callable[..., ServiceResult]) -> Callable[..., ServiceResult]:
    """
    Wrap a service function so that no domain or store error escapes it.

    The wrapped function raises :class:`~common.exceptions.AppError`
    subclasses; this decorator logs each failure with the operation name and
    the requester id (taken from the ``requester_id`` or ``created_by``
    keyword argument) and returns ``ServiceResult.fail``.

    Store errors that slip past the service's own checks are mapped as well:

    - ``ProtectedError`` (restrict-on-delete)  → ``internal_error``
    - ``IntegrityError`` (unique index)        → ``conflict``
    - any other ``DatabaseError``              → ``internal_error``
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> ServiceResult:
        log = logger.bind(
            operation=func.__name__,
            requester_id=_context_id(kwargs, "requester_id") or _context_id(kwargs, "created_by"),
        )
        try:
            return func(*args, **kwargs)
        except AppError as exc:
            log.warning("operation_denied", code=exc.code, detail=exc.detail)
            return ServiceResult.fail(exc)
        except ProtectedError as exc:
            log.error("operation_store_restricted", error=str(exc))
            return ServiceResult.fail(
                InternalError(_("The record is still referenced by other records."))
            )
        except IntegrityError as exc:
            log.warning("operation_integrity_conflict", error=str(exc))
            return ServiceResult.fail(ConflictError())
        except DatabaseError:
            log.exception("operation_store_failure")
            return ServiceResult.fail(InternalError())

    return wrapper
