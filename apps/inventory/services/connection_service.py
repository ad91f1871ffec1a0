"""
apps.inventory.services.connection_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Business rules for connections between devices.

A connection joins two *different* devices of the *same* organisation and
carries that organisation's id.  The organisation never changes after
creation: endpoint changes are re-validated against the connection's own
organisation, not a caller-supplied one.

Every public operation returns a :class:`~common.results.ServiceResult`.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.db import transaction
from django.utils.translation import gettext as _

from apps.accounts.services.authorization import (
    RequesterSnapshot,
    is_system_administrator,
    require_organization_access,
    resolve_requester,
)
from apps.inventory.models import Connection, ConnectionType, Device
from apps.organizations.models import Organization
from common.exceptions import AccessDeniedError, InvalidOperationError, NotFoundError
from common.ids import parse_uuid
from common.results import ServiceResult, service_operation
from common.validation import check_choice, check_length, ensure_valid

logger = structlog.get_logger(__name__)

LABEL_MAX_LENGTH = 50


@dataclass(frozen=True)
class ConnectionSummary:
    id: object
    source_device_id: object
    source_device_name: str
    source_device_type: str
    source_interface: str | None
    destination_device_id: object
    destination_device_name: str
    destination_device_type: str
    destination_interface: str | None
    type: str
    speed: str | None
    organization_id: object


@dataclass(frozen=True)
class ConnectionPatch:
    """
    Partial update for a connection.  ``None`` leaves a field unchanged; an
    empty string clears an optional label (interfaces, speed).
    """

    source_device_id: object = None
    destination_device_id: object = None
    source_interface: str | None = None
    destination_interface: str | None = None
    type: str | None = None
    speed: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _same_device(first, second) -> bool:
    a, b = parse_uuid(first), parse_uuid(second)
    if a is not None and b is not None:
        return a == b
    return first is not None and str(first) == str(second)


def _find_device(device_id) -> Device | None:
    pk = parse_uuid(device_id)
    return Device.objects.filter(pk=pk).first() if pk else None


def get_connection(connection_id) -> Connection:
    """
    Fetch a :class:`Connection` by id.

    Raises:
        NotFoundError: If *connection_id* is malformed or nothing matches.
    """
    pk = parse_uuid(connection_id)
    connection = Connection.objects.filter(pk=pk).first() if pk else None
    if connection is None:
        raise NotFoundError(_("Connection not found."))
    return connection


def visible_connections(requester: RequesterSnapshot):
    """Queryset of the connections *requester* may see."""
    queryset = Connection.objects.select_related("source_device", "destination_device")
    if is_system_administrator(requester):
        return queryset
    return queryset.filter(organization_id__in=requester.organization_ids)


def _validate_labels(
    errors: list[str],
    *,
    source_interface: str | None,
    destination_interface: str | None,
    speed: str | None,
) -> None:
    check_length(errors, source_interface, label=_("Source interface"), max_length=LABEL_MAX_LENGTH)
    check_length(errors, destination_interface, label=_("Destination interface"), max_length=LABEL_MAX_LENGTH)
    check_length(errors, speed, label=_("Speed"), max_length=LABEL_MAX_LENGTH)


def _summary(connection: Connection) -> ConnectionSummary:
    source = connection.source_device
    destination = connection.destination_device
    return ConnectionSummary(
        id=connection.id,
        source_device_id=source.id,
        source_device_name=source.name,
        source_device_type=source.type,
        source_interface=connection.source_interface,
        destination_device_id=destination.id,
        destination_device_name=destination.name,
        destination_device_type=destination.type,
        destination_interface=connection.destination_interface,
        type=connection.type,
        speed=connection.speed,
        organization_id=connection.organization_id,
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@service_operation
def create_connection(
    *,
    requester_id,
    source_device_id,
    destination_device_id,
    type: str,
    organization_id,
    source_interface: str | None = None,
    destination_interface: str | None = None,
    speed: str | None = None,
) -> ServiceResult:
    """
    Link two devices of one organisation.

    Steps:

    1. A device cannot be linked to itself (checked before anything else,
       whoever the requester is).
    2. Validate label lengths and the connection type.
    3. Resolve the requester.
    4. Both devices must exist.
    5. Both devices must belong to *organization_id*.
    6. Require admin or membership of *organization_id*.
    7. The organisation must be active.
    8. Persist and return the new id.
    """
    logger.info(
        "connection_create_requested",
        source_device_id=str(source_device_id),
        destination_device_id=str(destination_device_id),
        organization_id=str(organization_id),
    )

    if _same_device(source_device_id, destination_device_id):
        raise InvalidOperationError(_("A device cannot be connected to itself."))

    errors: list[str] = []
    _validate_labels(
        errors,
        source_interface=source_interface,
        destination_interface=destination_interface,
        speed=speed,
    )
    check_choice(errors, type, ConnectionType, label=_("Connection type"), required=True)
    ensure_valid(errors)

    requester = resolve_requester(requester_id, message=_("Invalid or inactive requester."))

    source = _find_device(source_device_id)
    destination = _find_device(destination_device_id)
    if source is None or destination is None:
        raise NotFoundError(_("One or both devices were not found."))

    org_pk = parse_uuid(organization_id)
    if org_pk is None or source.organization_id != org_pk or destination.organization_id != org_pk:
        raise InvalidOperationError(_("Both devices must belong to the same organization."))

    require_organization_access(
        requester,
        org_pk,
        message=_("Access denied: you are not allowed to create connections in this organization."),
    )

    org = Organization.objects.filter(pk=org_pk).first()
    if org is None:
        raise NotFoundError(_("Organization not found."))
    if not org.is_active:
        raise AccessDeniedError(_("Connections cannot be added to an inactive organization."))

    with transaction.atomic():
        connection = Connection.objects.create(
            source_device=source,
            destination_device=destination,
            source_interface=source_interface or None,
            destination_interface=destination_interface or None,
            type=type,
            speed=speed or None,
            organization_id=org_pk,
        )

    logger.info("connection_created", connection_id=str(connection.id), organization_id=str(org_pk))
    return ServiceResult.ok(connection.id, _("Connection created successfully."))


@service_operation
def update_connection(*, requester_id, connection_id, patch: ConnectionPatch) -> ServiceResult:
    """
    Apply a partial update to a connection.

    When an endpoint changes, the final pair is re-checked: no self-loop,
    both devices exist, and both belong to the connection's organisation.
    """
    logger.info("connection_update_requested", connection_id=str(connection_id), requester_id=str(requester_id))

    errors: list[str] = []
    _validate_labels(
        errors,
        source_interface=patch.source_interface,
        destination_interface=patch.destination_interface,
        speed=patch.speed,
    )
    check_choice(errors, patch.type, ConnectionType, label=_("Connection type"))
    ensure_valid(errors)

    requester = resolve_requester(requester_id, message=_("Invalid or inactive requester."))
    connection = get_connection(connection_id)
    require_organization_access(
        requester,
        connection.organization_id,
        message=_("Access denied: you are not allowed to edit this connection."),
    )

    endpoints_changed = patch.source_device_id is not None or patch.destination_device_id is not None
    if endpoints_changed:
        final_source = patch.source_device_id if patch.source_device_id is not None else connection.source_device_id
        final_destination = (
            patch.destination_device_id
            if patch.destination_device_id is not None
            else connection.destination_device_id
        )
        if _same_device(final_source, final_destination):
            raise InvalidOperationError(_("A device cannot be connected to itself."))

        source = _find_device(final_source)
        destination = _find_device(final_destination)
        if source is None or destination is None:
            raise NotFoundError(_("One or both devices were not found."))

        org_pk = connection.organization_id
        if source.organization_id != org_pk or destination.organization_id != org_pk:
            raise InvalidOperationError(
                _("Both devices must belong to the organization of the connection.")
            )
        connection.source_device = source
        connection.destination_device = destination

    if patch.source_interface is not None:
        connection.source_interface = patch.source_interface or None
    if patch.destination_interface is not None:
        connection.destination_interface = patch.destination_interface or None
    if patch.type is not None:
        connection.type = patch.type
    if patch.speed is not None:
        connection.speed = patch.speed or None

    with transaction.atomic():
        connection.save()

    logger.info("connection_updated", connection_id=str(connection.id), endpoints_changed=endpoints_changed)
    return ServiceResult.ok(True, _("Connection updated successfully."))


@service_operation
def delete_connection(*, requester_id, connection_id) -> ServiceResult:
    """Remove a connection; permission is checked against its organisation."""
    logger.info("connection_delete_requested", connection_id=str(connection_id), requester_id=str(requester_id))

    requester = resolve_requester(requester_id, message=_("Invalid requester."))
    connection = get_connection(connection_id)
    require_organization_access(
        requester,
        connection.organization_id,
        message=_("Access denied: you are not allowed to remove this connection."),
    )

    with transaction.atomic():
        connection.delete()

    logger.info("connection_deleted", connection_id=str(connection_id))
    return ServiceResult.ok(True, _("Connection removed successfully."))


@service_operation
def list_connections(*, requester_id, organization_id=None) -> ServiceResult:
    """Connections visible to the requester, flattened with device names and types."""
    requester = resolve_requester(requester_id, message=_("Access denied."))

    queryset = visible_connections(requester)
    if organization_id is not None:
        queryset = queryset.filter(organization_id=parse_uuid(organization_id))

    return ServiceResult.ok([_summary(c) for c in queryset], _("Connections listed successfully."))
