"""
apps.inventory.services.device_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Business rules for devices.

Access rule for every mutation: active system administrator OR member of the
device's organisation.  Listing follows the same scope: administrators see
every device, members only the devices of their organisations.

Every public operation returns a :class:`~common.results.ServiceResult`.
"""
from __future__ import annotations

from dataclasses import dataclass

import structlog
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError
from django.utils.translation import gettext as _

from apps.accounts.services.authorization import (
    RequesterSnapshot,
    is_system_administrator,
    require_organization_access,
    resolve_requester,
)
from apps.inventory.models import Device, DeviceType
from apps.organizations.models import Organization
from common.exceptions import AccessDeniedError, ConflictError, InternalError, NotFoundError
from common.ids import parse_uuid
from common.results import ServiceResult, service_operation
from common.validation import check_choice, check_length, ensure_valid

logger = structlog.get_logger(__name__)

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 100
IP_ADDRESS_MAX_LENGTH = 50


@dataclass(frozen=True)
class DeviceSummary:
    id: object
    name: str
    ip_address: str | None
    type: str
    organization_name: str
    organization_id: object


@dataclass(frozen=True)
class DevicePatch:
    """
    Partial update for a device.  ``None`` means "leave unchanged"; an empty
    ``ip_address`` clears the stored address.
    """

    name: str | None = None
    ip_address: str | None = None
    type: str | None = None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def get_device(device_id) -> Device:
    """
    Fetch a :class:`Device` by id.

    Raises:
        NotFoundError: If *device_id* is malformed or no device matches.
    """
    pk = parse_uuid(device_id)
    device = Device.objects.filter(pk=pk).first() if pk else None
    if device is None:
        raise NotFoundError(_("Device not found."))
    return device


def visible_devices(requester: RequesterSnapshot):
    """Queryset of the devices *requester* may see."""
    queryset = Device.objects.select_related("organization")
    if is_system_administrator(requester):
        return queryset
    return queryset.filter(organization_id__in=requester.organization_ids)


def _name_taken(org_id, name: str, *, exclude_id=None) -> bool:
    queryset = Device.objects.filter(organization_id=org_id, name__iexact=name)
    if exclude_id is not None:
        queryset = queryset.exclude(pk=exclude_id)
    return queryset.exists()


def _summary(device: Device) -> DeviceSummary:
    return DeviceSummary(
        id=device.id,
        name=device.name,
        ip_address=device.ip_address,
        type=device.type,
        organization_name=device.organization.name,
        organization_id=device.organization_id,
    )


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

@service_operation
def create_device(
    *,
    requester_id,
    name: str,
    type: str,
    organization_id,
    ip_address: str | None = None,
) -> ServiceResult:
    """
    Register a device in an organisation.

    Steps:

    1. Validate name (3–100), IP (≤ 50) and type.
    2. Resolve the requester; missing or locked out → ``access_denied``.
    3. Require admin or membership of *organization_id*.
    4. The organisation must exist and be active.
    5. Reject a name already used in that organisation, ignoring case.
    6. Persist and return the new id.
    """
    logger.info(
        "device_create_requested",
        name=name,
        organization_id=str(organization_id),
        requester_id=str(requester_id),
    )

    errors: list[str] = []
    check_length(errors, name, label=_("Name"), min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, required=True)
    check_length(errors, ip_address, label=_("IP address"), max_length=IP_ADDRESS_MAX_LENGTH)
    check_choice(errors, type, DeviceType, label=_("Device type"), required=True)
    ensure_valid(errors)

    requester = resolve_requester(requester_id, message=_("Invalid or inactive requester."))
    require_organization_access(
        requester,
        organization_id,
        message=_("Access denied: you are not allowed to add devices to this organization."),
    )

    pk = parse_uuid(organization_id)
    org = Organization.objects.filter(pk=pk).first() if pk else None
    if org is None:
        raise NotFoundError(_("Organization not found."))
    if not org.is_active:
        raise AccessDeniedError(_("Devices cannot be added to an inactive organization."))

    if _name_taken(org.pk, name):
        raise ConflictError(_("A device with this name already exists in this organization."))

    try:
        with transaction.atomic():
            device = Device.objects.create(
                name=name,
                ip_address=ip_address or None,
                type=type,
                organization=org,
            )
    except IntegrityError as exc:
        raise ConflictError(_("A device with this name already exists in this organization.")) from exc

    logger.info("device_created", device_id=str(device.id), organization_id=str(org.pk))
    return ServiceResult.ok(device.id, _("Device created successfully."))


@service_operation
def update_device(*, requester_id, device_id, patch: DevicePatch) -> ServiceResult:
    """
    Apply a partial update to a device.

    Permission is checked against the device's own organisation.  The name
    uniqueness check only runs when the name changes other than by case.
    """
    logger.info("device_update_requested", device_id=str(device_id), requester_id=str(requester_id))

    errors: list[str] = []
    if patch.name is not None:
        check_length(
            errors, patch.name, label=_("Name"),
            min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, required=True,
        )
    check_length(errors, patch.ip_address, label=_("IP address"), max_length=IP_ADDRESS_MAX_LENGTH)
    check_choice(errors, patch.type, DeviceType, label=_("Device type"))
    ensure_valid(errors)

    requester = resolve_requester(requester_id, message=_("Invalid or inactive requester."))
    device = get_device(device_id)
    require_organization_access(
        requester,
        device.organization_id,
        message=_("Access denied: you are not allowed to update this device."),
    )

    if patch.name is not None and patch.name.lower() != device.name.lower():
        if _name_taken(device.organization_id, patch.name, exclude_id=device.pk):
            raise ConflictError(_("Another device with this name already exists in this organization."))

    if patch.name is not None:
        device.name = patch.name
    if patch.ip_address is not None:
        device.ip_address = patch.ip_address or None
    if patch.type is not None:
        device.type = patch.type

    try:
        with transaction.atomic():
            device.save()
    except IntegrityError as exc:
        raise ConflictError(_("Another device with this name already exists in this organization.")) from exc

    logger.info("device_updated", device_id=str(device.id))
    return ServiceResult.ok(True, _("Device updated successfully."))


@service_operation
def delete_device(*, requester_id, device_id) -> ServiceResult:
    """
    Remove a device.

    A device still referenced by a connection is protected by the store;
    that surfaces as ``internal_error``.
    """
    logger.info("device_delete_requested", device_id=str(device_id), requester_id=str(requester_id))

    requester = resolve_requester(requester_id, message=_("Invalid requester."))
    device = get_device(device_id)
    require_organization_access(
        requester,
        device.organization_id,
        message=_("Access denied: you are not allowed to remove this device."),
    )

    try:
        with transaction.atomic():
            device.delete()
    except ProtectedError as exc:
        logger.error("device_delete_restricted", device_id=str(device_id), error=str(exc))
        raise InternalError(_("Internal error removing device: it is still used by connections.")) from exc

    logger.info("device_deleted", device_id=str(device_id))
    return ServiceResult.ok(True, _("Device removed successfully."))


@service_operation
def list_devices(*, requester_id, organization_id=None) -> ServiceResult:
    """
    Devices visible to the requester, flattened with the organisation name.

    *organization_id* narrows the visible set to one organisation; it never
    widens it.
    """
    requester = resolve_requester(requester_id, message=_("Access denied."))

    queryset = visible_devices(requester)
    if organization_id is not None:
        queryset = queryset.filter(organization_id=parse_uuid(organization_id))

    return ServiceResult.ok([_summary(d) for d in queryset], _("Devices listed successfully."))
