"""
apps.inventory.services package.
"""
from .connection_service import (  # noqa: F401
    ConnectionPatch,
    ConnectionSummary,
    create_connection,
    delete_connection,
    get_connection,
    list_connections,
    update_connection,
)
from .device_service import (  # noqa: F401
    DevicePatch,
    DeviceSummary,
    create_device,
    delete_device,
    get_device,
    list_devices,
    update_device,
)
