"""
apps.inventory.constants
~~~~~~~~~~~~~~~~~~~~~~~~
Display tables for device and connection types: Material Design SVG icons
and palette colours used by the topology graph and the API listings.
"""
from apps.inventory.models import ConnectionType, DeviceType

# ---------------------------------------------------------------------------
# Palette
# ---------------------------------------------------------------------------

PRIMARY = "#594AE2"
SECONDARY = "#FF4081"
TERTIARY = "#1EC8A5"
INFO = "#2196F3"
SUCCESS = "#00C853"
WARNING = "#FF9800"
ERROR = "#F44336"
DEFAULT = "#9E9E9E"

# ---------------------------------------------------------------------------
# Device icons (24x24 Material Design paths)
# ---------------------------------------------------------------------------

_SVG = "<svg xmlns='http://www.w3.org/2000/svg' viewBox='0 0 24 24'><path d='M0 0h24v24H0z' fill='none'/><path d='{path}'/></svg>"

_DEVICE_ICON_PATHS: dict[str, str] = {
    DeviceType.ROUTER: (
        "M20.2 5.9l.8-.8C19.6 3.7 17.8 3 16 3s-3.6.7-5 2.1l.8.8C13 4.8 14.5 4.2 16 4.2s3 .6 4.2 1.7z"
        "m-.9.8c-.9-.9-2.1-1.4-3.3-1.4s-2.4.5-3.3 1.4l.8.8c.7-.7 1.6-1 2.5-1 .9 0 1.8.3 2.5 1l.8-.8z"
        "M19 13h-2V9h-2v4H5c-1.1 0-2 .9-2 2v4c0 1.1.9 2 2 2h14c1.1 0 2-.9 2-2v-4c0-1.1-.9-2-2-2z"
        "M8 18H6v-2h2v2zm3.5 0h-2v-2h2v2zm3.5 0h-2v-2h2v2z"
    ),
    DeviceType.SWITCH: (
        "M15 3H5c-1.1 0-2 .9-2 2v4c0 1.1.9 2 2 2h7l4-4V3zm2 6l-2 2 2 2 2-2-2-2z"
        "m-4 4H5c-1.1 0-2 .9-2 2v4c0 1.1.9 2 2 2h10c1.1 0 2-.9 2-2V16c0-1.1-.9-2-2-2z"
    ),
    DeviceType.MODEM: (
        "M1 9l2 2c2.88-2.88 6.79-4.08 10.53-3.62l1.19-2.44C9.88 4.2 4.96 5.75 1 9z"
        "M21 18c0-2.76-1.12-5.26-2.93-7.07l-1.41 1.41C18.09 13.86 19 15.83 19 18h2z"
        "M6.34 11.34L4.93 12.76C6.73 14.56 7.85 17.07 8 19.8L9.99 20c.23-3.41-1.07-6.73-3.65-8.66z"
    ),
    DeviceType.SERVER: (
        "M20 2H4v6h16V2zm-2 4h-2V4h2v2zM4 14h16v-4H4v4zm2-3h2v2H6v-2zm0 7h16v-4H4v4zm2-3h2v2H6v-2z"
    ),
    DeviceType.PC: (
        "M21 2H3c-1.1 0-2 .9-2 2v12c0 1.1.9 2 2 2h7l-2 3v1h8v-1l-2-3h7c1.1 0 2-.9 2-2V4"
        "c0-1.1-.9-2-2-2zm0 12H3V4h18v10z"
    ),
    DeviceType.NOTEBOOK: (
        "M20 18c1.1 0 1.99-.9 1.99-2L22 6a2 2 0 0 0-2-2H4a2 2 0 0 0-2 2v10a2 2 0 0 0 2 2H0v2h24v-2h-4z"
        "M4 6h16v10H4V6z"
    ),
    DeviceType.ACCESS_POINT: (
        "M12 3C6.95 3 3.15 5.85 1 10h2.05C5.2 7 8.4 5 12 5s6.8 2 8.95 5H23C20.85 5.85 17.05 3 12 3z"
        "m0 4c-2.76 0-5 2.24-5 5s2.24 5 5 5 5-2.24 5-5-2.24-5-5-5zm0 8c-1.66 0-3-1.34-3-3"
        "s1.34-3 3-3 3 1.34 3 3-1.34 3-3 3z"
    ),
    DeviceType.WIFI_ROUTER: (
        "M1 9l2 2c4.97-4.97 13.03-4.97 18 0l2-2C16.93 2.93 7.08 2.93 1 9zm8 8l3 3 3-3a4.237 4.237 0 0 0-6 0z"
        "m-4-4l2 2a7.074 7.074 0 0 1 10 0l2-2C15.14 9.14 8.87 9.14 5 13z"
    ),
    DeviceType.PRINTER: (
        "M19 8H5c-1.66 0-3 1.34-3 3v6h4v4h12v-4h4v-6c0-1.66-1.34-3-3-3zm-3 11H8v-5h8v5z"
        "m3-7c-.55 0-1-.45-1-1s.45-1 1-1 1 .45 1 1-.45 1-1 1zm-1-9H6v4h12V3z"
    ),
    DeviceType.SPECS: (
        "M19.14 12.94c.04-.3.06-.61.06-.94 0-.32-.02-.64-.07-.94l2.03-1.58a.49.49 0 0 0 .12-.61"
        "l-1.92-3.32a.488.488 0 0 0-.59-.22l-2.39.96c-.5-.38-1.03-.7-1.62-.94l-.36-2.54"
        "a.484.484 0 0 0-.48-.41h-3.84c-.24 0-.43.17-.47.41l-.36 2.54c-.59.24-1.13.57-1.62.94"
        "l-2.39-.96a.488.488 0 0 0-.59.22L2.74 8.87a.48.48 0 0 0 .12.61l2.03 1.58"
        "c-.05.3-.09.63-.09.94s.02.64.07.94l-2.03 1.58a.49.49 0 0 0-.12.61l1.92 3.32"
        "c.12.22.37.29.59.22l2.39-.96c.5.38 1.03.7 1.62.94l.36 2.54c.05.24.24.41.48.41h3.84"
        "c.24 0 .44-.17.47-.41l.36-2.54c.59-.24 1.13-.56 1.62-.94l2.39.96c.22.08.47 0 .59-.22"
        "l1.92-3.32a.48.48 0 0 0-.12-.61l-2.01-1.58zM12 15.6c-1.98 0-3.6-1.62-3.6-3.6"
        "s1.62-3.6 3.6-3.6 3.6 1.62 3.6 3.6-1.62 3.6-3.6 3.6z"
    ),
}

DEVICE_COLORS: dict[str, str] = {
    DeviceType.ROUTER: PRIMARY,
    DeviceType.SWITCH: SECONDARY,
    DeviceType.MODEM: INFO,
    DeviceType.SERVER: ERROR,
    DeviceType.PC: SUCCESS,
    DeviceType.NOTEBOOK: WARNING,
    DeviceType.ACCESS_POINT: TERTIARY,
    DeviceType.WIFI_ROUTER: PRIMARY,
    DeviceType.PRINTER: INFO,
    DeviceType.SPECS: DEFAULT,
}

CONNECTION_COLORS: dict[str, str] = {
    ConnectionType.ETHERNET: PRIMARY,
    ConnectionType.FIBER: INFO,
    ConnectionType.WIRELESS: SUCCESS,
    ConnectionType.RADIO: WARNING,
    ConnectionType.VPN: ERROR,
    ConnectionType.SERIAL: SECONDARY,
    ConnectionType.OTHER: DEFAULT,
}


def device_icon(device_type: str) -> str:
    """SVG markup for *device_type*; unknown types fall back to the server icon."""
    path = _DEVICE_ICON_PATHS.get(device_type, _DEVICE_ICON_PATHS[DeviceType.SERVER])
    return _SVG.format(path=path)


def device_color(device_type: str) -> str:
    return DEVICE_COLORS.get(device_type, DEFAULT)


def connection_color(connection_type: str) -> str:
    return CONNECTION_COLORS.get(connection_type, DEFAULT)


#: Breadth-first ordering hint for siblings on the topology graph: uplinks
#: (modems, routers) first, end devices last.
DEVICE_SORT_WEIGHTS: dict[str, int] = {
    DeviceType.MODEM: 0,
    DeviceType.ROUTER: 1,
    DeviceType.WIFI_ROUTER: 2,
    DeviceType.SWITCH: 3,
    DeviceType.ACCESS_POINT: 4,
    DeviceType.SERVER: 5,
    DeviceType.PC: 6,
    DeviceType.NOTEBOOK: 7,
    DeviceType.PRINTER: 8,
    DeviceType.SPECS: 9,
}
