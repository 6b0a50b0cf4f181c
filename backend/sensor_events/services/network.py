"""Best-effort discovery of this host's LAN address for startup logging."""

import logging
import socket

logger = logging.getLogger(__name__)

FALLBACK_ADDRESS = "localhost"

# Any routable address works; connect() on a UDP socket sends nothing
_PROBE_TARGET = ("10.255.255.255", 1)


def _is_usable(addr: str | None) -> bool:
    return bool(addr) and not addr.startswith("127.") and addr != "0.0.0.0"


def _route_probe() -> str | None:
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.settimeout(0.5)
        s.connect(_PROBE_TARGET)
        return s.getsockname()[0]


def _hostname_addresses() -> list[str]:
    _name, _aliases, addrs = socket.gethostbyname_ex(socket.gethostname())
    return addrs


def local_ip_address() -> str:
    """Return the first non-loopback IPv4 address, or FALLBACK_ADDRESS.

    Only used to print a reachable URL at startup, never for binding.
    """
    try:
        addr = _route_probe()
        if _is_usable(addr):
            return addr
    except OSError as e:
        logger.debug("Route probe failed: %s", e)

    try:
        for addr in _hostname_addresses():
            if _is_usable(addr):
                return addr
    except OSError as e:
        logger.debug("Hostname lookup failed: %s", e)

    return FALLBACK_ADDRESS
