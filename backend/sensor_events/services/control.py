"""Process-local on/off control flag.

The flag lives for the lifetime of the process and starts as "off" on every
restart. Handlers run in the server's threadpool, so reads and writes go
through a lock.
"""

import logging
import threading

logger = logging.getLogger(__name__)

CONTROL_VALUES = ("on", "off")
DEFAULT_STATUS = "off"


class InvalidControlStatus(ValueError):
    """Requested status is not one of CONTROL_VALUES."""


class ControlState:
    """Two-state on/off toggle shared by the control endpoints."""

    def __init__(self, status: str = DEFAULT_STATUS) -> None:
        if status not in CONTROL_VALUES:
            raise InvalidControlStatus(status)
        self._status = status
        self._lock = threading.Lock()

    @property
    def status(self) -> str:
        with self._lock:
            return self._status

    def set(self, status) -> str:
        """Switch the flag. Anything other than exactly "on" or "off" is rejected."""
        if not isinstance(status, str) or status not in CONTROL_VALUES:
            raise InvalidControlStatus(status)
        with self._lock:
            previous, self._status = self._status, status
        if previous != status:
            logger.info("Control flag %s -> %s", previous, status)
        return status
