# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Shared port cursor and the allocation entry points."""

import asyncio
import logging
import threading
from typing import Callable

from .config import DEFAULT_START_PORT, MAX_PORT, PortConfig, validate_port
from .errors import LockPoisonedError, NoFreePortError
from .finder import find_free_port

logger = logging.getLogger(__name__)

PortFinder = Callable[[int, int], int]


class PortCursor:
    """Process-wide "next port to try" counter, serialized by one lock.

    Every successful allocation moves the cursor past the returned port, so
    a cursor never hands out the same port twice unless it is rewound with
    set_port_index(). Whether the port is still free when the caller binds
    it is not guaranteed.

    Args:
        start: Initial cursor value.
        finder: Callable scanning ``[start, end)`` for a bindable port.
            Defaults to find_free_port; tests inject their own.
    """

    def __init__(
        self,
        start: int = DEFAULT_START_PORT,
        *,
        finder: PortFinder = find_free_port,
    ) -> None:
        self._next_port = validate_port(start)
        self._finder = finder
        self._lock = threading.Lock()
        self._poisoned = False

    @classmethod
    def from_config(cls, config: PortConfig, **kwargs) -> "PortCursor":
        return cls(config.start_port, **kwargs)

    @property
    def poisoned(self) -> bool:
        return self._poisoned

    @property
    def next_port(self) -> int:
        """Current cursor value."""
        with self._lock:
            self._check_poisoned()
            return self._next_port

    def _check_poisoned(self) -> None:
        if self._poisoned:
            raise LockPoisonedError()

    def set_port_index(self, port: int) -> None:
        """Overwrite the cursor; the next allocation scans from *port*.

        Port 0 is never handed out, so an index of 0 scans from 1.
        """
        validate_port(port)
        with self._lock:
            self._check_poisoned()
            self._next_port = port
        logger.debug("Port cursor set to %d", port)

    def get_unique_free_port(self) -> int:
        """Return a free loopback port never returned by this cursor since
        the last set_port_index().

        Raises:
            NoFreePortError: if no port at or above the cursor is bindable.
                The cursor is left unchanged.
            LockPoisonedError: if the cursor is poisoned. Only unexpected
                finder errors poison it; OSError from a custom finder
                propagates and leaves the cursor usable.
        """
        with self._lock:
            self._check_poisoned()
            try:
                port = self._finder(self._next_port, MAX_PORT)
            except (NoFreePortError, OSError):
                raise
            except BaseException:
                self._poisoned = True
                raise
            self._next_port = port + 1
        logger.debug("Allocated port %d", port)
        return port

    async def allocate(self) -> int:
        """Async variant of get_unique_free_port(); probes in a worker thread."""
        return await asyncio.to_thread(self.get_unique_free_port)

    def poison(self) -> None:
        """Mark the cursor unusable, as a crash inside the lock would."""
        with self._lock:
            self._poisoned = True
        logger.debug("Port cursor poisoned")

    def clear_poison(self) -> None:
        with self._lock:
            self._poisoned = False


_default_cursor = PortCursor.from_config(PortConfig.from_env())


def get_default_cursor() -> PortCursor:
    """Return the cursor shared by the module-level functions."""
    return _default_cursor


def set_port_index(port: int) -> None:
    """Set the port the default cursor scans from next.

    Example::

        set_port_index(1042)
        assert get_unique_free_port() == 1042  # if 1042 is free
    """
    _default_cursor.set_port_index(port)


def get_unique_free_port() -> int:
    """Return a free loopback port unique within this process."""
    return _default_cursor.get_unique_free_port()


async def allocate() -> int:
    return await _default_cursor.allocate()
