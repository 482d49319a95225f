# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Bind probes against the loopback interface."""

import logging
import socket
import sys

from .config import LOOPBACK_HOST, MAX_PORT, validate_port
from .errors import NoFreePortError

logger = logging.getLogger(__name__)


def is_port_free(port: int, host: str = LOOPBACK_HOST) -> bool:
    """Return True if a TCP listener can bind *host*:*port* right now.

    The probe socket is closed before returning, so the port is free but
    not reserved.

    Any OSError, including failure to create the socket itself (e.g. the
    process is out of file descriptors), counts as "not free".
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if sys.platform != "win32":
                s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((host, port))
            s.listen(1)
    except OSError:
        return False
    return True


def find_free_port(start: int, end: int = MAX_PORT) -> int:
    """Return the first bindable port in ``range(start, end)``.

    Candidates are probed one at a time in ascending order. Port 0 is
    never returned, even when *start* is 0: binding it lets the OS pick
    any port, so the scan begins at 1.

    Raises:
        NoFreePortError: if every candidate in the range is taken.
    """
    validate_port(start)
    validate_port(end)
    if start > end:
        raise ValueError(f"Invalid port range {start}-{end}")

    for port in range(max(start, 1), end):
        if is_port_free(port):
            logger.debug("Found free port %d (scan started at %d)", port, start)
            return port
    raise NoFreePortError(start, end)
