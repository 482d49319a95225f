# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Unique free TCP ports on the loopback interface."""

from .config import (
    DEFAULT_START_PORT,
    LOOPBACK_HOST,
    MAX_PORT,
    OFFSET_BASE,
    PortConfig,
)
from .cursor import (
    allocate,
    get_default_cursor,
    get_unique_free_port,
    PortCursor,
    set_port_index,
)
from .errors import LockPoisonedError, NoFreePortError, UniquePortError
from .finder import find_free_port, is_port_free
from .offset import call_site_identifier, generate_start_port

__all__ = [
    # Cursor
    "PortCursor",
    "get_default_cursor",
    "set_port_index",
    "get_unique_free_port",
    "allocate",
    # Finder
    "find_free_port",
    "is_port_free",
    # Offsets
    "generate_start_port",
    "call_site_identifier",
    # Config
    "PortConfig",
    "DEFAULT_START_PORT",
    "LOOPBACK_HOST",
    "MAX_PORT",
    "OFFSET_BASE",
    # Errors
    "UniquePortError",
    "LockPoisonedError",
    "NoFreePortError",
]
