# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Constants and environment-driven configuration for port allocation."""

import os
from dataclasses import dataclass

LOOPBACK_HOST = "127.0.0.1"

MIN_PORT = 0
MAX_PORT = 65535

# Initial value of the process-wide cursor.
DEFAULT_START_PORT = 1000

# Lower bound of generated start offsets.
OFFSET_BASE = 1000

START_PORT_ENV = "UNIQUE_PORT_START"


def validate_port(port: int) -> int:
    """Return *port* unchanged if it fits in 16 bits, else raise ValueError."""
    if isinstance(port, bool) or not isinstance(port, int):
        raise ValueError(f"Port must be an int, got {type(port).__name__}")
    if not MIN_PORT <= port <= MAX_PORT:
        raise ValueError(f"Port {port} out of range {MIN_PORT}-{MAX_PORT}")
    return port


@dataclass(frozen=True)
class PortConfig:
    """Configuration for a port cursor.

    start_port: First candidate the cursor scans from.
    """

    start_port: int = DEFAULT_START_PORT

    def __post_init__(self) -> None:
        validate_port(self.start_port)

    @classmethod
    def from_env(cls) -> "PortConfig":
        """Read configuration from environment variables."""
        raw = os.environ.get(START_PORT_ENV)
        if raw is None or not raw.strip():
            return cls()
        try:
            start_port = int(raw)
        except ValueError:
            raise ValueError(
                f"Invalid {START_PORT_ENV} environment variable: {raw!r}"
            ) from None
        try:
            return cls(start_port=start_port)
        except ValueError as e:
            raise ValueError(f"Invalid {START_PORT_ENV} environment variable: {e}") from None
