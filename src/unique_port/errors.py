# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Exceptions for port allocation.
"""


class UniquePortError(Exception):
    """Base class for errors raised by unique_port."""

    pass


class LockPoisonedError(UniquePortError):
    """Raised when the cursor lock is unusable after a failed critical section."""

    def __init__(self, message: str = "Failed to acquire the port cursor lock") -> None:
        super().__init__(message)


class NoFreePortError(UniquePortError):
    """Raised when no bindable port exists in the scanned range."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(f"No free port in range {start}-{end}")
