# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest configuration for unique_port tests.

This file adds the src directory to sys.path so that tests can import
unique_port without installing it, and provides fixtures that hold real
loopback listeners.
"""

import socket
import sys
from pathlib import Path

import pytest

# Add src to path for tests to find the unique_port package
_src_path = str(Path(__file__).resolve().parent.parent / "src")
if _src_path not in sys.path:
    sys.path.insert(0, _src_path)

from unique_port import get_default_cursor, is_port_free, LOOPBACK_HOST  # noqa: E402

BLOCK_SEARCH_START = 20000
BLOCK_SEARCH_END = 60000


def _listen(port: int) -> socket.socket:
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        s.bind((LOOPBACK_HOST, port))
        s.listen(1)
    except OSError:
        s.close()
        raise
    return s


@pytest.fixture
def bound_block():
    """Find four consecutive free ports and hold listeners on the first three.

    Yields the first port of the block; ``base + 3`` was free when checked.
    """
    for base in range(BLOCK_SEARCH_START, BLOCK_SEARCH_END, 16):
        if not all(is_port_free(p) for p in range(base, base + 4)):
            continue
        held: list[socket.socket] = []
        try:
            for p in range(base, base + 3):
                held.append(_listen(p))
        except OSError:
            for s in held:
                s.close()
            continue
        try:
            yield base
        finally:
            for s in held:
                s.close()
        return
    pytest.skip("No block of free loopback ports available")


@pytest.fixture
def held_port():
    """A port with a live listener on it for the duration of the test."""
    s = _listen(0)
    try:
        yield s.getsockname()[1]
    finally:
        s.close()


@pytest.fixture
def default_cursor():
    """The process-wide cursor, restored to its prior value afterwards."""
    cursor = get_default_cursor()
    saved = cursor.next_port
    try:
        yield cursor
    finally:
        cursor.clear_poison()
        cursor.set_port_index(saved)
