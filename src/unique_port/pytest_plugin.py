# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Pytest fixtures for port allocation.

Enable in a conftest.py with::

    pytest_plugins = ["unique_port.pytest_plugin"]
"""

import pytest

from .cursor import PortCursor
from .offset import generate_start_port


@pytest.fixture
def port_cursor(request: pytest.FixtureRequest) -> PortCursor:
    """A private cursor seeded from the test's node id."""
    return PortCursor(generate_start_port(request.node.nodeid))


@pytest.fixture
def unique_port(port_cursor: PortCursor) -> int:
    return port_cursor.get_unique_free_port()
