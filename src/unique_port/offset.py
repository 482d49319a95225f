# Copyright (c) Meta Platforms, Inc. and affiliates.
# All rights reserved.
#
# This source code is licensed under the BSD-style license found in the
# LICENSE file in the root directory of this source tree.

"""Deterministic start offsets derived from a stable identifier.

Different test modules (or separate test processes) seeding their cursor
from different identifiers start scanning in different parts of the port
space, which makes collisions between them unlikely::

    set_port_index(generate_start_port("test_http_roundtrip"))
    port = get_unique_free_port()
"""

import hashlib
import sys

from .config import MAX_PORT, OFFSET_BASE


def call_site_identifier(depth: int = 1) -> str:
    """Return ``<module>.<qualname>`` of the function *depth* frames up.

    ``depth=1`` names the function calling call_site_identifier().
    """
    frame = sys._getframe(depth)
    module = frame.f_globals.get("__name__", "__main__")
    return f"{module}.{frame.f_code.co_qualname}"


def _stable_hash(identifier: str) -> int:
    # Built-in hash() is salted per process; blake2b is not.
    digest = hashlib.blake2b(identifier.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def generate_start_port(identifier: str | None = None) -> int:
    """Map *identifier* to a port in ``[OFFSET_BASE, MAX_PORT)``.

    When *identifier* is None, the caller's module and qualified function
    name are used, so every call from the same function gets the same value.
    """
    if identifier is None:
        identifier = call_site_identifier(2)
    return OFFSET_BASE + _stable_hash(identifier) % (MAX_PORT - OFFSET_BASE)
