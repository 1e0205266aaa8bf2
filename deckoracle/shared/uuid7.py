"""Time-ordered UUID7 identifiers and the matching column type."""

import time
import uuid
from typing import Any

from sqlalchemy import TypeDecorator, Uuid


def uuid7() -> uuid.UUID:
    """Generate UUID7 (time-ordered UUID).

    Layout: 48 bits of Unix milliseconds, version nibble 7, random bits
    and the RFC 4122 variant. Decks and cards created in one import are
    therefore ordered by creation time when sorted by id.

    Returns:
        A new UUID7 instance.
    """
    timestamp_ms = int(time.time() * 1000)
    uuid_int = timestamp_ms << 80
    uuid_int |= 0x7 << 76
    uuid_int |= uuid.uuid4().int & ((1 << 76) - 1)
    uuid_int = (uuid_int & ~(0x3 << 62)) | (0x2 << 62)
    return uuid.UUID(int=uuid_int)


class UUID7(TypeDecorator):
    """UUID column that accepts both UUID objects and their string form.

    Uses the generic ``Uuid`` type: native ``uuid`` on PostgreSQL,
    ``CHAR(32)`` on SQLite.
    """

    impl = Uuid
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> uuid.UUID | None:
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))

    def process_result_value(self, value: Any, dialect) -> uuid.UUID | None:
        if value is None:
            return None
        if isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
