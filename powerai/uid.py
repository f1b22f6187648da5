"""Identifier generation."""

import uuid


def uuid_hex() -> str:
    """Return a random version 4 UUID as 32 lower-case hex digits without dashes."""
    return uuid.uuid4().hex