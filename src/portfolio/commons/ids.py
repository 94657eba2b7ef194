from __future__ import annotations

import secrets
import uuid
from uuid import UUID

TOKEN_BYTES = 32


def new_id() -> UUID:
    """Generate a random UUIDv4 (project-wide primary key standard)."""
    return uuid.uuid4()


def new_id_str() -> str:
    """Generate a UUIDv4 string (for display/logging)."""
    return str(new_id())


def new_token() -> str:
    # Opaque bearer credential: 256 bits, 64 lowercase hex chars.
    return secrets.token_hex(TOKEN_BYTES)


def parse_id(value: object) -> UUID | None:
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None
