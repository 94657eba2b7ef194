from __future__ import annotations

import datetime as dt

import sqlalchemy as sa  # type: ignore[import-not-found]
from sqlalchemy.types import TypeDecorator  # type: ignore[import-not-found]


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.UTC)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware UTC datetimes on a backend without timezone support.

    SQLite stores naive values; we write naive UTC and hand back aware UTC so
    comparisons against `utcnow()` never mix naive and aware datetimes.
    """

    impl = sa.DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):  # type: ignore[no-untyped-def]
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError("naive datetime given to a UTCDateTime column")
        return value.astimezone(dt.UTC).replace(tzinfo=None)

    def process_result_value(self, value, dialect):  # type: ignore[no-untyped-def]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.UTC)
        return value.astimezone(dt.UTC)
