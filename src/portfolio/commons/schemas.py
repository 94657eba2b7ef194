from __future__ import annotations

import math
from typing import Literal

from pydantic import BaseModel

Status = Literal["published", "invisible"]

DEFAULT_PAGE_LIMIT = 42
MAX_PAGE_LIMIT = 100


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        total_pages = math.ceil(total / limit) if limit else 0
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


def page_offset(page: int, limit: int) -> int:
    return (max(1, page) - 1) * limit


class OkResponse(BaseModel):
    ok: bool = True
    message: str | None = None
