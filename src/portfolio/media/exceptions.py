from __future__ import annotations

from portfolio.commons.exceptions import (
    BaseServiceConflictException,
    BaseServiceNotFoundException,
)


class MediaServiceNotFoundException(BaseServiceNotFoundException):
    pass


class MediaInUseException(BaseServiceConflictException):
    pass


MEDIA_NOT_FOUND = "media_not_found"
MEDIA_IN_USE = "media_in_use"
