from __future__ import annotations

from portfolio.commons.exceptions import (
    BaseServiceNotFoundException,
    BaseServiceUnProcessableException,
)


class RetouchesServiceNotFoundException(BaseServiceNotFoundException):
    pass


class RetouchesServiceUnprocessableException(BaseServiceUnProcessableException):
    pass


RETOUCHE_NOT_FOUND = "retouche_not_found"
UNKNOWN_IMAGES = "unknown_images"
