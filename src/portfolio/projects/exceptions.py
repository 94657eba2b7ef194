from __future__ import annotations

from portfolio.commons.exceptions import (
    BaseServiceNotFoundException,
    BaseServiceUnProcessableException,
)


class ProjectsServiceNotFoundException(BaseServiceNotFoundException):
    pass


class ProjectsServiceUnprocessableException(BaseServiceUnProcessableException):
    pass


PROJECT_NOT_FOUND = "project_not_found"
UNKNOWN_IMAGES = "unknown_images"
