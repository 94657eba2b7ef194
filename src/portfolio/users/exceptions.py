from __future__ import annotations

from portfolio.commons.exceptions import (
    BaseServiceConflictException,
    BaseServiceForbiddenException,
    BaseServiceNotFoundException,
)


class UsersServiceNotFoundException(BaseServiceNotFoundException):
    pass


class UsersServiceConflictException(BaseServiceConflictException):
    pass


class UsersServiceForbiddenException(BaseServiceForbiddenException):
    pass


class LastAdminException(UsersServiceConflictException):
    pass


USER_NOT_FOUND = "user_not_found"
EMAIL_TAKEN = "email_taken"
SELF_ROLE_CHANGE = "self_role_change"
SELF_DELETE = "self_delete"
LAST_ADMIN = "last_admin"
