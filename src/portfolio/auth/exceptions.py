from __future__ import annotations

from portfolio.commons.exceptions import (
    BaseCoreException,
    BaseServiceForbiddenException,
    BaseServiceNotFoundException,
    BaseServiceUnauthorizedException,
)

# One client-facing message for every token failure, so responses never tell
# an unknown email apart from a bad or stale token.
INVALID_SESSION_MESSAGE = "Invalid or expired session"


class AuthServiceNotFoundException(BaseServiceNotFoundException):
    pass


class AuthServiceUnauthorizedException(BaseServiceUnauthorizedException):
    pass


class InvalidOrExpiredTokenException(AuthServiceUnauthorizedException):
    pass


class UserNotFoundException(AuthServiceUnauthorizedException):
    pass


class UnauthenticatedException(AuthServiceUnauthorizedException):
    pass


class ForbiddenException(BaseServiceForbiddenException):
    pass


class MagicLinkDeliveryException(BaseCoreException):
    pass


INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
USER_NOT_FOUND = "user_not_found"
NOT_AUTHENTICATED = "not_authenticated"
INSUFFICIENT_ROLE = "insufficient_role"
SESSION_NOT_FOUND = "session_not_found"
DELIVERY_FAILED = "magic_link_delivery_failed"
