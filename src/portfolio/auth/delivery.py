"""
Magic-link delivery port.

Sending email is an external concern; the auth service only needs something
that accepts a link for a recipient and reports whether it went out.
"""

from __future__ import annotations

from typing import Protocol

from portfolio.commons.logging import logger


class MagicLinkDelivery(Protocol):
    async def send_magic_link(self, *, email: str, name: str, link: str) -> bool: ...


class LoggingMagicLinkDelivery:
    """Development delivery: writes the link to the application log."""

    async def send_magic_link(self, *, email: str, name: str, link: str) -> bool:
        logger.info("Magic link for %s (%s): %s", email, name or "-", link)
        return True
