from __future__ import annotations

from portfolio.commons.exceptions import BaseServiceNotFoundException


class LegalServiceNotFoundException(BaseServiceNotFoundException):
    pass


LEGAL_PAGE_NOT_FOUND = "legal_page_not_found"
