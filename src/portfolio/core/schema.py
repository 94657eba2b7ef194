"""Imports every model module so `metadata` knows all tables."""

from __future__ import annotations

from portfolio.about.models import AboutClient, AboutContact, AboutPage
from portfolio.auth.models import Base
from portfolio.legal.models import LegalPage
from portfolio.media.models import Media
from portfolio.projects.models import Project
from portfolio.retouches.models import Retouche
from portfolio.seo.models import SEOSettings

metadata = Base.metadata

__all__ = [
    "AboutClient",
    "AboutContact",
    "AboutPage",
    "Base",
    "LegalPage",
    "Media",
    "Project",
    "Retouche",
    "SEOSettings",
    "metadata",
]
