from fastapi import FastAPI

from portfolio.about.api import public_router as public_about_router
from portfolio.about.api import router as about_router
from portfolio.auth.api import router as auth_router
from portfolio.health.api import router as health_router
from portfolio.legal.api import router as legal_router
from portfolio.media.api import router as media_router
from portfolio.projects.api import public_router as public_projects_router
from portfolio.projects.api import router as projects_router
from portfolio.retouches.api import public_router as public_retouches_router
from portfolio.retouches.api import router as retouches_router
from portfolio.seo.api import router as seo_router
from portfolio.users.api import router as users_router

API_PREFIX = "/api"


def configure_routers(app: FastAPI) -> FastAPI:
    app.include_router(health_router)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(users_router, prefix=API_PREFIX)
    app.include_router(media_router, prefix=API_PREFIX)
    app.include_router(projects_router, prefix=API_PREFIX)
    app.include_router(retouches_router, prefix=API_PREFIX)
    app.include_router(about_router, prefix=API_PREFIX)
    app.include_router(seo_router, prefix=API_PREFIX)
    app.include_router(legal_router, prefix=API_PREFIX)
    app.include_router(public_projects_router, prefix=API_PREFIX)
    app.include_router(public_retouches_router, prefix=API_PREFIX)
    app.include_router(public_about_router, prefix=API_PREFIX)
    return app
