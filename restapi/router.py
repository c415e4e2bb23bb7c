"""Application configuration and router setup."""

import logging

import fastapi
from fastapi.middleware import cors
from fastapi.openapi.utils import get_openapi

from components.core.config import get_settings
from components.core.errors import init_error_handlers
from restapi.endpoints import health_check, auth, category, expense, budget, dashboard, realtime

TITLE = "Expense Tracker"
DESCRIPTION = "Personal expense tracking with categories, dashboards and monthly budgets"
VERSION = "1.0.0"


def configure_logging() -> None:
    """Configure application logging from settings."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app() -> fastapi.FastAPI:
    """Create and configure the FastAPI application."""
    configure_logging()
    app = fastapi.FastAPI(
        title=TITLE,
        description=DESCRIPTION,
        version=VERSION,
    )

    init_error_handlers(app)

    # Add CORS middleware
    app.add_middleware(
        cors.CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_check.router)
    app.include_router(auth.router)
    app.include_router(category.router)
    app.include_router(expense.router)
    app.include_router(budget.router)
    app.include_router(dashboard.router)
    app.include_router(realtime.router)

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        openapi_schema = get_openapi(
            title=TITLE,
            version=VERSION,
            description=DESCRIPTION,
            routes=app.routes,
        )
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app
