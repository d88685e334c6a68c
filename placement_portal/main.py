"""
Internship Placement Portal - Main Application

FastAPI backend with:
- Domain state machine for internships, applications and withdrawals
- SQLAlchemy store with unit-of-work sessions (in-memory SQLite by default)
- JWT authentication for students, company reps and career-center staff

Run: uvicorn placement_portal.main:app --reload
"""

import logging
from datetime import date
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from placement_portal import __version__
from placement_portal.api.routes import api_router
from placement_portal.core.config import Settings, get_settings
from placement_portal.core.exceptions import PortalError
from placement_portal.core.logging_config import setup_logging
from placement_portal.db.database import Database, get_database
from placement_portal.db.repositories import InternshipRepository, StudentRepository
from placement_portal.db.seed import seed_demo_data
from placement_portal.domain.ports import IdGenerator
from placement_portal.services.id_service import SequentialIdGenerator

logger = logging.getLogger(__name__)


def create_app(
    database: Optional[Database] = None,
    settings: Optional[Settings] = None,
    id_generator: Optional[IdGenerator] = None,
    today: Optional[Callable[[], date]] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    db = database or get_database()

    app = FastAPI(
        title=settings.app_name,
        description="""
        Placement management for three roles.

        ## Features
        - **Students**: Browse eligible internships, apply (max 3 active), accept offers, request withdrawals
        - **Company reps**: Post internships (max 5 active), decide on applications
        - **Career Center staff**: Approve reps and postings, process withdrawal requests
        """,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
    )

    app.state.db = db
    app.state.settings = settings
    app.state.id_generator = id_generator or SequentialIdGenerator(db)
    app.state.today = today or date.today

    # CORS middleware (allow all for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError):
        logger.warning("%s %s rejected: %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "error": type(exc).__name__},
        )

    # Include API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Detailed health check."""
        return {
            "status": "healthy",
            "app": settings.app_name,
            "students": StudentRepository(app.state.db).count(),
            "internships": InternshipRepository(app.state.db).count(),
        }

    if settings.seed_demo_data:
        seed_demo_data(db)

    return app


app = create_app()
