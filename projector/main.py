# projector/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from projector.api.v1.api import api_router
from projector.core.config import settings
from projector.core.exceptions import ProjectorError
from projector.core.logging_setup import setup_logging
from projector.db.init_db import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables before the first request is served."""
    init_db()
    logger.info("%s %s ready", settings.PROJECT_NAME, settings.VERSION)
    yield


async def projector_error_handler(request: Request, exc: ProjectorError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.code},
    )


def create_application() -> FastAPI:
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # ---------- CORS ----------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.backend_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------- ERRORS ----------
    app.add_exception_handler(ProjectorError, projector_error_handler)

    # ---------- ROUTERS ----------
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    @app.get("/healthz", include_in_schema=False)
    def healthz():
        return {"status": "ok"}

    return app


app = create_application()
