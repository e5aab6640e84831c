import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wordtrail.config import Settings, settings as default_settings
from wordtrail.db.mongo import MongoStore, VersionRepository
from wordtrail.errors import VersionError
from wordtrail.services.versions import VersionStore

# Routers
from wordtrail.routers import versions

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(settings: Optional[Settings] = None, store: Optional[MongoStore] = None) -> FastAPI:
    """
    Build the API. Nothing connects until the lifespan starts; pass ``store``
    to reuse an existing handle (e.g. one wrapping a test client).
    """
    settings = settings or default_settings
    store = store or MongoStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        store.connect()
        app.state.version_store = VersionStore(
            VersionRepository(store.collection),
            serialize_saves=settings.SERIALIZE_SAVES,
        )
        logger.info(f"wordtrail started (env={settings.APP_ENV})")
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="wordtrail API",
        description="Text snapshots with word-level diffs between versions",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store

    # ─── CORS ────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.FRONTEND_URL,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ─── Errors ──────────────────────────────────────────────────────────────
    @app.exception_handler(VersionError)
    async def version_error_handler(request: Request, exc: VersionError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"message": message})

    # ─── Routers ─────────────────────────────────────────────────────────────
    app.include_router(versions.router, tags=["Versions"])

    # ─── Health ──────────────────────────────────────────────────────────────
    @app.get("/", tags=["Health"])
    async def root():
        return {"status": "wordtrail backend is live"}

    @app.get("/health", tags=["Health"])
    async def health():
        return {"status": "ok", "env": settings.APP_ENV, "store": store.connected}

    return app


app = create_app()


def run():
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT)


if __name__ == "__main__":
    run()
