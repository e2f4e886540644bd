"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from lanshare.config import Settings, settings as default_settings
from lanshare.errors import ShareError
from lanshare.services.file_storage import FileStorageService
from lanshare.services.notification_hub import NotificationHub
from lanshare.services.server_info import print_terminal_qr, server_url

logger = logging.getLogger(__name__)

PACKAGED_STATIC_DIR = Path(__file__).resolve().parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the storage root exists, then announce where we are."""
    app.state.storage.ensure_ready()

    settings = app.state.settings
    url = server_url(settings.API_PORT, settings.PUBLIC_URL)
    logger.info(f"Server running at {url}")
    if settings.PRINT_QR:
        print_terminal_qr(url)

    yield

    logger.info("Shutting down (%d live client(s) connected)", len(app.state.hub))


async def share_error_handler(request: Request, exc: ShareError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app and the collaborators it owns (storage, live hub)."""
    settings = settings or default_settings

    app = FastAPI(
        title="LAN Share",
        version="1.0.0",
        description="Share files across the local network with live updates.",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = FileStorageService(
        settings.FILE_STORAGE_PATH, chunk_size=settings.UPLOAD_CHUNK_SIZE
    )
    app.state.hub = NotificationHub()

    # CORS
    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ShareError, share_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    # Register routers
    from lanshare.routes.files import router as files_router
    from lanshare.routes.server_info import router as server_info_router
    from lanshare.routes.live import router as live_router
    app.include_router(files_router)
    app.include_router(server_info_router)
    app.include_router(live_router)

    # Front-end last: it claims every path the routers don't.
    static_dir = settings.STATIC_DIR or PACKAGED_STATIC_DIR
    app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
