"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from fileshare.config import settings
from fileshare.errors import FileShareError, safe_error_message
from fileshare.schemas.common import ErrorResponse, StatusResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Make sure the uploads directory exists and announce the address."""
    from fileshare.services.file_storage import file_storage
    file_storage.base_path.mkdir(parents=True, exist_ok=True)
    logger.info("File sharing server started on port %d", settings.PORT)
    logger.info("Available at http://localhost:%d", settings.PORT)
    yield


app = FastAPI(
    title="File Sharing API",
    version="1.0.0",
    description="Upload, list, download and delete shared files.",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",")]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Error handlers ───────────────────────────────────────────────
# Every failure leaves as {"error": message}.

@app.exception_handler(FileShareError)
async def fileshare_error_handler(request: Request, exc: FileShareError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=exc.message).model_dump())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    detail = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content=ErrorResponse(error=f"Invalid request: {detail}").model_dump())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content=ErrorResponse(error=str(exc.detail)).model_dump())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, safe_error_message(exc))
    return JSONResponse(status_code=500, content=ErrorResponse(error="Internal server error").model_dump())


@app.get("/api/status", response_model=StatusResponse)
async def get_status():
    """Liveness and server clock check."""
    now = datetime.now(timezone.utc)
    return {
        "status": "OK",
        "message": "File sharing server is running",
        "timestamp": now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    }


# Register routers
from fileshare.routes.files import router as files_router
app.include_router(files_router)

# Static landing page and assets; mounted last so /api routes win.
app.mount("/", StaticFiles(directory=settings.PUBLIC_DIR, html=True, check_dir=False), name="public")
