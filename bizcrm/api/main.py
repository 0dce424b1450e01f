"""
FastAPI app assembly: logging, middleware, error envelopes and router wiring.
"""
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)


from bizcrm.db.errors import ConflictError, DuplicateError, NotFoundError
from bizcrm.api.responses import error_body
from bizcrm.api.auth import router as auth_router
from bizcrm.api.managers import router as managers_router
from bizcrm.api.counterparties import router as counterparties_router
from bizcrm.api.products import router as products_router
from bizcrm.api.catalog import services_router, units_router, warehouses_router
from bizcrm.api.status_types import sale_status_router, subproject_status_router
from bizcrm.api.sales import router as sales_router
from bizcrm.api.projects import router as projects_router
from bizcrm.api.subprojects import router as subprojects_router
from bizcrm.api.tasks import router as tasks_router
from bizcrm.api.funnels import router as funnels_router, subproject_router as subproject_funnels_router
from bizcrm.api.comments import router as comments_router
from bizcrm.api.settings import router as settings_router
from bizcrm.api.upload import router as upload_router
from bizcrm.utils import config

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="Business CRM Service",
    description="API for managers, projects, sales, tasks and the shared product catalogue.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error envelopes

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
        detail = "Route not found"
    return JSONResponse(error_body(detail), status_code=exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        message = str(errors[0].get("msg") or message)
        # pydantic prefixes messages raised from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
    return JSONResponse(error_body(message), status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(error_body(str(exc)), status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(DuplicateError)
async def duplicate_handler(request: Request, exc: DuplicateError):
    return JSONResponse(error_body(str(exc)), status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse(error_body(str(exc)), status_code=status.HTTP_409_CONFLICT)


@app.exception_handler(IntegrityError)
async def integrity_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        error_body("Invalid reference or duplicate value"),
        status_code=status.HTTP_400_BAD_REQUEST,
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(error_body("Internal server error"), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


# Routers

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(managers_router)
api_router.include_router(counterparties_router)
api_router.include_router(products_router)
api_router.include_router(services_router)
api_router.include_router(units_router)
api_router.include_router(warehouses_router)
api_router.include_router(sale_status_router)
api_router.include_router(subproject_status_router)
api_router.include_router(sales_router)
api_router.include_router(projects_router)
api_router.include_router(subprojects_router)
api_router.include_router(tasks_router)
api_router.include_router(funnels_router)
api_router.include_router(subproject_funnels_router)
api_router.include_router(comments_router)
api_router.include_router(settings_router)
api_router.include_router(upload_router)
app.include_router(api_router)

UPLOAD_DIR = Path(config.get_upload_dir())
UPLOAD_DIR.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(UPLOAD_DIR)), name="uploads")


@app.get("/health")
def health_check():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}
