"""FastAPI application entrypoint with Lambda handler."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

from .config import settings
from .routes import health, tasks
from .services.task_store import TaskNotFoundError, TaskValidationError

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    logger.info(f"Starting {settings.service_name} in {settings.environment} mode")
    yield
    logger.info(f"Shutting down {settings.service_name}")


app = FastAPI(
    title="Task Planner",
    description="Personal task planner with natural language task entry",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Store errors raised from any route
@app.exception_handler(TaskValidationError)
async def task_validation_error_handler(request: Request, exc: TaskValidationError) -> JSONResponse:
    """Map invalid task input to 400."""
    logger.info(f"Rejected task input on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(TaskNotFoundError)
async def task_not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
    """Map unknown or foreign task ids to 404."""
    return JSONResponse(status_code=404, content={"detail": str(exc)})


# Include routers
app.include_router(health.router)
app.include_router(tasks.router, prefix="/tasks")

# Lambda handler via Mangum
handler = Mangum(app, lifespan="off")
