"""FastAPI application entry point"""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .api import health, tasks
from .exceptions import (
    StorageFault,
    TaskNotFound,
    TaskValidationError,
    http_exception_handler,
    request_validation_handler,
    storage_fault_handler,
    task_not_found_handler,
    task_validation_handler,
    unexpected_exception_handler,
)

# Configure logging
logging.basicConfig(
    level=config.log_level(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    logger.info(f"Starting Taskboard API ({config.app_env()} mode)")

    from .services.db_service import get_task_store
    store = get_task_store()
    if await store.is_connected():
        logger.info("Connected to database successfully")
    else:
        logger.error(f"Database connection failed: {store.db.db_path}")

    logger.info(f"API endpoints available at http://{config.host()}:{config.port()}/api/tasks")
    yield
    logger.info("Shutting down Taskboard API")


# Create FastAPI app
app = FastAPI(
    title="Taskboard API",
    description="RESTful API for creating, listing, editing and deleting tasks",
    version="0.1.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.exception_handler(TaskValidationError)(task_validation_handler)
app.exception_handler(TaskNotFound)(task_not_found_handler)
app.exception_handler(StorageFault)(storage_fault_handler)
app.exception_handler(RequestValidationError)(request_validation_handler)
app.exception_handler(StarletteHTTPException)(http_exception_handler)
app.exception_handler(Exception)(unexpected_exception_handler)

# Include routers
app.include_router(tasks.router)
app.include_router(health.router)

# Client markup/script/styles are served as-is after the API routes
static_dir = config.static_dir()
if static_dir and os.path.isdir(static_dir):
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")


def run():
    """Console entry point"""
    import uvicorn

    uvicorn.run(
        "taskboard.main:app",
        host=config.host(),
        port=config.port(),
        reload=config.is_development(),
        log_level=config.log_level().lower()
    )


if __name__ == "__main__":
    run()
