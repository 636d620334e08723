"""
Web Application Entry Point
============================

FastAPI application exposing the shelf to a local front end.

Author: File Shelf Project
License: MIT
"""

from contextlib import asynccontextmanager
from fastapi import FastAPI

from .routes import api_router, set_service, get_service
from ..utils.logger import get_logger, setup_logging
from ..core.shelf_service import ShelfService
from ..config.config_loader import ConfigLoader

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the shelf service from configuration unless one was injected."""
    from . import routes
    
    owns_service = routes._service is None
    if owns_service:
        config = ConfigLoader().load()
        setup_logging(
            log_level=config.app.log_level.value,
            log_to_file=config.app.log_to_file,
            log_file_path=config.app.log_file_path,
            log_rotation_size=config.app.log_rotation_size,
            log_retention_count=config.app.log_retention_count,
            json_format=config.app.json_logs
        )
        set_service(ShelfService.from_config(config))
    
    logger.info("File Shelf web application started")
    yield
    
    if owns_service:
        set_service(None)
    logger.info("File Shelf web application stopped")


app = FastAPI(
    title="File Shelf",
    description="Stage files and folders, then copy, move or rename them in batches",
    version="0.1.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

app.include_router(api_router, prefix="/api", tags=["Shelf"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    get_service()
    return {"status": "healthy", "service": "file_shelf"}


def main():
    """Run the API with uvicorn using the configured host and port."""
    import uvicorn
    config = ConfigLoader().load()
    uvicorn.run(
        "file_shelf.web.app:app",
        host=config.app.host,
        port=config.app.port,
        log_level=config.app.log_level.value.lower()
    )


if __name__ == "__main__":
    main()
