"""
API Routes
==========

REST endpoints for managing the shelf and running copy, move and rename
batches.

Author: File Shelf Project
License: MIT
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field
from typing import Optional, List

from ..core.models import ConflictStrategy, RenameSpec
from ..core.transfer import validate_destination
from ..core.shelf_service import (
    ShelfService,
    ShelfError,
    DestinationError,
    EmptyShelfError,
    ItemNotFoundError,
)
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Global service reference (set by app.py)
_service: Optional[ShelfService] = None


def set_service(service: Optional[ShelfService]):
    """Set shelf service instance for routes."""
    global _service
    _service = service


def get_service() -> ShelfService:
    """Get shelf service instance."""
    if _service is None:
        raise HTTPException(status_code=503, detail="Shelf service not initialized")
    return _service


api_router = APIRouter()


# ============================================================================
# Pydantic Models for API Requests
# ============================================================================

class AddItemsRequest(BaseModel):
    """Paths to stage on the shelf."""
    paths: List[str] = Field(..., min_length=1)


class DestinationRequest(BaseModel):
    """Destination to validate."""
    path: str = Field(..., min_length=1)


class TransferRequest(BaseModel):
    """Copy or move request."""
    destination: str = Field(..., min_length=1)
    conflict_strategy: Optional[ConflictStrategy] = None


def _to_http_error(e: ShelfError) -> HTTPException:
    if isinstance(e, DestinationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(e, EmptyShelfError):
        code = status.HTTP_409_CONFLICT
    elif isinstance(e, ItemNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=str(e))


# ============================================================================
# Shelf Contents
# ============================================================================

@api_router.get("/items")
def list_items():
    """List staged items in shelf order."""
    items = get_service().list_items()
    return {
        "items": [item.to_dict() for item in items],
        "total": len(items)
    }


@api_router.post("/items", status_code=status.HTTP_201_CREATED)
def add_items(request: AddItemsRequest):
    """Stage filesystem entries. Missing and duplicate paths are ignored."""
    added = get_service().add(request.paths)
    return {
        "added": [item.to_dict() for item in added],
        "ignored": len(request.paths) - len(added)
    }


@api_router.delete("/items/{item_id}")
def remove_item(item_id: str):
    """Remove one staged item."""
    try:
        get_service().remove(item_id)
    except ShelfError as e:
        raise _to_http_error(e)
    return {"success": True, "message": "Removed from shelf"}


@api_router.delete("/items")
def clear_items():
    """Remove every staged item."""
    get_service().clear()
    return {"success": True, "message": "Shelf cleared"}


# ============================================================================
# Transfers
# ============================================================================

@api_router.post("/destination/validate")
def check_destination(request: DestinationRequest):
    """Check that a destination exists and is a folder."""
    check = validate_destination(request.path)
    return {"valid": check.valid, "error": check.error}


@api_router.post("/copy")
def copy_items(request: TransferRequest):
    """Copy every staged item into the destination."""
    try:
        outcome = get_service().copy_to(request.destination, request.conflict_strategy)
    except ShelfError as e:
        raise _to_http_error(e)
    return outcome.to_dict()


@api_router.post("/move")
def move_items(request: TransferRequest):
    """Move every staged item into the destination."""
    try:
        outcome = get_service().move_to(request.destination, request.conflict_strategy)
    except ShelfError as e:
        raise _to_http_error(e)
    return outcome.to_dict()


# ============================================================================
# Rename
# ============================================================================

@api_router.post("/rename/preview")
def rename_preview(spec: RenameSpec):
    """Preview new names without touching the filesystem."""
    previews = get_service().rename_preview(spec)
    return {
        "previews": [p.to_dict() for p in previews],
        "changed": sum(1 for p in previews if p.changed)
    }


@api_router.post("/rename/apply")
def rename_apply(spec: RenameSpec):
    """Rename staged items in place."""
    try:
        outcome = get_service().rename_apply(spec)
    except ShelfError as e:
        raise _to_http_error(e)
    return outcome.to_dict()
