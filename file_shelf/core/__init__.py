"""
File Shelf Core Module

Batch transfer and rename engines plus the staged-item model and store.
The shelf service lives in ``file_shelf.core.shelf_service``.

Author: File Shelf Project
License: MIT
"""

from .models import (
    StagedItem,
    ItemType,
    OperationResult,
    ConflictStrategy,
    TransferMode,
    RenameMode,
    RenameSpec,
    RenamePreview,
    DestinationCheck,
    BatchSummary,
    BatchOutcome,
)
from .transfer import BatchTransfer, transfer, validate_destination
from .rename import preview, apply
from .shelf_store import ShelfStore

__version__ = "0.1.0"
__all__ = [
    'StagedItem', 'ItemType', 'OperationResult', 'ConflictStrategy',
    'TransferMode', 'RenameMode', 'RenameSpec', 'RenamePreview',
    'DestinationCheck', 'BatchSummary', 'BatchOutcome',
    'BatchTransfer', 'transfer', 'validate_destination',
    'preview', 'apply', 'ShelfStore',
]
