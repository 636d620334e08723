"""
Shelf Service

Caller-side workflow around the engines: loads the staged items, validates
the destination, runs the batch, writes new paths back to the store and
summarizes the outcome.

Author: File Shelf Project
License: MIT
"""

from pathlib import Path
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..utils.logger import get_logger
from ..config.schema import Config
from . import rename
from .models import (
    BatchOutcome,
    BatchSummary,
    ConflictStrategy,
    OperationResult,
    RenamePreview,
    RenameSpec,
    StagedItem,
    TransferMode,
)
from .shelf_store import ShelfStore
from .transfer import BatchTransfer, validate_destination

logger = get_logger(__name__)

ACTION_NAMES = {
    TransferMode.COPY: "Copied",
    TransferMode.MOVE: "Moved",
}


class ShelfError(Exception):
    """Base class for errors that stop a whole shelf operation."""


class DestinationError(ShelfError):
    """Destination failed validation; no item was touched."""


class EmptyShelfError(ShelfError):
    """There is nothing on the shelf to operate on."""


class ItemNotFoundError(ShelfError):
    """No staged item has the requested id."""


class ShelfService:
    """
    Shelf workflow for copy, move and rename.
    
    Batches are serialized with a lock so two requests never race on the
    same store or destination.
    """
    
    def __init__(
        self,
        store: ShelfStore,
        keep_shelf_after_completion: Callable[[], bool] = lambda: False,
        default_conflict_strategy: ConflictStrategy = ConflictStrategy.SKIP,
        engine: Optional[BatchTransfer] = None
    ):
        """
        Initialize the service.
        
        Args:
            store: Staged-item store
            keep_shelf_after_completion: Preference lookup; when it returns
                False the shelf is cleared after a fully successful transfer
            default_conflict_strategy: Strategy used when a call passes None
            engine: Transfer engine (default search limit if omitted)
        """
        self.store = store
        self.keep_shelf_after_completion = keep_shelf_after_completion
        self.default_conflict_strategy = ConflictStrategy(default_conflict_strategy)
        self.engine = engine or BatchTransfer()
        self._lock = Lock()
        
        logger.info("ShelfService initialized")
    
    @classmethod
    def from_config(cls, config: Config) -> 'ShelfService':
        """Build a service wired to the shelf section of config."""
        return cls(
            store=ShelfStore(config.shelf.storage_path),
            keep_shelf_after_completion=lambda: config.shelf.keep_shelf_after_completion,
            default_conflict_strategy=config.shelf.default_conflict_strategy,
            engine=BatchTransfer(search_limit=config.shelf.rename_search_limit)
        )
    
    # Shelf contents
    
    def list_items(self) -> List[StagedItem]:
        return self.store.load()
    
    def add(self, paths: Iterable[Union[str, Path]]) -> List[StagedItem]:
        with self._lock:
            return self.store.add_paths(paths)
    
    def remove(self, item_id: str) -> None:
        with self._lock:
            if not self.store.remove(item_id):
                raise ItemNotFoundError(f"No shelf item with id {item_id}")
    
    def clear(self) -> None:
        with self._lock:
            self.store.clear()
    
    # Transfers
    
    def copy_to(
        self,
        destination: Union[str, Path],
        conflict_strategy: Optional[ConflictStrategy] = None
    ) -> BatchOutcome:
        """Copy every staged item into destination."""
        return self._transfer(destination, TransferMode.COPY, conflict_strategy)
    
    def move_to(
        self,
        destination: Union[str, Path],
        conflict_strategy: Optional[ConflictStrategy] = None
    ) -> BatchOutcome:
        """Move every staged item into destination."""
        return self._transfer(destination, TransferMode.MOVE, conflict_strategy)
    
    def _transfer(
        self,
        destination: Union[str, Path],
        mode: TransferMode,
        conflict_strategy: Optional[ConflictStrategy]
    ) -> BatchOutcome:
        strategy = ConflictStrategy(conflict_strategy or self.default_conflict_strategy)
        
        with self._lock:
            items = self._load_nonempty()
            
            check = validate_destination(destination)
            if not check.valid:
                logger.warning(f"Invalid destination {destination}: {check.error}")
                raise DestinationError(check.error)
            
            results = self.engine.transfer(items, destination, mode, strategy)
            summary = BatchSummary.from_results(ACTION_NAMES[mode], results)
            
            if summary.all_succeeded and not self.keep_shelf_after_completion():
                self.store.clear()
            elif mode == TransferMode.MOVE:
                self._write_back(items, results)
        
        self._log_summary(summary)
        return BatchOutcome(summary=summary, results=results)
    
    # Rename
    
    def rename_preview(self, spec: RenameSpec) -> List[RenamePreview]:
        """Previews for the current shelf contents."""
        return rename.preview(self.store.load(), spec)
    
    def rename_apply(self, spec: RenameSpec) -> BatchOutcome:
        """Rename the staged items in place and record their new names."""
        with self._lock:
            items = self._load_nonempty()
            previews = rename.preview(items, spec)
            results = rename.apply(previews)
            self._write_back(items, results)
        
        summary = BatchSummary.from_results("Renamed", results)
        self._log_summary(summary)
        return BatchOutcome(summary=summary, results=results)
    
    # Helpers
    
    def _load_nonempty(self) -> List[StagedItem]:
        items = self.store.load()
        if not items:
            raise EmptyShelfError("Shelf is empty")
        return items
    
    def _write_back(self, items: List[StagedItem], results: List[OperationResult]):
        """Persist the new location of every item that changed path."""
        moved: Dict[str, str] = {
            r.item.id: r.new_path
            for r in results
            if r.success and r.new_path and r.new_path != r.item.path
        }
        if not moved:
            return
        
        updated = [
            item.with_path(moved[item.id]) if item.id in moved else item
            for item in items
        ]
        self.store.replace_all(updated)
        logger.debug(f"Updated {len(moved)} shelf item path(s)")
    
    def _log_summary(self, summary: BatchSummary):
        if summary.failed:
            logger.warning(summary.message)
        else:
            logger.info(summary.message)
