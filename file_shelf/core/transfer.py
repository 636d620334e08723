"""
Batch Transfer Engine

Copies or moves staged items into a destination directory, one item at a
time, resolving name collisions with the selected conflict strategy.

Author: File Shelf Project
License: MIT
"""

import os
import stat
from pathlib import Path
from typing import List, Sequence, Union

from ..utils.logger import get_logger
from ..utils.file_ops import (
    DEFAULT_SEARCH_LIMIT,
    copy_path,
    describe_error,
    find_available_name,
    move_path,
    path_exists,
    remove_path,
)
from .models import (
    ConflictStrategy,
    DestinationCheck,
    OperationResult,
    StagedItem,
    TransferMode,
)

logger = get_logger(__name__)


def validate_destination(path: Union[str, Path]) -> DestinationCheck:
    """
    Check that a destination exists and is a directory.
    
    Args:
        path: Candidate destination
        
    Returns:
        DestinationCheck with an error message when invalid
    """
    try:
        st = os.stat(path)
    except FileNotFoundError:
        return DestinationCheck(valid=False, error="Destination does not exist")
    except OSError as e:
        logger.warning(f"Cannot stat destination {path}: {e}")
        return DestinationCheck(valid=False, error="Cannot access destination")
    
    if not stat.S_ISDIR(st.st_mode):
        return DestinationCheck(valid=False, error="Destination must be a folder")
    
    return DestinationCheck(valid=True)


class BatchTransfer:
    """
    Copy/move engine for shelf items.
    
    Each item is handled independently: a failure is recorded in that
    item's result and the batch carries on. Nothing is rolled back.
    The destination root is assumed to be validated by the caller.
    """
    
    def __init__(self, search_limit: int = DEFAULT_SEARCH_LIMIT):
        """
        Initialize the engine.
        
        Args:
            search_limit: Highest counter tried when auto-renaming
        """
        self.search_limit = search_limit
    
    def transfer(
        self,
        items: Sequence[StagedItem],
        destination_dir: Union[str, Path],
        mode: TransferMode,
        conflict_strategy: ConflictStrategy
    ) -> List[OperationResult]:
        """
        Transfer every item into destination_dir.
        
        Args:
            items: Items to transfer
            destination_dir: Validated destination directory
            mode: Copy or move
            conflict_strategy: Skip, replace or rename on collisions
            
        Returns:
            One OperationResult per item, in input order
        """
        mode = TransferMode(mode)
        conflict_strategy = ConflictStrategy(conflict_strategy)
        destination_dir = Path(destination_dir)
        
        logger.info(
            f"Starting {mode.value} of {len(items)} item(s) to {destination_dir} "
            f"(conflicts: {conflict_strategy.value})"
        )
        
        results = []
        for item in items:
            try:
                result = self._transfer_item(item, destination_dir, mode, conflict_strategy)
            except Exception as e:
                message = describe_error(e)
                logger.error(f"Failed to {mode.value} {item.path}: {message}")
                result = OperationResult.fail(item, message)
            results.append(result)
        
        return results
    
    def _transfer_item(
        self,
        item: StagedItem,
        destination_dir: Path,
        mode: TransferMode,
        conflict_strategy: ConflictStrategy
    ) -> OperationResult:
        target = destination_dir / item.name
        
        if mode == TransferMode.MOVE and _same_path(target, item.path):
            logger.info(f"Skipping {item.name}: already in destination")
            return OperationResult.skip(item, "Item already in destination")
        
        if path_exists(target):
            if conflict_strategy == ConflictStrategy.SKIP:
                logger.info(f"Skipping existing entry: {target}")
                return OperationResult.skip(item, f"'{item.name}' already exists in destination")
            elif conflict_strategy == ConflictStrategy.REPLACE:
                if _same_path(target, item.path):
                    return OperationResult.fail(item, "Cannot replace an item with itself")
                logger.info(f"Replacing existing entry: {target}")
                remove_path(target)
            elif conflict_strategy == ConflictStrategy.RENAME:
                target = find_available_name(
                    destination_dir, item.name, item.is_folder, self.search_limit
                )
                logger.info(f"Renaming to avoid collision: {target.name}")
        
        if mode == TransferMode.COPY:
            copy_path(item.path, target)
        else:
            move_path(item.path, target)
        
        logger.debug(f"{mode.value}: {item.path} -> {target}")
        return OperationResult.ok(item, target)


def _same_path(target: Path, current: Union[str, Path]) -> bool:
    return os.path.normpath(os.path.abspath(target)) == os.path.normpath(os.path.abspath(current))


def transfer(
    items: Sequence[StagedItem],
    destination_dir: Union[str, Path],
    mode: TransferMode,
    conflict_strategy: ConflictStrategy = ConflictStrategy.SKIP
) -> List[OperationResult]:
    """
    Convenience wrapper around BatchTransfer with the default search limit.
    
    Args:
        items: Items to transfer
        destination_dir: Validated destination directory
        mode: Copy or move
        conflict_strategy: Skip, replace or rename on collisions
        
    Returns:
        One OperationResult per item, in input order
    """
    return BatchTransfer().transfer(items, destination_dir, mode, conflict_strategy)
