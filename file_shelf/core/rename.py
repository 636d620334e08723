"""
Rename Preview/Apply Engine

Computes new names for shelf items without touching the filesystem, and
applies a confirmed preview in place.

Author: File Shelf Project
License: MIT
"""

import os
from pathlib import Path
from typing import List, Sequence

from ..utils.logger import get_logger
from ..utils.file_ops import path_exists, split_name
from .models import (
    OperationResult,
    RenameMode,
    RenamePreview,
    RenameSpec,
    StagedItem,
)

logger = get_logger(__name__)

DEFAULT_START_NUMBER = 1
DEFAULT_PADDING = 3


def compute_name(item: StagedItem, spec: RenameSpec, index: int) -> str:
    """
    New leaf name for one item.
    
    Args:
        item: Item being renamed
        spec: Rename parameters
        index: Position of the item in the batch (used by numbering)
        
    Returns:
        The new name, or the current name for unknown modes
    """
    base, ext = split_name(item.name, item.is_folder)
    mode = spec.mode
    
    if mode == RenameMode.PREFIX:
        return f"{spec.prefix}{item.name}"
    elif mode == RenameMode.SUFFIX:
        return f"{base}{spec.suffix}{ext}"
    elif mode == RenameMode.NUMBERING:
        number = (spec.start_number or DEFAULT_START_NUMBER) + index
        return f"{str(number).zfill(spec.padding or DEFAULT_PADDING)}{ext}"
    elif mode == RenameMode.REPLACE:
        if not spec.find:
            return item.name
        return item.name.replace(spec.find, spec.replace or "")
    
    return item.name


def preview(items: Sequence[StagedItem], spec: RenameSpec) -> List[RenamePreview]:
    """
    Build rename previews for a batch. Pure, no filesystem access.
    
    Args:
        items: Items in batch order
        spec: Rename parameters
        
    Returns:
        One RenamePreview per item, in input order
    """
    previews = []
    for index, item in enumerate(items):
        new_name = compute_name(item, spec, index)
        previews.append(RenamePreview(
            item=item,
            old_name=item.name,
            new_name=new_name,
            new_path=str(Path(item.path).parent / new_name)
        ))
    return previews


def apply(previews: Sequence[RenamePreview]) -> List[OperationResult]:
    """
    Rename items in place according to their previews.
    
    Unchanged names succeed without touching the filesystem. Each rename
    is independent; a failure does not undo earlier renames.
    
    Args:
        previews: Previews, usually straight from preview()
        
    Returns:
        One OperationResult per preview, in input order
    """
    results = []
    renamed = 0
    
    for p in previews:
        if not p.changed:
            results.append(OperationResult.ok(p.item, p.item.path))
            continue
        
        try:
            if path_exists(p.new_path) and not _is_same_entry(p.item.path, p.new_path):
                raise FileExistsError(f"'{p.new_name}' already exists")
            os.rename(p.item.path, p.new_path)
            renamed += 1
            logger.debug(f"Renamed: {p.old_name} -> {p.new_name}")
            results.append(OperationResult.ok(p.item, p.new_path))
        except OSError as e:
            logger.error(f"Failed to rename {p.item.path}: {e}")
            results.append(OperationResult.fail(p.item, str(e)))
    
    logger.info(f"Renamed {renamed} of {len(previews)} item(s)")
    return results


def _is_same_entry(path_a: str, path_b: str) -> bool:
    # Case-only renames on case-insensitive filesystems resolve to the same entry
    try:
        return os.path.samefile(path_a, path_b)
    except OSError:
        return False
