"""
Shelf Data Models

Staged items, per-item operation results, rename parameters and
previews shared by the transfer and rename engines.

Author: File Shelf Project
License: MIT
"""

import os
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, Field


class ItemType(str, Enum):
    """Kind of filesystem entry on the shelf."""
    FILE = "file"
    FOLDER = "folder"


class TransferMode(str, Enum):
    """Whether a transfer leaves the source in place."""
    COPY = "copy"
    MOVE = "move"


class ConflictStrategy(str, Enum):
    """What to do when the target name is already taken."""
    SKIP = "skip"
    REPLACE = "replace"
    RENAME = "rename"


class RenameMode(str, Enum):
    """Batch rename modes."""
    PREFIX = "prefix"
    SUFFIX = "suffix"
    NUMBERING = "numbering"
    REPLACE = "replace"


@dataclass(frozen=True)
class StagedItem:
    """A filesystem entry staged on the shelf."""
    id: str
    name: str
    path: str
    type: ItemType = ItemType.FILE
    
    @property
    def is_folder(self) -> bool:
        return self.type == ItemType.FOLDER
    
    def with_path(self, new_path: Union[str, Path]) -> 'StagedItem':
        """Copy of this item relocated to new_path, name taken from its leaf."""
        new_path = Path(new_path)
        return replace(self, name=new_path.name, path=str(new_path))
    
    @classmethod
    def from_path(cls, path: Union[str, Path]) -> 'StagedItem':
        """
        Build a new item for an existing filesystem entry.
        
        Args:
            path: Entry to stage
            
        Returns:
            StagedItem with a fresh id
        """
        path = Path(os.path.abspath(os.path.expanduser(str(path))))
        item_type = ItemType.FOLDER if path.is_dir() else ItemType.FILE
        return cls(
            id=uuid.uuid4().hex,
            name=path.name,
            path=str(path),
            type=item_type
        )
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'name': self.name,
            'path': self.path,
            'type': self.type.value
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'StagedItem':
        """Create from dictionary."""
        return cls(
            id=data['id'],
            name=data['name'],
            path=data['path'],
            type=ItemType(data.get('type', ItemType.FILE.value))
        )


@dataclass
class OperationResult:
    """
    Outcome of one item in a batch.
    
    ``skipped`` results are never successful, and successful results
    always carry ``new_path`` and no error. Use the ``ok``/``skip``/``fail``
    constructors to keep it that way.
    """
    success: bool
    item: StagedItem
    skipped: bool = False
    new_path: Optional[str] = None
    error: Optional[str] = None
    
    @classmethod
    def ok(cls, item: StagedItem, new_path: Union[str, Path]) -> 'OperationResult':
        return cls(success=True, item=item, new_path=str(new_path))
    
    @classmethod
    def skip(cls, item: StagedItem, reason: str) -> 'OperationResult':
        return cls(success=False, item=item, skipped=True, error=reason)
    
    @classmethod
    def fail(cls, item: StagedItem, error: str) -> 'OperationResult':
        return cls(success=False, item=item, error=error)
    
    @property
    def failed(self) -> bool:
        return not self.success and not self.skipped
    
    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            'success': self.success,
            'skipped': self.skipped,
            'item': self.item.to_dict(),
            'new_path': self.new_path,
            'error': self.error
        }


class RenameSpec(BaseModel):
    """
    Batch rename parameters.
    
    Only the fields used by ``mode`` matter. A mode outside RenameMode is
    accepted and leaves every name unchanged. A start number or padding
    of 0 means "use the default" (1 and 3).
    """
    mode: Union[RenameMode, str] = RenameMode.PREFIX
    prefix: str = ""
    suffix: str = ""
    start_number: int = Field(default=1, ge=0)
    padding: int = Field(default=3, ge=0, le=32)
    find: str = ""
    replace: str = ""


@dataclass
class RenamePreview:
    """Computed new name for one item. Never persisted."""
    item: StagedItem
    old_name: str
    new_name: str
    new_path: str
    
    @property
    def changed(self) -> bool:
        return self.old_name != self.new_name
    
    def to_dict(self) -> dict:
        return {
            'item': self.item.to_dict(),
            'old_name': self.old_name,
            'new_name': self.new_name,
            'new_path': self.new_path,
            'changed': self.changed
        }


@dataclass
class DestinationCheck:
    """Result of validating a destination directory."""
    valid: bool
    error: Optional[str] = None


@dataclass
class BatchSummary:
    """Aggregated counts for one batch, with a one-line user message."""
    action: str
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0
    
    @classmethod
    def from_results(cls, action: str, results: List[OperationResult]) -> 'BatchSummary':
        summary = cls(action=action)
        for result in results:
            if result.success:
                summary.succeeded += 1
            elif result.skipped:
                summary.skipped += 1
            else:
                summary.failed += 1
        return summary
    
    @property
    def total(self) -> int:
        return self.succeeded + self.skipped + self.failed
    
    @property
    def all_succeeded(self) -> bool:
        return self.total > 0 and self.succeeded == self.total
    
    @property
    def message(self) -> str:
        """E.g. ``"Moved 2 items, 1 failed"``."""
        noun = "item" if self.succeeded == 1 else "items"
        parts = [f"{self.action} {self.succeeded} {noun}"]
        if self.skipped:
            parts.append(f"{self.skipped} skipped")
        if self.failed:
            parts.append(f"{self.failed} failed")
        return ", ".join(parts)
    
    def to_dict(self) -> dict:
        return {
            'action': self.action,
            'succeeded': self.succeeded,
            'skipped': self.skipped,
            'failed': self.failed,
            'message': self.message
        }


@dataclass
class BatchOutcome:
    """Summary plus per-item results returned by the shelf service."""
    summary: BatchSummary
    results: List[OperationResult] = field(default_factory=list)
    
    def to_dict(self) -> dict:
        return {
            'summary': self.summary.to_dict(),
            'results': [r.to_dict() for r in self.results]
        }
