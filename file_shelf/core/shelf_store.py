"""
Shelf Store

JSON-file persistence for the list of staged items.

Author: File Shelf Project
License: MIT
"""

import json
import os
from pathlib import Path
from typing import Iterable, List, Union

from ..utils.logger import get_logger
from .models import StagedItem

logger = get_logger(__name__)


class ShelfStore:
    """
    Ordered list of staged items persisted as ``{"items": [...]}``.
    
    Every call reads or rewrites the whole file; the list is small.
    An unreadable file is treated as an empty shelf.
    """
    
    def __init__(self, storage_path: Union[str, Path]):
        """
        Initialize the store.
        
        Args:
            storage_path: JSON file holding the shelf
        """
        self.storage_path = Path(storage_path).expanduser()
        logger.debug(f"ShelfStore using {self.storage_path}")
    
    def load(self) -> List[StagedItem]:
        """Return staged items in shelf order."""
        if not self.storage_path.exists():
            return []
        
        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read shelf from {self.storage_path}: {e}")
            return []
        
        items = []
        for item_data in data.get('items', []):
            try:
                items.append(StagedItem.from_dict(item_data))
            except (KeyError, ValueError) as e:
                logger.warning(f"Could not restore shelf item: {e}")
        return items
    
    def replace_all(self, items: Iterable[StagedItem]) -> None:
        """Overwrite the shelf with items."""
        items = list(items)
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        
        tmp_path = self.storage_path.with_name(self.storage_path.name + ".tmp")
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump({'items': [item.to_dict() for item in items]}, f, indent=2)
        os.replace(tmp_path, self.storage_path)
        
        logger.debug(f"Saved shelf with {len(items)} item(s)")
    
    def add_paths(self, paths: Iterable[Union[str, Path]]) -> List[StagedItem]:
        """
        Stage filesystem entries.
        
        Paths that do not exist or are already on the shelf are ignored.
        
        Args:
            paths: Entries to stage
            
        Returns:
            The newly staged items
        """
        items = self.load()
        known = {os.path.normpath(item.path) for item in items}
        added = []
        
        for path in paths:
            path = os.path.abspath(os.path.expanduser(str(path)))
            if path in known:
                logger.debug(f"Already on shelf: {path}")
                continue
            if not os.path.lexists(path):
                logger.warning(f"Not adding missing path: {path}")
                continue
            item = StagedItem.from_path(path)
            items.append(item)
            added.append(item)
            known.add(path)
        
        if added:
            self.replace_all(items)
            logger.info(f"Added {len(added)} item(s) to shelf")
        return added
    
    def remove(self, item_id: str) -> bool:
        """
        Remove one item by id.
        
        Returns:
            True if the item was on the shelf
        """
        items = self.load()
        remaining = [item for item in items if item.id != item_id]
        if len(remaining) == len(items):
            return False
        self.replace_all(remaining)
        logger.info(f"Removed item {item_id} from shelf")
        return True
    
    def clear(self) -> None:
        """Remove every item."""
        self.replace_all([])
        logger.info("Shelf cleared")
