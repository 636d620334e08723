"""
Unit Tests for the Shelf Store and Service

Tests JSON persistence of staged items and the copy/move/rename
workflow that writes results back to the store.

Author: File Shelf Project
License: MIT
"""

import pytest
from pathlib import Path

from file_shelf.core.models import ConflictStrategy, ItemType, RenameSpec
from file_shelf.core.shelf_store import ShelfStore
from file_shelf.core.shelf_service import (
    ShelfService,
    DestinationError,
    EmptyShelfError,
    ItemNotFoundError,
)


@pytest.fixture
def store(tmp_path):
    """Store backed by a temporary JSON file."""
    return ShelfStore(tmp_path / "state" / "shelf.json")


@pytest.fixture
def files(tmp_path):
    """Two source files and an empty destination."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("a")
    (src / "b.txt").write_text("b")
    dest = tmp_path / "dest"
    dest.mkdir()
    return src, dest


class TestShelfStore:
    """Test suite for ShelfStore."""
    
    def test_empty_when_missing(self, store):
        """Test a missing file reads as an empty shelf."""
        assert store.load() == []
    
    def test_add_and_reload(self, store, files):
        """Test that added items persist in order."""
        src, _ = files
        added = store.add_paths([src / "a.txt", src])
        
        loaded = ShelfStore(store.storage_path).load()
        
        assert [i.id for i in loaded] == [i.id for i in added]
        assert loaded[0].name == "a.txt"
        assert loaded[0].type == ItemType.FILE
        assert loaded[1].type == ItemType.FOLDER
    
    def test_add_ignores_duplicates_and_missing(self, store, files):
        """Test duplicate and missing paths are skipped."""
        src, _ = files
        store.add_paths([src / "a.txt"])
        
        added = store.add_paths([src / "a.txt", src / "missing.txt", src / "b.txt"])
        
        assert [i.name for i in added] == ["b.txt"]
        assert len(store.load()) == 2
    
    def test_remove_and_clear(self, store, files):
        """Test removing one item and clearing the rest."""
        src, _ = files
        a, b = store.add_paths([src / "a.txt", src / "b.txt"])
        
        assert store.remove(a.id) is True
        assert store.remove("unknown") is False
        assert [i.id for i in store.load()] == [b.id]
        
        store.clear()
        assert store.load() == []
    
    def test_corrupt_file_reads_empty(self, store):
        """Test that an unreadable shelf does not raise."""
        store.storage_path.parent.mkdir(parents=True)
        store.storage_path.write_text("{not json")
        
        assert store.load() == []


class TestShelfService:
    """Test suite for ShelfService."""
    
    def test_copy_clears_shelf_on_full_success(self, store, files):
        """Test the shelf is emptied when every item copied."""
        src, dest = files
        store.add_paths([src / "a.txt", src / "b.txt"])
        service = ShelfService(store)
        
        outcome = service.copy_to(dest)
        
        assert outcome.summary.succeeded == 2
        assert outcome.summary.message == "Copied 2 items"
        assert store.load() == []
        assert (src / "a.txt").exists()
    
    def test_keep_preference_keeps_shelf(self, store, files):
        """Test the keep-after-completion preference."""
        src, dest = files
        store.add_paths([src / "a.txt"])
        service = ShelfService(store, keep_shelf_after_completion=lambda: True)
        
        outcome = service.move_to(dest)
        
        assert outcome.summary.message == "Moved 1 item"
        items = store.load()
        assert len(items) == 1
        assert items[0].path == str(dest / "a.txt")
    
    def test_partial_move_updates_paths(self, store, files):
        """Test a partial move keeps the shelf with updated paths."""
        src, dest = files
        (dest / "b.txt").write_text("existing")
        a, b = store.add_paths([src / "a.txt", src / "b.txt"])
        service = ShelfService(store)
        
        outcome = service.move_to(dest, ConflictStrategy.SKIP)
        
        assert outcome.summary.message == "Moved 1 item, 1 skipped"
        items = {i.id: i for i in store.load()}
        assert items[a.id].path == str(dest / "a.txt")
        assert items[b.id].path == str(src / "b.txt")
    
    def test_move_with_rename_records_new_name(self, store, files):
        """Test auto-renamed targets are written back with their new name."""
        src, dest = files
        (dest / "a.txt").write_text("existing")
        (a,) = store.add_paths([src / "a.txt"])
        service = ShelfService(store, keep_shelf_after_completion=lambda: True)
        
        service.move_to(dest, ConflictStrategy.RENAME)
        
        (moved,) = store.load()
        assert moved.id == a.id
        assert moved.name == "a (1).txt"
    
    def test_default_strategy_from_service(self, store, files):
        """Test that the configured default strategy is used."""
        src, dest = files
        (dest / "a.txt").write_text("old")
        store.add_paths([src / "a.txt"])
        service = ShelfService(store, default_conflict_strategy=ConflictStrategy.REPLACE)
        
        service.copy_to(dest)
        
        assert (dest / "a.txt").read_text() == "a"
    
    def test_invalid_destination_touches_nothing(self, store, files, tmp_path):
        """Test validation happens before any item is processed."""
        src, _ = files
        store.add_paths([src / "a.txt"])
        service = ShelfService(store)
        
        with pytest.raises(DestinationError, match="does not exist"):
            service.move_to(tmp_path / "nowhere")
        
        assert (src / "a.txt").exists()
        assert len(store.load()) == 1
    
    def test_empty_shelf(self, store, files):
        """Test batches on an empty shelf are rejected."""
        _, dest = files
        service = ShelfService(store)
        
        with pytest.raises(EmptyShelfError):
            service.copy_to(dest)
        with pytest.raises(EmptyShelfError):
            service.rename_apply(RenameSpec(mode="prefix", prefix="x"))
    
    def test_remove_unknown_item(self, store):
        """Test removing an id that is not staged."""
        with pytest.raises(ItemNotFoundError):
            ShelfService(store).remove("nope")
    
    def test_rename_updates_store(self, store, files):
        """Test renamed items keep their id with the new name and path."""
        src, _ = files
        a, b = store.add_paths([src / "a.txt", src / "b.txt"])
        service = ShelfService(store)
        spec = RenameSpec(mode="numbering", start_number=7, padding=2)
        
        previews = service.rename_preview(spec)
        assert [p.new_name for p in previews] == ["07.txt", "08.txt"]
        
        outcome = service.rename_apply(spec)
        
        assert outcome.summary.message == "Renamed 2 items"
        items = store.load()
        assert [i.id for i in items] == [a.id, b.id]
        assert [i.name for i in items] == ["07.txt", "08.txt"]
        assert (src / "07.txt").read_text() == "a"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
