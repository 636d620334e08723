"""
Unit Tests for the Web API

Tests the HTTP endpoints against a service backed by a temporary shelf.

Author: File Shelf Project
License: MIT
"""

import pytest
from fastapi.testclient import TestClient

from file_shelf.core.shelf_store import ShelfStore
from file_shelf.core.shelf_service import ShelfService
from file_shelf.web.app import app
from file_shelf.web.routes import set_service


@pytest.fixture
def workspace(tmp_path):
    """Source folder with one file and an empty destination."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "IMG_001.jpg").write_text("jpg")
    dest = tmp_path / "dest"
    dest.mkdir()
    return src, dest


@pytest.fixture
def client(tmp_path):
    """Client with an injected service."""
    service = ShelfService(ShelfStore(tmp_path / "shelf.json"))
    set_service(service)
    with TestClient(app) as c:
        yield c
    set_service(None)


class TestShelfEndpoints:
    """Test suite for shelf content endpoints."""
    
    def test_health(self, client):
        """Test health check."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
    
    def test_add_list_remove(self, client, workspace):
        """Test staging and unstaging items."""
        src, _ = workspace
        
        response = client.post("/api/items", json={"paths": [str(src / "IMG_001.jpg"), "/no/such/file"]})
        assert response.status_code == 201
        body = response.json()
        assert body["ignored"] == 1
        item_id = body["added"][0]["id"]
        
        listing = client.get("/api/items").json()
        assert listing["total"] == 1
        assert listing["items"][0]["name"] == "IMG_001.jpg"
        
        assert client.delete(f"/api/items/{item_id}").status_code == 200
        assert client.delete(f"/api/items/{item_id}").status_code == 404
    
    def test_clear(self, client, workspace):
        """Test clearing the shelf."""
        src, _ = workspace
        client.post("/api/items", json={"paths": [str(src / "IMG_001.jpg")]})
        
        assert client.delete("/api/items").status_code == 200
        assert client.get("/api/items").json()["total"] == 0


class TestBatchEndpoints:
    """Test suite for copy, move and rename endpoints."""
    
    def test_validate_destination(self, client, workspace, tmp_path):
        """Test destination validation endpoint."""
        _, dest = workspace
        
        assert client.post("/api/destination/validate", json={"path": str(dest)}).json() == {
            "valid": True, "error": None
        }
        missing = client.post("/api/destination/validate", json={"path": str(tmp_path / "x")}).json()
        assert missing["valid"] is False
    
    def test_move(self, client, workspace):
        """Test moving the shelf into a destination."""
        src, dest = workspace
        client.post("/api/items", json={"paths": [str(src / "IMG_001.jpg")]})
        
        response = client.post("/api/move", json={"destination": str(dest), "conflict_strategy": "rename"})
        
        assert response.status_code == 200
        body = response.json()
        assert body["summary"]["message"] == "Moved 1 item"
        assert body["results"][0]["new_path"] == str(dest / "IMG_001.jpg")
        assert (dest / "IMG_001.jpg").exists()
    
    def test_copy_bad_destination(self, client, workspace, tmp_path):
        """Test invalid destination maps to 400."""
        src, _ = workspace
        client.post("/api/items", json={"paths": [str(src / "IMG_001.jpg")]})
        
        response = client.post("/api/copy", json={"destination": str(tmp_path / "missing")})
        
        assert response.status_code == 400
        assert "does not exist" in response.json()["detail"]
    
    def test_copy_empty_shelf(self, client, workspace):
        """Test empty shelf maps to 409."""
        _, dest = workspace
        
        response = client.post("/api/copy", json={"destination": str(dest)})
        assert response.status_code == 409
    
    def test_rename_preview_and_apply(self, client, workspace):
        """Test previewing then applying a find/replace rename."""
        src, _ = workspace
        client.post("/api/items", json={"paths": [str(src / "IMG_001.jpg")]})
        spec = {"mode": "replace", "find": "IMG_", "replace": "vacation_"}
        
        preview = client.post("/api/rename/preview", json=spec).json()
        assert preview["changed"] == 1
        assert preview["previews"][0]["new_name"] == "vacation_001.jpg"
        assert (src / "IMG_001.jpg").exists()
        
        applied = client.post("/api/rename/apply", json=spec).json()
        assert applied["summary"]["succeeded"] == 1
        assert (src / "vacation_001.jpg").exists()
        assert client.get("/api/items").json()["items"][0]["name"] == "vacation_001.jpg"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
