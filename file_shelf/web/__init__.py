"""
Web API Module
==============

FastAPI interface for the shelf.

Author: File Shelf Project
License: MIT
"""

from .app import app
from .routes import api_router, set_service, get_service

__all__ = ["app", "api_router", "set_service", "get_service"]
