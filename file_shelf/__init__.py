"""
File Shelf

Stage files and folders, then copy, move or batch-rename them.

Author: File Shelf Project
License: MIT
"""

__version__ = "0.1.0"
