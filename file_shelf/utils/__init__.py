"""
Utility Module

Logging setup and filesystem helpers.

Author: File Shelf Project
License: MIT
"""
