"""
File Operation Utilities

Filesystem helpers shared by the transfer and rename engines: name
splitting, free-name search, forced removal, recursive copy and moves
that survive crossing a device boundary.

Author: File Shelf Project
License: MIT
"""

import os
import errno
import shutil
from pathlib import Path
from typing import Tuple, Union

from .logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]

# Upper bound for the "name (n).ext" search
DEFAULT_SEARCH_LIMIT = 9999


def split_name(name: str, is_folder: bool = False) -> Tuple[str, str]:
    """
    Split an entry name into base and extension at the last dot.
    
    Folders never have an extension. Dotfiles such as ``.bashrc`` are
    treated as having no extension.
    
    Args:
        name: Base name of the entry
        is_folder: Whether the entry is a folder
        
    Returns:
        Tuple of (base, ext) where ext includes the leading dot or is empty
    """
    if is_folder:
        return name, ""
    return os.path.splitext(name)


def path_exists(path: PathLike) -> bool:
    """Return True if anything, including a dangling symlink, sits at path."""
    return os.path.lexists(path)


def find_available_name(
    directory: PathLike,
    name: str,
    is_folder: bool = False,
    limit: int = DEFAULT_SEARCH_LIMIT
) -> Path:
    """
    Find the first free ``"{base} ({n}){ext}"`` path inside a directory.
    
    The search only stats candidates, it never creates anything. When all
    ``limit`` candidates are taken the original colliding path is returned
    so that the following filesystem call fails instead of looping forever.
    
    Args:
        directory: Directory to search in
        name: Name that collided
        is_folder: Whether the entry is a folder (no extension split)
        limit: Highest counter to try
        
    Returns:
        Path of the first free candidate, or ``directory / name``
    """
    directory = Path(directory)
    base, ext = split_name(name, is_folder)
    
    for counter in range(1, limit + 1):
        candidate = directory / f"{base} ({counter}){ext}"
        if not path_exists(candidate):
            logger.debug(f"Resolved name collision: {name} -> {candidate.name}")
            return candidate
    
    logger.warning(f"No free name for {name} after {limit} attempts in {directory}")
    return directory / name


def remove_path(path: PathLike) -> None:
    """
    Remove a file, symlink or folder tree, ignoring a missing target.
    
    Args:
        path: Entry to remove
    """
    path = Path(path)
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        pass
    logger.debug(f"Removed: {path}")


def copy_path(source: PathLike, destination: PathLike) -> None:
    """
    Recursively copy a file or folder, leaving the source untouched.
    
    Symlinks are copied as symlinks. File metadata is preserved. An
    existing destination is never overwritten, and a failed copy removes
    whatever it had already written.
    
    Args:
        source: Entry to copy
        destination: Full target path (not the parent directory)
    """
    source = Path(source)
    _refuse_existing(destination)
    try:
        if source.is_dir() and not source.is_symlink():
            shutil.copytree(source, destination, symlinks=True)
        else:
            shutil.copy2(source, destination, follow_symlinks=False)
    except OSError:
        # destination did not exist before the copy started
        logger.warning(f"Copy failed, removing partial copy: {destination}")
        remove_path(destination)
        raise
    logger.debug(f"Copied: {source} -> {destination}")


def move_path(source: PathLike, destination: PathLike) -> None:
    """
    Move an entry, falling back to copy and delete across devices.
    
    Only ``EXDEV`` triggers the fallback; any other error from the atomic
    rename is raised unchanged. An existing destination is never
    overwritten.
    
    Args:
        source: Entry to move
        destination: Full target path (not the parent directory)
        
    Raises:
        FileExistsError: If something already sits at destination
        OSError: If the rename or the fallback copy/removal fails
    """
    _refuse_existing(destination)
    try:
        os.rename(source, destination)
        logger.debug(f"Moved: {source} -> {destination}")
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
    
    logger.info(f"Cross-device move, copying instead: {source} -> {destination}")
    copy_path(source, destination)
    remove_path(source)


def _refuse_existing(destination: PathLike) -> None:
    if path_exists(destination):
        raise FileExistsError(errno.EEXIST, "Destination already exists", str(destination))


def describe_error(error: Exception) -> str:
    """
    One-line message for a failed filesystem operation.
    
    ``shutil.Error`` from a tree copy carries a list of
    ``(src, dst, reason)`` tuples; the first reason is reported.
    """
    if isinstance(error, shutil.Error) and error.args and isinstance(error.args[0], list):
        failures = error.args[0]
        if failures:
            src, _, reason = failures[0]
            extra = f" (and {len(failures) - 1} more)" if len(failures) > 1 else ""
            return f"{reason}: {src}{extra}"
    return str(error)
