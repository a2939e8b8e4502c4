# utils/file_utils.py

"""File operation utilities."""
import os
from pathlib import Path, PurePath
from typing import List, Optional

def format_size(size_bytes: int) -> str:
    """Formats bytes into a human-readable string (B, KB, MB, GB, TB)."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024.0:
            return f"{size:.2f} {unit}"
        size /= 1024.0
    return f"{size:.2f} TB"

def file_identity(stat_info: os.stat_result, path) -> tuple:
    """
    Returns a key identifying the physical file behind a stat result.

    Device and inode where the platform provides them; some Windows
    filesystems report inode 0, in which case the normalised real path is used.
    """
    if stat_info.st_ino:
        return (stat_info.st_dev, stat_info.st_ino)
    return ('path', os.path.normcase(os.path.realpath(path)))

def is_subdirectory(child: PurePath, parent: PurePath) -> bool:
    """Checks if one path is equal to or below another, comparing components only."""
    parent_parts = parent.parts
    return child.parts[:len(parent_parts)] == parent_parts

def filter_overlapping_paths(paths: List[PurePath]) -> List[PurePath]:
    """Removes paths that are subdirectories of others in the list."""
    sorted_paths = sorted(set(paths), key=lambda p: len(p.parts))
    unique_paths = []
    for path in sorted_paths:
        if not any(is_subdirectory(path, existing) for existing in unique_paths):
            unique_paths.append(path)
    return unique_paths

def get_display_path(file_path: Path, base: Optional[Path] = None) -> str:
    """Get a user-friendly display path, relative to the working directory if possible."""
    base = base or Path.cwd()
    try:
        return str(Path(file_path).relative_to(base))
    except ValueError:
        return str(file_path)
