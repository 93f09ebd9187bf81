"""
Archive helpers for the tar | pv | gzip pipeline.

Covers:
- Archive filename generation
- Source tree size calculation (for the progress meter)
- Stage command construction
"""

import os
import stat
from datetime import datetime
from typing import List, Optional

from probackup.config import Config
from .pipeline import Stage


class CompressionError(Exception):
    """Raised when archive metadata cannot be determined."""
    pass


def generate_archive_filename(now: Optional[datetime] = None, settings=Config) -> str:
    """
    Generate a standardized archive filename.

    Format: {prefix}-{YYYY-MM-DD_HH-MM-SS}.{ext}

    Args:
        now: Capture time (defaults to the current local time)
        settings: Configuration class providing prefix, format and extension

    Returns:
        Filename (without path)
    """
    if now is None:
        now = datetime.now()

    timestamp = now.strftime(settings.TIMESTAMP_FORMAT)
    return f"{settings.ARCHIVE_PREFIX}-{timestamp}.{settings.ARCHIVE_EXTENSION}"


def get_directory_size(directory: str) -> int:
    """
    Total apparent size in bytes of a directory tree.

    Mirrors `du -sb`: directories and symlinks count with their own size,
    symlinks are not followed, hard-linked files are counted once and
    unreadable entries are skipped.

    Args:
        directory: Root of the tree

    Returns:
        Size in bytes

    Raises:
        CompressionError: If the root itself cannot be read
    """
    try:
        total = os.lstat(directory).st_size
    except OSError as e:
        raise CompressionError(f"Failed to read source directory: {e}")

    seen_inodes = set()

    for root, dirs, files in os.walk(directory):
        for name in dirs + files:
            try:
                info = os.lstat(os.path.join(root, name))
            except OSError:
                continue

            if info.st_nlink > 1 and not stat.S_ISDIR(info.st_mode):
                key = (info.st_dev, info.st_ino)
                if key in seen_inodes:
                    continue
                seen_inodes.add(key)

            total += info.st_size

    return total


def build_backup_stages(source_dir: str, total_size: int) -> List[Stage]:
    """
    Build the archive, meter and compress stages for a source directory.

    Members are stored relative to source_dir so the archive extracts
    back into the same tree.
    """
    return [
        Stage('tar', ['tar', '-cf', '-', '-C', source_dir, '.']),
        Stage('pv', ['pv', '-s', str(total_size)]),
        Stage('gzip', ['gzip']),
    ]


def get_archive_size(archive_path: str) -> int:
    """
    Get the size of an archive file in bytes.

    Raises:
        CompressionError: If file doesn't exist or cannot be accessed
    """
    try:
        return os.path.getsize(archive_path)
    except FileNotFoundError:
        raise CompressionError(f"Archive not found: {archive_path}")
    except OSError as e:
        raise CompressionError(f"Failed to get archive size: {e}")


def format_size(size_bytes: int) -> str:
    """Human readable size, e.g. '1.50 MB'."""
    size = float(size_bytes)
    for unit in ('B', 'KB', 'MB', 'GB'):
        if size < 1024 or unit == 'GB':
            break
        size /= 1024
    if unit == 'B':
        return f"{int(size)} B"
    return f"{size:.2f} {unit}"
