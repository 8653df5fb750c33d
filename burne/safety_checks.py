"""
safety_checks.py - Safety Check Module

Provides checks run before any filesystem mutation
"""

from pathlib import Path
from typing import Tuple, Optional, Union
import os

from .errors import SourceDirError

_SEPARATORS = tuple(
    os.fsencode(sep) for sep in (os.sep, os.altsep) if sep
)


def check_writable(path: Path) -> Tuple[bool, Optional[str]]:
    """
    Check if entries inside a directory can be renamed

    Args:
        path: Directory to check

    Returns:
        (is_writable, error_reason)
    """
    if not os.access(path, os.W_OK | os.X_OK):
        return False, "Directory is not writable"
    return True, None


def check_source_dir(path: Union[str, Path], writable: bool = True) -> Path:
    """
    Validate the source directory

    Args:
        path: Source directory
        writable: Whether entries must be renamable (false for a dry run)

    Returns:
        Absolute path of the directory

    Raises:
        SourceDirError: Directory is missing, not a directory, or not writable
    """
    path = Path(path).absolute()
    if not path.exists():
        raise SourceDirError(path, "Directory does not exist")
    if not path.is_dir():
        raise SourceDirError(path, "Not a directory")

    if writable:
        valid, error = check_writable(path)
        if not valid:
            raise SourceDirError(path, error)

    return path


def check_target_name(name: bytes) -> Tuple[bool, Optional[str]]:
    """
    Check if a decoded name can be used as a rename target

    Args:
        name: Raw target name

    Returns:
        (is_valid, error_reason)
    """
    if not name:
        return False, "Name cannot be empty"

    if name in (b".", b".."):
        return False, "Name cannot be '.' or '..'"

    for sep in _SEPARATORS:
        if sep in name:
            return False, "Name cannot contain a path separator"

    if b"\0" in name:
        return False, "Name cannot contain a NUL character"

    return True, None
