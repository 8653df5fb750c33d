"""
scan_files.py - Directory Listing Module

Lists the immediate children of the source directory as raw byte names
"""

from pathlib import Path
from typing import List, Union
import logging
import os

from .models_fs import Entry
from .errors import SourceDirError

logger = logging.getLogger(__name__)

TEMP_PREFIX = b".__tmp_burne__"


def is_temp_name(name: bytes) -> bool:
    """Check if it's a temporary name left by cycle breaking"""
    return name.startswith(TEMP_PREFIX)


def list_children(directory: Union[str, Path]) -> List[Entry]:
    """
    List immediate children of a directory (non-recursive)

    Files, directories, symlinks and hidden entries are all included. Names
    are sorted bytewise so the listing is reproducible; indices follow that
    order.

    Args:
        directory: Source directory

    Returns:
        Entries with stable indices

    Raises:
        SourceDirError: Directory cannot be read
    """
    try:
        names = sorted(os.listdir(os.fsencode(directory)))
    except FileNotFoundError:
        raise SourceDirError(Path(directory), "Directory does not exist") from None
    except NotADirectoryError:
        raise SourceDirError(Path(directory), "Not a directory") from None
    except OSError as e:
        raise SourceDirError(Path(directory), f"Cannot list directory ({e.strerror})") from e

    leftovers = [name for name in names if is_temp_name(name)]
    for name in leftovers:
        logger.warning("Leftover temporary name from an earlier run: %s", os.fsdecode(name))

    logger.info("Listed %d entries in %s", len(names), directory)
    return [Entry(index=i, original_name=name) for i, name in enumerate(names)]
