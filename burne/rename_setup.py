"""
rename_setup.py - Rename Setup

Snapshot of a source directory taken once per invocation. Writes the
editable listing and turns the edited listing into a rename plan.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union
import logging

from .models_fs import Entry, EscapeMode, Separator, RenamePlan
from .escape_codec import encode_names, decode_lines
from .line_stream import join_lines, split_blob
from .plan_rename import build_plan
from .safety_checks import check_source_dir
from .scan_files import list_children

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenameSetup:
    """Immutable listing of a source directory"""
    directory: Path
    entries: Tuple[Entry, ...]

    @classmethod
    def from_directory(cls, directory: Union[str, Path], writable: bool = True) -> "RenameSetup":
        """
        Take the listing of a directory

        Args:
            directory: Source directory
            writable: Whether to require write access (false for a dry run)

        Raises:
            SourceDirError: Directory cannot be used
        """
        directory = check_source_dir(directory, writable=writable)
        setup = cls(directory=directory, entries=tuple(list_children(directory)))
        logger.debug("setup = %r", setup)
        return setup

    def __len__(self) -> int:
        return len(self.entries)

    def write(self, escape: EscapeMode, separator: Separator) -> bytes:
        """
        Serialize the listing for the editor

        Raises:
            UnencodableName: A name cannot be represented under escape
        """
        return join_lines(encode_names(self.entries, escape, separator), separator)

    def plan(self, blob: bytes, escape: EscapeMode, separator: Separator) -> RenamePlan:
        """
        Build the rename plan from the edited blob

        Raises:
            PlanError: Edited listing failed validation
        """
        edited = decode_lines(split_blob(blob, separator), escape)
        return build_plan(self.entries, edited)
