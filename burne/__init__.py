"""
burne - BUlk ReName by Editor

Provides name escaping, listing serialization, rename plan generation and
execution.
"""

from .models_fs import (
    Entry,
    EditedLine,
    OpKind,
    RenameOp,
    RenamePlan,
    RenameOptions,
    EscapeMode,
    Separator,
    display_name,
)

from .errors import (
    BurneError,
    SourceDirError,
    UnencodableName,
    EditorNotFound,
    EditorAborted,
    DecodeError,
    PlanError,
    LineCountMismatch,
    InvalidEditedName,
    InvalidTargetName,
    DuplicateTarget,
    RenameFailed,
    LogWriteError,
)

from .escape_codec import (
    encode_name,
    decode_line,
    encode_names,
    decode_lines,
)

from .line_stream import (
    join_lines,
    split_blob,
)

from .scan_files import (
    list_children,
    is_temp_name,
)

from .safety_checks import (
    check_source_dir,
    check_target_name,
)

from .plan_rename import (
    build_plan,
    validate_plan,
    TempNameAllocator,
)

from .exec_rename import (
    execute_plan,
    ExecutionReport,
    format_pairs,
)

from .editor import (
    get_editor,
    edit_blob,
)

from .rename_setup import RenameSetup
from .logger_setup import configure_logging

__version__ = "0.1.0"

__all__ = [
    # Data models
    "Entry",
    "EditedLine",
    "OpKind",
    "RenameOp",
    "RenamePlan",
    "RenameOptions",
    "EscapeMode",
    "Separator",
    "display_name",

    # Errors
    "BurneError",
    "SourceDirError",
    "UnencodableName",
    "EditorNotFound",
    "EditorAborted",
    "DecodeError",
    "PlanError",
    "LineCountMismatch",
    "InvalidEditedName",
    "InvalidTargetName",
    "DuplicateTarget",
    "RenameFailed",
    "LogWriteError",

    # Escaping
    "encode_name",
    "decode_line",
    "encode_names",
    "decode_lines",

    # Serialization
    "join_lines",
    "split_blob",

    # Listing
    "list_children",
    "is_temp_name",

    # Safety checks
    "check_source_dir",
    "check_target_name",

    # Planning
    "build_plan",
    "validate_plan",
    "TempNameAllocator",

    # Execution
    "execute_plan",
    "ExecutionReport",
    "format_pairs",

    # Editor
    "get_editor",
    "edit_blob",

    "RenameSetup",
    "configure_logging",
]
