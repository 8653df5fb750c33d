"""
errors.py - Error Definitions

Every error is fatal to the current invocation. Each class carries the
process exit code the CLI maps it to.
"""

from pathlib import Path
from typing import List, Sequence, TYPE_CHECKING

from .models_fs import EscapeMode, display_name

if TYPE_CHECKING:
    from .exec_rename import ExecutionReport


class BurneError(Exception):
    """Base class of all burne errors"""
    exit_code = 1


class SourceDirError(BurneError):
    """Source directory cannot be used"""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{reason}: {path}")


class UnencodableName(BurneError):
    """Name cannot be represented under the selected escape mode"""
    exit_code = 3

    def __init__(self, name: bytes, mode: EscapeMode, reason: str):
        self.name = name
        self.mode = mode
        self.reason = reason
        super().__init__(
            f"cannot encode name {display_name(name)!r} with escape method "
            f"{mode.value!r}: {reason}"
        )


class EditorNotFound(BurneError):
    """No editor configured"""
    exit_code = 4

    def __init__(self):
        super().__init__("failed to get editor (set $VISUAL or $EDITOR, or pass --editor)")


class EditorAborted(BurneError):
    """Editor exited unsuccessfully"""
    exit_code = 4

    def __init__(self, returncode: int, detail: str = ""):
        self.returncode = returncode
        message = f"the editor exited unsuccessfully: exit_code={returncode}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class DecodeError(ValueError):
    """Edited line cannot be decoded"""


class PlanError(BurneError):
    """Edited listing failed validation"""
    exit_code = 5


class LineCountMismatch(PlanError):
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"line count mismatch: expected {expected} lines, got {actual} "
            f"(lines must not be added or removed)"
        )


class InvalidEditedName(PlanError):
    def __init__(self, index: int, line: str, reason: str):
        self.index = index
        self.line = line
        self.reason = reason
        super().__init__(f"invalid edited name at line {index + 1} ({line!r}): {reason}")


class InvalidTargetName(PlanError):
    def __init__(self, index: int, name: bytes, reason: str):
        self.index = index
        self.name = name
        self.reason = reason
        super().__init__(
            f"invalid target name at line {index + 1} ({display_name(name)!r}): {reason}"
        )


class DuplicateTarget(PlanError):
    def __init__(self, name: bytes, indices: Sequence[int]):
        self.name = name
        self.indices: List[int] = list(indices)
        lines = ", ".join(str(i + 1) for i in self.indices)
        super().__init__(f"duplicate target {display_name(name)!r} at lines {lines}")


class RenameFailed(BurneError):
    """Filesystem rename failed mid-execution"""
    exit_code = 6

    def __init__(self, report: "ExecutionReport"):
        self.report = report
        super().__init__(report.failure_message())


class LogWriteError(BurneError):
    """JSON log cannot be written"""

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"cannot write log to {path}: {error}")
