"""
models_fs.py - Core Data Structure Definitions

Contains:
- Entry: Original child name captured at listing time
- EditedLine: Decoded line read back from the editor
- RenameOp: Single planned rename operation
- RenamePlan: Ordered rename plan
- RenameOptions: Invocation options
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Tuple
from enum import Enum


class EscapeMode(Enum):
    """Escape method for names shown in the editor"""
    NONE = "none"                    # Identity, fails on special characters
    PERCENT = "percent"              # Escape separator, %, and control bytes
    PERCENT_ASCII = "percent-ascii"  # Additionally escape every byte >= 0x80

    @classmethod
    def from_cli_str(cls, s: str) -> "EscapeMode":
        """Create escape mode from CLI string"""
        for mode in cls:
            if mode.value == s:
                return mode
        raise ValueError(f"unknown escape method {s!r}")


class Separator(Enum):
    """Line separator byte"""
    NEWLINE = b"\n"
    NUL = b"\0"

    @property
    def byte(self) -> bytes:
        return self.value


class OpKind(Enum):
    """Rename operation kind"""
    DIRECT = "direct"
    TO_TEMPORARY = "to_temporary"
    FROM_TEMPORARY = "from_temporary"
    NOOP = "noop"


@dataclass(frozen=True)
class Entry:
    """Original child name with its position in the listing"""
    index: int
    original_name: bytes


@dataclass(frozen=True)
class EditedLine:
    """Decoded edited line (either a name or a decode error)"""
    index: int
    text: str
    decoded_name: Optional[bytes] = None
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RenameOp:
    """Single rename operation"""
    kind: OpKind
    src: bytes                      # Source name (temporary name for FROM_TEMPORARY)
    dst: bytes                      # Destination name (temporary name for TO_TEMPORARY)
    index: int = -1                 # Entry index this operation belongs to

    @classmethod
    def direct(cls, src: bytes, dst: bytes, index: int = -1) -> "RenameOp":
        return cls(OpKind.DIRECT, src, dst, index)

    @classmethod
    def to_temporary(cls, src: bytes, temp: bytes, index: int = -1) -> "RenameOp":
        return cls(OpKind.TO_TEMPORARY, src, temp, index)

    @classmethod
    def from_temporary(cls, temp: bytes, dst: bytes, index: int = -1) -> "RenameOp":
        return cls(OpKind.FROM_TEMPORARY, temp, dst, index)

    @classmethod
    def noop(cls, name: bytes, index: int = -1) -> "RenameOp":
        return cls(OpKind.NOOP, name, name, index)

    @property
    def is_noop(self) -> bool:
        return self.kind is OpKind.NOOP

    @property
    def is_case_only_change(self) -> bool:
        """Whether only the letter case changes"""
        src = self.src.decode("utf-8", "surrogateescape")
        dst = self.dst.decode("utf-8", "surrogateescape")
        return src != dst and src.casefold() == dst.casefold()

    def describe(self) -> str:
        """Human readable form"""
        if self.is_noop:
            return f"(unchanged) {display_name(self.src)}"
        return f"{display_name(self.src)} -> {display_name(self.dst)}"


@dataclass
class RenamePlan:
    """Ordered rename plan, consumed once by the executor"""
    ops: List[RenameOp] = field(default_factory=list)

    @property
    def valid_ops(self) -> List[RenameOp]:
        """Get operations that touch the filesystem (excluding Noop)"""
        return [op for op in self.ops if not op.is_noop]

    @property
    def temp_count(self) -> int:
        """Number of cycles broken with a temporary name"""
        return sum(1 for op in self.ops if op.kind is OpKind.TO_TEMPORARY)

    @property
    def total_count(self) -> int:
        """Number of logical renames"""
        return len(self.logical_pairs())

    def add_op(self, op: RenameOp) -> None:
        """Add operation"""
        self.ops.append(op)

    def logical_pairs(self) -> List[Tuple[bytes, bytes]]:
        """
        Collapse the plan into user-facing (original, target) pairs

        A ToTemporary/FromTemporary pair is reported as one rename from the
        original source to the final target.

        Returns:
            Pairs in plan order
        """
        pairs: List[Tuple[bytes, bytes]] = []
        pending = {}  # temp name -> original name
        for op in self.ops:
            if op.kind is OpKind.DIRECT:
                pairs.append((op.src, op.dst))
            elif op.kind is OpKind.TO_TEMPORARY:
                pending[op.dst] = op.src
            elif op.kind is OpKind.FROM_TEMPORARY:
                pairs.append((pending.pop(op.src, op.src), op.dst))
        return pairs

    def summary(self) -> str:
        """Generate summary"""
        lines = [
            f"Rename Plan Summary:",
            f"  - Renames: {self.total_count}",
            f"  - Unchanged: {len(self.ops) - len(self.valid_ops)}",
            f"  - Cycles broken: {self.temp_count}",
        ]
        return "\n".join(lines)


@dataclass
class RenameOptions:
    """Rename options configuration"""
    escape: EscapeMode = EscapeMode.NONE
    separator: Separator = Separator.NEWLINE

    # Execution options
    dry_run: bool = False           # Print renames only, do not execute
    parents: bool = False           # Accepted, targets never contain separators

    editor: Optional[str] = None    # Editor command, overrides $VISUAL/$EDITOR
    log_dir: Optional[Path] = None  # Directory for JSON plan/report logs


def display_name(name: bytes) -> str:
    """Render a raw name for messages"""
    return name.decode("utf-8", "backslashreplace")
