"""
exec_rename.py - Rename Execution Module

Responsibilities:
- Apply plan operations strictly in order
- Stop at the first failure and report what was already applied
- dry_run support
- Optional JSON logs of the plan and the result
"""

from pathlib import Path
from typing import List, Tuple, Optional, Union
from dataclasses import dataclass, field
from datetime import datetime
import errno
import json
import logging
import os

from .models_fs import RenamePlan, RenameOp, EscapeMode, display_name
from .escape_codec import encode_name
from .errors import RenameFailed, LogWriteError

logger = logging.getLogger(__name__)


@dataclass
class ExecutionReport:
    """Rename execution result"""
    dry_run: bool = False
    pairs: List[Tuple[bytes, bytes]] = field(default_factory=list)   # Logical (original, target) renames
    applied: List[RenameOp] = field(default_factory=list)
    failed_op: Optional[RenameOp] = None
    error: Optional[OSError] = None
    not_attempted: List[RenameOp] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.failed_op is None

    @property
    def applied_count(self) -> int:
        return len(self.applied)

    def summary(self) -> str:
        """Generate summary"""
        if self.dry_run:
            return f"Dry run: {len(self.pairs)} renames, nothing changed"
        lines = [
            f"Execution Result:",
            f"  - Renames: {len(self.pairs)}",
            f"  - Operations applied: {self.applied_count}",
        ]
        if not self.ok:
            lines.append(f"  - Failed: {self.failed_op.describe()}: {self.error}")
            lines.append(f"  - Not attempted: {len(self.not_attempted)}")
        return "\n".join(lines)

    def failure_message(self) -> str:
        """Describe a failed execution for manual recovery"""
        lines = [
            f"rename failed at operation {self.applied_count + 1}: "
            f"{self.failed_op.describe()}: {self.error}",
        ]
        if self.applied:
            lines.append(f"Already applied ({self.applied_count}):")
            for op in self.applied:
                lines.append(f"  {op.describe()}")
        else:
            lines.append("No operation was applied")
        if self.not_attempted:
            lines.append(f"Not attempted ({len(self.not_attempted)}):")
            for op in self.not_attempted:
                lines.append(f"  {op.describe()}")
        return "\n".join(lines)

    def check(self) -> "ExecutionReport":
        """
        Raise if execution stopped early

        Raises:
            RenameFailed: An operation failed
        """
        if not self.ok:
            raise RenameFailed(self)
        return self


def _is_same_entry(src: bytes, dst: bytes) -> bool:
    """Whether two paths name the same directory entry"""
    a = os.lstat(src)
    b = os.lstat(dst)
    return (a.st_dev, a.st_ino) == (b.st_dev, b.st_ino)


def _rename_no_replace(src: bytes, dst: bytes, case_only: bool = False) -> None:
    """
    Rename, refusing to replace an existing destination

    On case-insensitive filesystems a case-only change finds the source
    itself at dst; that is allowed.
    """
    # os.rename silently replaces files on POSIX
    if os.path.lexists(dst) and not (case_only and _is_same_entry(src, dst)):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fsdecode(dst))
    os.rename(src, dst)


def execute_plan(
    plan: RenamePlan,
    directory: Union[str, Path],
    dry_run: bool = False,
    log_dir: Optional[Path] = None
) -> ExecutionReport:
    """
    Execute rename plan

    Operations run in plan order. On the first failure execution stops;
    nothing is rolled back.

    Args:
        plan: Rename plan
        directory: Directory containing the entries
        dry_run: Whether to report only
        log_dir: Log directory (for saving plan and result logs)

    Returns:
        Execution report

    Raises:
        LogWriteError: Plan log cannot be written (nothing was renamed)
    """
    report = ExecutionReport(dry_run=dry_run, pairs=plan.logical_pairs())
    valid_ops = plan.valid_ops
    if dry_run or not valid_ops:
        return report

    if log_dir:
        try:
            save_plan_log(plan, log_dir)
        except OSError as e:
            raise LogWriteError(Path(log_dir), e) from e

    base = os.fsencode(directory)
    for i, op in enumerate(valid_ops):
        try:
            _rename_no_replace(
                os.path.join(base, op.src),
                os.path.join(base, op.dst),
                case_only=op.is_case_only_change,
            )
        except OSError as e:
            logger.error("Rename failed: %s: %s", op.describe(), e)
            report.failed_op = op
            report.error = e
            report.not_attempted = valid_ops[i + 1:]
            break

        logger.debug("Renamed %s", op.describe())
        report.applied.append(op)

    if log_dir:
        try:
            save_report_log(report, log_dir)
        except OSError as e:
            logger.error("Cannot write result log to %s: %s", log_dir, e)

    return report


def _log_name(name: bytes) -> str:
    """Render a name losslessly as ASCII text"""
    return encode_name(name, EscapeMode.PERCENT_ASCII)


def _op_record(op: RenameOp) -> dict:
    return {"kind": op.kind.value, "src": _log_name(op.src), "dst": _log_name(op.dst)}


def save_plan_log(plan: RenamePlan, log_dir: Path) -> Path:
    """Save execution plan log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"rename_plan_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "total_ops": len(plan.valid_ops),
        "operations": [_op_record(op) for op in plan.valid_ops],
    }

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    logger.info("Plan log written to %s", log_file)
    return log_file


def save_report_log(report: ExecutionReport, log_dir: Path) -> Path:
    """Save execution result log"""
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"rename_result_{timestamp}.json"

    data = {
        "timestamp": timestamp,
        "ok": report.ok,
        "applied": [_op_record(op) for op in report.applied],
        "failed": None,
        "not_attempted": [_op_record(op) for op in report.not_attempted],
    }
    if not report.ok:
        data["failed"] = dict(_op_record(report.failed_op), error=str(report.error))

    with open(log_file, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2)

    logger.info("Result log written to %s", log_file)
    return log_file


def format_pairs(pairs: List[Tuple[bytes, bytes]]) -> List[str]:
    """Format logical renames as aligned lines"""
    return [f"{display_name(src):<40} -> {display_name(dst)}" for src, dst in pairs]
