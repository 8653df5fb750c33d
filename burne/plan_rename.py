"""
plan_rename.py - Rename Plan Generation Module

Responsibilities:
- Validate the edited listing against the original listing
- Order renames so no name is overwritten before it is read
- Break rename cycles (e.g. swapping two names) with a temporary name
- Output RenamePlan
"""

from typing import List, Dict, Set, Iterable, Sequence
from collections import defaultdict
import logging

from .models_fs import Entry, EditedLine, RenameOp, RenamePlan
from .errors import (
    LineCountMismatch,
    InvalidEditedName,
    InvalidTargetName,
    DuplicateTarget,
)
from .safety_checks import check_target_name
from .scan_files import TEMP_PREFIX

logger = logging.getLogger(__name__)

# NAME_MAX on common filesystems
MAX_NAME_LEN = 255


class TempNameAllocator:
    """Temporary name allocator"""

    def __init__(self, occupied: Iterable[bytes]):
        """
        Initialize allocator

        Args:
            occupied: Every name that exists or will exist (originals and targets)
        """
        self.occupied: Set[bytes] = set(occupied)

    def allocate(self, original: bytes) -> bytes:
        """
        Derive a temporary name from an original name

        The result is deterministic for a given occupied set and never
        collides with it; allocated names are marked occupied. The original
        part is truncated so the name fits in MAX_NAME_LEN bytes.

        Args:
            original: Name being moved out of the way

        Returns:
            Temporary name
        """
        n = 0
        while True:
            head = TEMP_PREFIX + b"%d__" % n
            candidate = head + original[:MAX_NAME_LEN - len(head)]
            if candidate not in self.occupied:
                self.occupied.add(candidate)
                return candidate
            n += 1


def _check_targets(entries: Sequence[Entry], edited: Sequence[EditedLine]) -> List[bytes]:
    """Run count, decode and per-name checks, return targets by index"""
    if len(edited) != len(entries):
        raise LineCountMismatch(len(entries), len(edited))

    for line in edited:
        if not line.is_valid:
            raise InvalidEditedName(line.index, line.text, line.error)

    targets: List[bytes] = []
    for line in edited:
        valid, error = check_target_name(line.decoded_name)
        if not valid:
            raise InvalidTargetName(line.index, line.decoded_name, error)
        targets.append(line.decoded_name)

    return targets


def _check_duplicates(targets: Sequence[bytes]) -> None:
    """Reject two entries renamed to the same name"""
    indices_by_name: Dict[bytes, List[int]] = defaultdict(list)
    for index, name in enumerate(targets):
        indices_by_name[name].append(index)

    duplicates = [(indices, name) for name, indices in indices_by_name.items() if len(indices) > 1]
    if duplicates:
        indices, name = min(duplicates)
        raise DuplicateTarget(name, indices)


def build_plan(entries: Sequence[Entry], edited: Sequence[EditedLine]) -> RenamePlan:
    """
    Generate rename plan from the original and edited listings

    Line N of the edited listing is the new name of entry N. Entries that
    point at each other's names form chains (ordered from the end backward)
    or cycles (broken with one temporary name each).

    Args:
        entries: Original listing
        edited: Decoded edited lines

    Returns:
        Rename plan

    Raises:
        LineCountMismatch: Lines were added or removed
        InvalidEditedName: A line could not be decoded
        InvalidTargetName: A decoded name is not a valid child name
        DuplicateTarget: Two entries share a target
    """
    targets = _check_targets(entries, edited)
    _check_duplicates(targets)

    originals = [entry.original_name for entry in entries]
    index_by_original = {name: i for i, name in enumerate(originals)}
    moving = {i for i in range(len(entries)) if targets[i] != originals[i]}

    # successor[i] = j when entry i takes entry j's current name.
    # Targets are unique and a target equal to an unchanged name is a
    # duplicate, so j is always a moving entry.
    successor: Dict[int, int] = {}
    predecessor: Dict[int, int] = {}
    for i in moving:
        j = index_by_original.get(targets[i])
        if j is not None:
            successor[i] = j
            predecessor[j] = i

    allocator = TempNameAllocator(set(originals) | set(targets))
    plan = RenamePlan()
    visited: Set[int] = set()

    for i in range(len(entries)):
        if i not in moving:
            plan.add_op(RenameOp.noop(originals[i], index=i))
            continue
        if i in visited:
            continue

        # Walk back to the head of the chain, or around to i for a cycle
        head = i
        is_cycle = False
        while head in predecessor:
            head = predecessor[head]
            if head == i:
                is_cycle = True
                break

        component = [head]
        node = successor.get(head)
        while node is not None and node != head:
            component.append(node)
            node = successor.get(node)
        visited.update(component)

        if is_cycle:
            temp = allocator.allocate(originals[head])
            logger.debug("Breaking cycle of %d entries via %r", len(component), temp)
            plan.add_op(RenameOp.to_temporary(originals[head], temp, index=head))
            for n in reversed(component[1:]):
                plan.add_op(RenameOp.direct(originals[n], targets[n], index=n))
            plan.add_op(RenameOp.from_temporary(temp, targets[head], index=head))
        else:
            for n in reversed(component):
                plan.add_op(RenameOp.direct(originals[n], targets[n], index=n))

    logger.info("%s", plan.summary())
    return plan


def validate_plan(plan: RenamePlan, names: Iterable[bytes]) -> List[str]:
    """
    Simulate a rename plan against a set of existing names

    Args:
        plan: Rename plan
        names: Names present before execution

    Returns:
        Error list (empty when every step reads an existing name and
        writes a free one)
    """
    errors = []
    present = set(names)
    sources: Set[bytes] = set()
    destinations: Set[bytes] = set()

    for step, op in enumerate(plan.ops):
        if op.is_noop:
            if op.src not in present:
                errors.append(f"Step {step}: unchanged name does not exist: {op.src!r}")
            continue

        if op.src in sources:
            errors.append(f"Step {step}: source used twice: {op.src!r}")
        if op.dst in destinations:
            errors.append(f"Step {step}: destination used twice: {op.dst!r}")
        sources.add(op.src)
        destinations.add(op.dst)

        if op.src not in present:
            errors.append(f"Step {step}: source does not exist: {op.src!r}")
        if op.dst in present:
            errors.append(f"Step {step}: destination already exists: {op.dst!r}")
        present.discard(op.src)
        present.add(op.dst)

    return errors
