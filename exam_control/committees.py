"""
exam_control/committees.py

Committee allocation: turns per-stage student totals into per-committee
counts, plus the manual edit operations on a committee list.

All functions are pure: they return new lists and never touch the
committees they are given.
"""

from typing import List, Dict, Optional
import copy
from .models import Stage, Committee
from .errors import AllocationError
from . import utils


def resolve_capacity(stages: List[Stage],
                     capacity: Optional[int] = None,
                     committee_count: Optional[int] = None) -> int:
    """
    Returns the per-committee capacity for either mode.
    Count mode uses ceil(total students / committee_count).
    Raises AllocationError for missing, duplicated or non-positive input.
    """
    if (capacity is None) == (committee_count is None):
        raise AllocationError("Give exactly one of capacity or committee_count")

    if capacity is not None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise AllocationError(f"Committee capacity must be a positive integer, got {capacity!r}")
        return capacity

    if isinstance(committee_count, bool) or not isinstance(committee_count, int) or committee_count <= 0:
        raise AllocationError(f"Committee count must be a positive integer, got {committee_count!r}")

    total_students = sum(s.total for s in stages)
    return utils.ceil_div(total_students, committee_count)


def distribute_committees(stages: List[Stage],
                          capacity: Optional[int] = None,
                          committee_count: Optional[int] = None,
                          separate_stages: bool = False) -> List[Committee]:
    """
    Builds a fresh committee list for the given stages.

    separate_stages=True carves each stage into its own committees.
    separate_stages=False fills each committee to capacity, taking
    stages in order, so one committee may hold the tail of one stage
    and the head of the next.
    """
    # Validate before looking at totals so bad input never passes silently
    resolved = resolve_capacity(stages, capacity, committee_count)

    if not stages or sum(s.total for s in stages) == 0:
        return []

    if separate_stages:
        return _distribute_separated(stages, resolved)
    return _distribute_mixed(stages, resolved)


def _distribute_separated(stages: List[Stage], capacity: int) -> List[Committee]:
    committees: List[Committee] = []
    counter = 1

    for stage in stages:
        remaining = stage.total
        while remaining > 0:
            take = min(remaining, capacity)
            committees.append(Committee(id=counter, name=str(counter), counts={stage.id: take}))
            remaining -= take
            counter += 1

    return committees


def _distribute_mixed(stages: List[Stage], capacity: int) -> List[Committee]:
    committees: List[Committee] = []
    remaining: Dict[int, int] = {s.id: s.total for s in stages}
    counter = 1

    while True:
        space = capacity
        counts: Dict[int, int] = {}

        for stage in stages:
            if space <= 0:
                break
            left = remaining[stage.id]
            if left > 0:
                take = min(left, space)
                counts[stage.id] = take
                remaining[stage.id] -= take
                space -= take

        if space == capacity:
            # Nothing left to seat
            break

        committees.append(Committee(id=counter, name=str(counter), counts=counts))
        counter += 1

    return committees


# --- Manual Editing ---

def add_committee(committees: List[Committee], location: str = "",
                  stage_ids: Optional[List[int]] = None) -> List[Committee]:
    """Appends an empty committee named after the last one."""
    new_committee = Committee(
        id=utils.next_numeric_id(c.id for c in committees),
        name=utils.next_committee_name([c.name for c in committees]),
        location=location,
        counts={sid: 0 for sid in (stage_ids or [])},
    )
    return _copy_list(committees) + [new_committee]


def remove_committee(committees: List[Committee], index: int) -> List[Committee]:
    _check_index(committees, index)
    return [copy.deepcopy(c) for i, c in enumerate(committees) if i != index]


def update_committee(committees: List[Committee], index: int,
                     name: Optional[str] = None,
                     location: Optional[str] = None) -> List[Committee]:
    _check_index(committees, index)
    updated = _copy_list(committees)
    if name is not None:
        updated[index].name = name
    if location is not None:
        updated[index].location = location
    return updated


def update_count(committees: List[Committee], index: int, stage_id: int, value) -> List[Committee]:
    """
    Sets one committee/stage cell. Blank or non-numeric input becomes 0.
    The result may over-allocate a stage; that is reported by the
    validator, not rejected here.
    """
    _check_index(committees, index)
    updated = _copy_list(committees)
    updated[index].counts[stage_id] = max(0, utils.parse_int(value))
    return updated


def move_committee(committees: List[Committee], index: int, new_index: int) -> List[Committee]:
    """
    Moves a committee to a new position. Committee order decides which
    students each committee holds, so this reassigns students.
    """
    _check_index(committees, index)
    _check_index(committees, new_index)
    updated = _copy_list(committees)
    moved = updated.pop(index)
    updated.insert(new_index, moved)
    return updated


def add_stage_counts(committees: List[Committee], stage_id: int) -> List[Committee]:
    updated = _copy_list(committees)
    for committee in updated:
        committee.counts.setdefault(stage_id, 0)
    return updated


def remove_stage_counts(committees: List[Committee], stage_id: int) -> List[Committee]:
    updated = _copy_list(committees)
    for committee in updated:
        committee.counts.pop(stage_id, None)
    return updated


def distributed_count(committees: List[Committee], stage_id: int) -> int:
    return sum(c.count_for(stage_id) for c in committees)


def _copy_list(committees: List[Committee]) -> List[Committee]:
    return [copy.deepcopy(c) for c in committees]


def _check_index(committees: List[Committee], index: int):
    if not 0 <= index < len(committees):
        raise IndexError(f"Committee index {index} out of range (0..{len(committees) - 1})")
