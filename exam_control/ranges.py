"""
exam_control/ranges.py

Reconstructs which students sit in which committee.

Committees only store counts. Walking the committee list in order with
one cursor per stage gives every committee a contiguous slice of each
stage's alphabetical list. Nothing here is cached: call again after
any change to stages or committees.
"""

from typing import List, Dict, Tuple
from dataclasses import dataclass
from .models import Stage, Committee, Student

STATUS_COMPLETE = "complete"
STATUS_PENDING = "pending"
STATUS_OVERFLOW = "overflow"


@dataclass(frozen=True)
class StudentRange:
    """1-based inclusive index range into a stage's sorted students."""
    stage_id: int
    start: int
    end: int

    @property
    def count(self) -> int:
        return self.end - self.start + 1

    def as_slice(self) -> slice:
        return slice(self.start - 1, self.end)

    def __str__(self) -> str:
        return f"{self.start} - {self.end}"


@dataclass(frozen=True)
class SeatedStudent:
    student: Student
    stage_id: int
    stage_name: str
    index: int
    seat_number: str
    committee_id: int = 0
    committee_name: str = ""


@dataclass(frozen=True)
class StageStatus:
    stage_id: int
    stage_name: str
    total: int
    distributed: int

    @property
    def remaining(self) -> int:
        return self.total - self.distributed

    @property
    def state(self) -> str:
        if self.remaining == 0:
            return STATUS_COMPLETE
        if self.remaining > 0:
            return STATUS_PENDING
        return STATUS_OVERFLOW


def compute_ranges(stages: List[Stage], committees: List[Committee]) -> Dict[int, Dict[int, StudentRange]]:
    """
    Returns {committee_id: {stage_id: StudentRange}} for every cell with a
    positive count. Cursors start at 1 and advance in committee order.
    """
    result: Dict[int, Dict[int, StudentRange]] = {}
    cursors: Dict[int, int] = {s.id: 1 for s in stages}

    for committee in committees:
        result[committee.id] = {}
        for stage in stages:
            count = committee.count_for(stage.id)
            if count > 0:
                start = cursors[stage.id]
                result[committee.id][stage.id] = StudentRange(stage.id, start, start + count - 1)
                cursors[stage.id] += count

    return result


def committee_rosters(stages: List[Stage], committees: List[Committee]) -> Dict[int, List[SeatedStudent]]:
    """
    Seated students for every committee, in stage order then name order.
    Ranges running past the end of a stage (over-allocation after manual
    edits) are clipped to the students that exist.
    """
    ranges = compute_ranges(stages, committees)
    rosters: Dict[int, List[SeatedStudent]] = {}

    for committee in committees:
        seated: List[SeatedStudent] = []
        for stage in stages:
            student_range = ranges[committee.id].get(stage.id)
            if student_range is None:
                continue
            first = student_range.start - 1
            for offset, student in enumerate(stage.students[student_range.as_slice()]):
                index = first + offset
                seated.append(SeatedStudent(
                    student=student,
                    stage_id=stage.id,
                    stage_name=stage.name,
                    index=index,
                    seat_number=stage.seat_number(index),
                    committee_id=committee.id,
                    committee_name=committee.name,
                ))
        rosters[committee.id] = seated

    return rosters


def committee_students(stages: List[Stage], committees: List[Committee], committee_id: int) -> List[SeatedStudent]:
    rosters = committee_rosters(stages, committees)
    if committee_id not in rosters:
        raise KeyError(f"No committee with id {committee_id}")
    return rosters[committee_id]


def unassigned_students(stages: List[Stage], committees: List[Committee]) -> List[SeatedStudent]:
    """Students after the last cursor of each stage."""
    result: List[SeatedStudent] = []
    for stage in stages:
        assigned = sum(c.count_for(stage.id) for c in committees)
        for index in range(max(assigned, 0), stage.total):
            result.append(SeatedStudent(
                student=stage.students[index],
                stage_id=stage.id,
                stage_name=stage.name,
                index=index,
                seat_number=stage.seat_number(index),
            ))
    return result


def stage_status(stages: List[Stage], committees: List[Committee]) -> List[StageStatus]:
    return [
        StageStatus(
            stage_id=stage.id,
            stage_name=stage.name,
            total=stage.total,
            distributed=sum(c.count_for(stage.id) for c in committees),
        )
        for stage in stages
    ]


def empty_committees(committees: List[Committee]) -> List[Committee]:
    return [c for c in committees if c.total == 0]


def section_distribution(stages: List[Stage], committees: List[Committee]) -> Dict[int, List[Tuple[str, str, int]]]:
    """
    For each stage: (section, committee name, count) rows sorted by
    section, i.e. which committees each class of a grade went to.
    """
    rosters = committee_rosters(stages, committees)
    result: Dict[int, List[Tuple[str, str, int]]] = {}

    for stage in stages:
        rows: List[Tuple[str, str, int]] = []
        for committee in committees:
            per_section: Dict[str, int] = {}
            for seated in rosters[committee.id]:
                if seated.stage_id != stage.id:
                    continue
                section = seated.student.section or "-"
                per_section[section] = per_section.get(section, 0) + 1
            for section, count in per_section.items():
                rows.append((section, committee.name, count))
        # stable sort keeps committee order within a section
        rows.sort(key=lambda r: r[0])
        result[stage.id] = rows

    return result


def student_counts(stages: List[Stage], committees: List[Committee]) -> Tuple[List[Tuple[str, str, int]], int]:
    """(committee name, stage name, count) rows and their grand total."""
    rows = []
    for committee in committees:
        for stage in stages:
            count = committee.count_for(stage.id)
            if count > 0:
                rows.append((committee.name, stage.name, count))
    return rows, sum(r[2] for r in rows)
