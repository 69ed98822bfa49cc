"""
exam_control/validators.py

Post-edit integrity checks. Manual edits may leave the data in states
the engines never produce (over-allocated stages, a teacher seated
twice in one period); these checks report such drift, they never fix it.
"""

from typing import List
from dataclasses import dataclass, field
from .models import AppData
from .ranges import stage_status, STATUS_OVERFLOW, STATUS_PENDING


@dataclass
class ValidationReport:
    issues: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.issues

    def to_dict(self):
        return {'passed': self.passed, 'issues': self.issues, 'warnings': self.warnings}


def collect_report(data: AppData) -> ValidationReport:
    report = ValidationReport()
    report.issues.extend(_check_stage_overflow(data))
    report.issues.extend(_check_orphan_counts(data))
    report.issues.extend(_check_schedule_shape(data))
    report.issues.extend(_check_duplicate_invigilators(data))
    report.warnings.extend(_check_unassigned_students(data))
    report.warnings.extend(_check_empty_slots(data))
    report.warnings.extend(_check_unknown_invigilators(data))
    return report


def validate_all(data: AppData) -> bool:
    """
    Runs all validation checks and prints a report.
    """
    print("\n--- RUNNING DISTRIBUTION VALIDATION ---")
    report = collect_report(data)

    if not report.issues and not report.warnings:
        print("Validation PASSED: Distribution and invigilator schedule are consistent.")
        return True

    if report.warnings:
        print(f"  Found {len(report.warnings)} warning(s).")
        for w in report.warnings: print(f"    - {w}")

    if report.issues:
        print("Validation FAILED:")
        print(f"  Found {len(report.issues)} issue(s).")
        for c in report.issues: print(f"    - {c}")
        return False

    print("Validation PASSED with warnings.")
    return True


def _check_stage_overflow(data: AppData) -> List[str]:
    """Stages whose committee counts add up to more than their students."""
    conflicts = []
    for status in stage_status(data.stages, data.committees):
        if status.state == STATUS_OVERFLOW:
            conflicts.append(
                f"Over-allocation: {status.stage_name} has {status.total} students "
                f"but committees hold {status.distributed} (+{-status.remaining})"
            )
    return conflicts


def _check_unassigned_students(data: AppData) -> List[str]:
    warnings = []
    for status in stage_status(data.stages, data.committees):
        if status.state == STATUS_PENDING:
            warnings.append(f"Unassigned students: {status.remaining} of {status.total} in {status.stage_name}")
    return warnings


def _check_orphan_counts(data: AppData) -> List[str]:
    stage_ids = {s.id for s in data.stages}
    conflicts = []
    for committee in data.committees:
        for stage_id, count in committee.counts.items():
            if stage_id not in stage_ids and count > 0:
                conflicts.append(f"Committee {committee.name} counts {count} students of unknown stage {stage_id}")
    return conflicts


def _check_schedule_shape(data: AppData) -> List[str]:
    """Schedules generated for a different committee list."""
    schedule = data.schedule
    if schedule is None:
        return []
    expected = len(data.committees) * schedule.teachers_per_committee
    conflicts = []
    for day in schedule.days:
        for period in day.periods:
            if len(period.main) != expected:
                conflicts.append(
                    f"Schedule mismatch: day {day.day_id + 1} period {period.period_id + 1} "
                    f"has {len(period.main)} seats, committees need {expected}"
                )
    return conflicts


def _check_duplicate_invigilators(data: AppData) -> List[str]:
    schedule = data.schedule
    if schedule is None:
        return []
    conflicts = []
    for day in schedule.days:
        for period in day.periods:
            seen = set()
            for name in period.main + period.reserves:
                if not name:
                    continue
                if name in seen:
                    conflicts.append(
                        f"Double booking: {name} appears twice on day {day.day_id + 1} period {period.period_id + 1}"
                    )
                seen.add(name)
    return sorted(set(conflicts))


def _check_empty_slots(data: AppData) -> List[str]:
    schedule = data.schedule
    if schedule is None:
        return []
    warnings = []
    tpc = max(1, schedule.teachers_per_committee)
    for day in schedule.days:
        for period in day.periods:
            for flat_index, name in enumerate(period.main):
                if name:
                    continue
                committee_index = flat_index // tpc
                label = (data.committees[committee_index].name
                         if committee_index < len(data.committees) else str(committee_index + 1))
                warnings.append(
                    f"Empty seat: committee {label} on day {day.day_id + 1} period {period.period_id + 1}"
                )
    return warnings


def _check_unknown_invigilators(data: AppData) -> List[str]:
    schedule = data.schedule
    if schedule is None:
        return []
    known = set(data.teacher_names())
    unknown = set()
    for day in schedule.days:
        for period in day.periods:
            for name in period.main + period.reserves:
                if name and name not in known:
                    unknown.add(name)
    return [f"Unknown invigilator: {name} is not in the teacher list" for name in sorted(unknown)]
