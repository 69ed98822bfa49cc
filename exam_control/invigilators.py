"""
exam_control/invigilators.py

Invigilator scheduling across exam days and periods.

Each period hands committee seats to the least-used teachers first.
Usage is counted over the whole run, so duty spreads evenly across
days. Teachers left over in a period become that period's reserves;
reserve duty does not count towards usage.
"""

from typing import List, Dict, Optional, Sequence, Tuple, Union
from dataclasses import dataclass
import copy
import random
from .models import Committee, Teacher, ExamSchedule, DaySchedule, PeriodAssignment
from .errors import AllocationError
from . import utils


@dataclass
class Workload:
    active: int = 0
    reserve: int = 0


def required_slots(committees: List[Committee], teachers_per_committee: int) -> int:
    return len(committees) * teachers_per_committee


def staffing_warnings(committees: List[Committee], teachers: Sequence[Union[Teacher, str]],
                      teachers_per_committee: int) -> List[str]:
    """Soft warnings the caller must confirm before generating."""
    needed = required_slots(committees, teachers_per_committee)
    available = len(teachers)
    if available < needed:
        return [
            f"Only {available} teacher(s) for {needed} invigilator slot(s) per period; "
            f"{needed - available} slot(s) will stay empty in every period."
        ]
    return []


def resolve_periods(num_days: int, periods_per_day: Union[int, Sequence[int]]) -> List[int]:
    """Expands the period setting into one count per day."""
    if isinstance(num_days, bool) or not isinstance(num_days, int) or num_days <= 0:
        raise AllocationError(f"Number of exam days must be a positive integer, got {num_days!r}")

    if isinstance(periods_per_day, int) and not isinstance(periods_per_day, bool):
        periods = [periods_per_day] * num_days
    else:
        periods = list(periods_per_day)
        if len(periods) != num_days:
            raise AllocationError(
                f"Got {len(periods)} period count(s) for {num_days} exam day(s)"
            )

    for day_index, count in enumerate(periods):
        if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
            raise AllocationError(f"Day {day_index + 1} must have at least one period, got {count!r}")
    return periods


def generate_schedule(committees: List[Committee],
                      teachers: Sequence[Union[Teacher, str]],
                      num_days: int = utils.DEFAULT_NUM_DAYS,
                      periods_per_day: Union[int, Sequence[int]] = utils.DEFAULT_PERIODS_PER_DAY,
                      teachers_per_committee: int = utils.DEFAULT_TEACHERS_PER_COMMITTEE,
                      rng: Optional[random.Random] = None) -> ExamSchedule:
    """
    Builds a complete schedule from scratch; usage always starts at zero.
    Seats that cannot be filled are left as "".
    """
    names, periods = check_schedule_inputs(committees, teachers, num_days, periods_per_day,
                                           teachers_per_committee)

    rng = rng or random.Random()
    usage: Dict[str, int] = {name: 0 for name in names}
    days: List[DaySchedule] = []

    for day_index, period_count in enumerate(periods):
        day = DaySchedule(day_id=day_index)
        for period_index in range(period_count):
            day.periods.append(
                _assign_period(period_index, committees, names, usage, teachers_per_committee, rng)
            )
        days.append(day)

    return ExamSchedule(days=days, teachers_per_committee=teachers_per_committee)


def check_schedule_inputs(committees: List[Committee],
                          teachers: Sequence[Union[Teacher, str]],
                          num_days: int,
                          periods_per_day: Union[int, Sequence[int]],
                          teachers_per_committee: int) -> Tuple[List[str], List[int]]:
    """
    Raises AllocationError for unusable input; returns the teacher names
    and the period count of every day.
    """
    if not committees:
        raise AllocationError("Distribute committees before scheduling invigilators")
    names = _teacher_names(teachers)
    if not names:
        raise AllocationError("No teachers to schedule")
    if isinstance(teachers_per_committee, bool) or not isinstance(teachers_per_committee, int) \
            or teachers_per_committee <= 0:
        raise AllocationError(
            f"Invigilators per committee must be a positive integer, got {teachers_per_committee!r}"
        )
    return names, resolve_periods(num_days, periods_per_day)


def _assign_period(period_id: int, committees: List[Committee], names: List[str],
                   usage: Dict[str, int], teachers_per_committee: int,
                   rng: random.Random) -> PeriodAssignment:
    # Random secondary key breaks usage ties without favouring list order
    ordered = sorted(names, key=lambda n: (usage[n], rng.random()))

    main: List[str] = []
    next_teacher = 0
    for _ in committees:
        for _ in range(teachers_per_committee):
            if next_teacher < len(ordered):
                teacher = ordered[next_teacher]
                main.append(teacher)
                usage[teacher] += 1
                next_teacher += 1
            else:
                main.append("")

    return PeriodAssignment(period_id=period_id, main=main, reserves=ordered[next_teacher:])


def _teacher_names(teachers: Sequence[Union[Teacher, str]]) -> List[str]:
    names: List[str] = []
    seen = set()
    for teacher in teachers:
        name = teacher if isinstance(teacher, str) else teacher.name
        name = name.strip()
        if not name:
            raise AllocationError("Teacher names must not be blank")
        if name in seen:
            raise AllocationError(f"Duplicate teacher name '{name}'")
        seen.add(name)
        names.append(name)
    return names


# --- Manual Overrides ---

def assign_invigilator(schedule: ExamSchedule, day_index: int, period_index: int,
                       committee_index: int, slot: int, teacher_name: str) -> ExamSchedule:
    """
    Overwrites one seat. Any name is accepted, including a blank or a
    teacher already seated elsewhere in the same period. Reserves and
    usage are left as generated.
    """
    updated = copy.deepcopy(schedule)
    period = _get_period(updated, day_index, period_index)
    flat_index = updated.slot_index(committee_index, slot)
    if committee_index < 0 or flat_index >= len(period.main):
        raise IndexError(f"Committee index {committee_index} out of range for this period")
    period.main[flat_index] = teacher_name.strip()
    return updated


def update_reserve(schedule: ExamSchedule, day_index: int, period_index: int,
                   reserve_index: int, teacher_name: str) -> ExamSchedule:
    """Replaces a reserve entry; a blank name removes it."""
    updated = copy.deepcopy(schedule)
    period = _get_period(updated, day_index, period_index)
    if not 0 <= reserve_index < len(period.reserves):
        raise IndexError(f"Reserve index {reserve_index} out of range")
    name = teacher_name.strip()
    if name:
        period.reserves[reserve_index] = name
    else:
        del period.reserves[reserve_index]
    return updated


def set_day_date(schedule: ExamSchedule, day_index: int, date: str) -> ExamSchedule:
    updated = copy.deepcopy(schedule)
    if not 0 <= day_index < len(updated.days):
        raise IndexError(f"Day index {day_index} out of range")
    updated.days[day_index].date = date.strip()
    return updated


def _get_period(schedule: ExamSchedule, day_index: int, period_index: int) -> PeriodAssignment:
    if not 0 <= day_index < len(schedule.days):
        raise IndexError(f"Day index {day_index} out of range")
    periods = schedule.days[day_index].periods
    if not 0 <= period_index < len(periods):
        raise IndexError(f"Period index {period_index} out of range for day {day_index + 1}")
    return periods[period_index]


# --- Statistics ---

def teacher_workload(schedule: Optional[ExamSchedule],
                     teachers: Sequence[Union[Teacher, str]] = ()) -> Dict[str, Workload]:
    """
    Active and reserve duty counts per teacher. Names that only appear
    through manual overrides are included as well.
    """
    stats: Dict[str, Workload] = {}
    for teacher in teachers:
        name = teacher if isinstance(teacher, str) else teacher.name
        stats[name] = Workload()

    if schedule is None:
        return stats

    for day in schedule.days:
        for period in day.periods:
            for name in period.main:
                if name:
                    stats.setdefault(name, Workload()).active += 1
            for name in period.reserves:
                if name:
                    stats.setdefault(name, Workload()).reserve += 1
    return stats
