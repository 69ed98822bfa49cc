"""
exam_control/models.py

Data model for stages, committees, teachers and invigilator schedules.
Every class converts to and from the plain-dict form used by the JSON
snapshot (see state.py).
"""

from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field
from . import utils


@dataclass(frozen=True)
class Student:
    """
    A single imported student. Students have no id of their own:
    a student is addressed by (stage_id, index) in the sorted stage list.
    """
    name: str
    external_id: str = ""
    grade: str = ""
    section: str = ""
    phone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "external_id": self.external_id,
            "grade": self.grade,
            "section": self.section,
            "phone": self.phone,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Student":
        return cls(
            name=str(raw.get("name", "")).strip(),
            external_id=str(raw.get("external_id", raw.get("studentId", ""))),
            grade=str(raw.get("grade", "")),
            section=str(raw.get("section", raw.get("class", ""))),
            phone=str(raw.get("phone", "") or ""),
        )


@dataclass
class Stage:
    """
    A grade level sharing one seat-number prefix.
    The student list is sorted on construction and never re-ordered after.
    """
    id: int
    name: str
    seat_prefix: str
    students: List[Student] = field(default_factory=list)

    def __post_init__(self):
        self.students = sorted(self.students, key=lambda s: utils.name_sort_key(s.name))

    @property
    def total(self) -> int:
        return len(self.students)

    def seat_number(self, index: int) -> str:
        return utils.format_seat_number(self.seat_prefix, index)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "seat_prefix": self.seat_prefix,
            "students": [s.to_dict() for s in self.students],
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Stage":
        return cls(
            id=int(raw["id"]),
            name=str(raw.get("name", "")),
            seat_prefix=str(raw.get("seat_prefix", raw.get("prefix", ""))),
            students=[Student.from_dict(s) for s in raw.get("students", [])],
        )


@dataclass
class Committee:
    """
    An exam room. `counts` maps stage id -> number of students of that
    stage seated here; the actual students follow from committee order.
    """
    id: int
    name: str
    location: str = ""
    counts: Dict[int, int] = field(default_factory=dict)

    def count_for(self, stage_id: int) -> int:
        return self.counts.get(stage_id, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            # JSON object keys are strings
            "counts": {str(k): v for k, v in self.counts.items()},
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Committee":
        return cls(
            id=int(raw["id"]),
            name=str(raw.get("name", "")),
            location=str(raw.get("location", "") or ""),
            counts={int(k): utils.parse_int(v) for k, v in (raw.get("counts") or {}).items()},
        )


@dataclass(frozen=True)
class Teacher:
    name: str
    phone: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "phone": self.phone}

    @classmethod
    def from_dict(cls, raw) -> "Teacher":
        # Older snapshots stored teachers as bare names
        if isinstance(raw, str):
            return cls(name=raw.strip())
        return cls(name=str(raw.get("name", "")).strip(), phone=str(raw.get("phone", "") or ""))


@dataclass
class PeriodAssignment:
    """
    One exam period. `main` is flat: main[committee_index * per_committee + slot].
    An empty string marks an unfilled slot.
    """
    period_id: int
    main: List[str] = field(default_factory=list)
    reserves: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"period_id": self.period_id, "main": list(self.main), "reserves": list(self.reserves)}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "PeriodAssignment":
        return cls(
            period_id=int(raw.get("period_id", raw.get("periodId", 0))),
            main=[str(t or "") for t in raw.get("main", [])],
            reserves=[str(t) for t in raw.get("reserves", []) if t],
        )


@dataclass
class DaySchedule:
    day_id: int
    periods: List[PeriodAssignment] = field(default_factory=list)
    date: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "day_id": self.day_id,
            "date": self.date,
            "periods": [p.to_dict() for p in self.periods],
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DaySchedule":
        return cls(
            day_id=int(raw.get("day_id", raw.get("dayId", 0))),
            periods=[PeriodAssignment.from_dict(p) for p in raw.get("periods", [])],
            date=str(raw.get("date", "") or ""),
        )


@dataclass
class ExamSchedule:
    days: List[DaySchedule] = field(default_factory=list)
    teachers_per_committee: int = utils.DEFAULT_TEACHERS_PER_COMMITTEE

    def period(self, day_index: int, period_index: int) -> PeriodAssignment:
        return self.days[day_index].periods[period_index]

    def slot_index(self, committee_index: int, slot: int) -> int:
        if not 0 <= slot < self.teachers_per_committee:
            raise IndexError(f"Slot {slot} out of range for {self.teachers_per_committee} invigilator(s) per committee")
        return committee_index * self.teachers_per_committee + slot

    def committee_invigilators(self, day_index: int, period_index: int, committee_index: int) -> List[str]:
        main = self.period(day_index, period_index).main
        start = committee_index * self.teachers_per_committee
        return main[start:start + self.teachers_per_committee]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": [d.to_dict() for d in self.days],
            "teachers_per_committee": self.teachers_per_committee,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ExamSchedule":
        return cls(
            days=[DaySchedule.from_dict(d) for d in raw.get("days", [])],
            # At least one seat per committee, whatever the stored value
            teachers_per_committee=max(1, utils.parse_int(
                raw.get("teachers_per_committee", raw.get("teachersPerCommittee")),
                utils.DEFAULT_TEACHERS_PER_COMMITTEE,
            )),
        )


@dataclass
class SchoolData:
    name: str = ""
    year: str = ""
    term: str = ""
    manager_name: str = ""
    agent_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "year": self.year,
            "term": self.term,
            "manager_name": self.manager_name,
            "agent_name": self.agent_name,
        }

    @classmethod
    def from_dict(cls, raw: Optional[Dict[str, Any]]) -> "SchoolData":
        raw = raw or {}
        return cls(
            name=str(raw.get("name", "") or ""),
            year=str(raw.get("year", "") or ""),
            term=str(raw.get("term", "") or ""),
            manager_name=str(raw.get("manager_name", raw.get("managerName", "")) or ""),
            agent_name=str(raw.get("agent_name", raw.get("agentName", "")) or ""),
        )


@dataclass
class AppData:
    """The whole application snapshot."""
    school: SchoolData = field(default_factory=SchoolData)
    stages: List[Stage] = field(default_factory=list)
    committees: List[Committee] = field(default_factory=list)
    teachers: List[Teacher] = field(default_factory=list)
    schedule: Optional[ExamSchedule] = None

    def stage_by_id(self, stage_id: int) -> Optional[Stage]:
        for stage in self.stages:
            if stage.id == stage_id:
                return stage
        return None

    def teacher_names(self) -> List[str]:
        return [t.name for t in self.teachers]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "school": self.school.to_dict(),
            "stages": [s.to_dict() for s in self.stages],
            "committees": [c.to_dict() for c in self.committees],
            "teachers": [t.to_dict() for t in self.teachers],
            "schedule": self.schedule.to_dict() if self.schedule else None,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AppData":
        schedule_raw = raw.get("schedule")
        return cls(
            school=SchoolData.from_dict(raw.get("school")),
            stages=[Stage.from_dict(s) for s in raw.get("stages", [])],
            committees=[Committee.from_dict(c) for c in raw.get("committees", [])],
            teachers=[Teacher.from_dict(t) for t in raw.get("teachers") or []],
            schedule=ExamSchedule.from_dict(schedule_raw) if schedule_raw else None,
        )
