"""
exam_control/state.py

The application state container. It owns the AppData snapshot, runs the
allocation engines on it and commits their results. Soft warnings go
through a `confirm(message) -> bool` callback: with no callback the
operation raises ConfirmationRequired, a False answer makes it a no-op.
"""

import copy
import json
import os
import random
from typing import Callable, Dict, List, Optional, Sequence, Union
from .models import AppData, Stage, Student, Teacher, Committee, ExamSchedule, SchoolData
from .errors import ConfirmationRequired, DuplicateTeacherError
from . import committees as committee_ops
from . import invigilators
from . import utils

ConfirmFn = Callable[[str], bool]


def _confirmed(warnings: List[str], confirm: Optional[ConfirmFn]) -> bool:
    if not warnings:
        return True
    if confirm is None:
        raise ConfirmationRequired(warnings)
    return all(confirm(w) for w in warnings)


class ExamControlState:

    def __init__(self, data: Optional[AppData] = None):
        self.data = data if data is not None else AppData()

    # --- School ---

    def update_school(self, **fields) -> SchoolData:
        for key, value in fields.items():
            if not hasattr(self.data.school, key):
                raise ValueError(f"Unknown school field '{key}'")
            setattr(self.data.school, key, str(value))
        return self.data.school

    # --- Stages ---

    def add_stage(self, name: str, prefix: str, students: List[Student]) -> Stage:
        if not name.strip():
            raise ValueError("Stage name is required")
        if not students:
            raise ValueError("A stage needs at least one student")
        stage = Stage(
            id=utils.next_numeric_id(s.id for s in self.data.stages),
            name=name.strip(),
            seat_prefix=prefix.strip(),
            students=list(students),
        )
        self.data.stages = self.data.stages + [stage]
        self.data.committees = committee_ops.add_stage_counts(self.data.committees, stage.id)
        return stage

    def update_stage(self, stage_id: int, name: Optional[str] = None, prefix: Optional[str] = None) -> Stage:
        stage = self._get_stage(stage_id)
        if name is not None:
            stage.name = name.strip()
        if prefix is not None:
            stage.seat_prefix = prefix.strip()
        return stage

    def remove_stage(self, stage_id: int, confirm: Optional[ConfirmFn] = None) -> bool:
        stage = self._get_stage(stage_id)
        warnings = []
        if committee_ops.distributed_count(self.data.committees, stage_id) > 0:
            warnings.append(f"Removing {stage.name} also removes its committee distribution.")
        if not _confirmed(warnings, confirm):
            return False
        self.data.stages = [s for s in self.data.stages if s.id != stage_id]
        self.data.committees = committee_ops.remove_stage_counts(self.data.committees, stage_id)
        return True

    def _get_stage(self, stage_id: int) -> Stage:
        stage = self.data.stage_by_id(stage_id)
        if stage is None:
            raise KeyError(f"No stage with id {stage_id}")
        return stage

    # --- Teachers ---

    def add_teacher(self, name: str, phone: str = "") -> Teacher:
        name = name.strip()
        if not name:
            raise ValueError("Teacher name is required")
        if name in self.data.teacher_names():
            raise DuplicateTeacherError(name)
        teacher = Teacher(name=name, phone=phone.strip())
        self.data.teachers = self.data.teachers + [teacher]
        return teacher

    def import_teachers(self, teachers: Sequence[Teacher]) -> int:
        """Merges teachers in, skipping names already present. Returns the number added."""
        existing = set(self.data.teacher_names())
        added = []
        for teacher in teachers:
            if teacher.name and teacher.name not in existing:
                existing.add(teacher.name)
                added.append(teacher)
        self.data.teachers = self.data.teachers + added
        return len(added)

    def remove_teacher(self, name: str) -> bool:
        before = len(self.data.teachers)
        self.data.teachers = [t for t in self.data.teachers if t.name != name]
        return len(self.data.teachers) < before

    # --- Committees ---

    def auto_distribute(self, capacity: Optional[int] = None, committee_count: Optional[int] = None,
                        separate_stages: bool = False,
                        confirm: Optional[ConfirmFn] = None) -> Optional[List[Committee]]:
        """
        Replaces the committee list with a fresh distribution.
        Returns None when the overwrite was not confirmed.
        """
        # Parameter errors surface before any confirmation prompt
        committee_ops.resolve_capacity(self.data.stages, capacity, committee_count)

        warnings = []
        if self.data.committees:
            warnings.append(
                f"The current {len(self.data.committees)} committee(s) will be replaced by a new distribution."
            )
        if not _confirmed(warnings, confirm):
            return None

        self.data.committees = committee_ops.distribute_committees(
            self.data.stages, capacity, committee_count, separate_stages
        )
        return self.data.committees

    def add_committee(self, location: str = "") -> Committee:
        self.data.committees = committee_ops.add_committee(
            self.data.committees, location, [s.id for s in self.data.stages]
        )
        return self.data.committees[-1]

    def remove_committee(self, index: int):
        self.data.committees = committee_ops.remove_committee(self.data.committees, index)

    def clear_committees(self, confirm: Optional[ConfirmFn] = None) -> bool:
        warnings = []
        if self.data.committees:
            warnings.append("All committees and their distribution will be deleted.")
        if not _confirmed(warnings, confirm):
            return False
        self.data.committees = []
        return True

    def update_committee(self, index: int, name: Optional[str] = None, location: Optional[str] = None) -> Committee:
        self.data.committees = committee_ops.update_committee(self.data.committees, index, name, location)
        return self.data.committees[index]

    def update_count(self, index: int, stage_id: int, value) -> Committee:
        self.data.committees = committee_ops.update_count(self.data.committees, index, stage_id, value)
        return self.data.committees[index]

    def move_committee(self, index: int, new_index: int):
        self.data.committees = committee_ops.move_committee(self.data.committees, index, new_index)

    # --- Invigilators ---

    def generate_schedule(self, num_days: int = utils.DEFAULT_NUM_DAYS,
                          periods_per_day: Union[int, Sequence[int]] = utils.DEFAULT_PERIODS_PER_DAY,
                          teachers_per_committee: int = utils.DEFAULT_TEACHERS_PER_COMMITTEE,
                          confirm: Optional[ConfirmFn] = None,
                          rng: Optional[random.Random] = None) -> Optional[ExamSchedule]:
        # Parameter errors surface before any confirmation prompt
        invigilators.check_schedule_inputs(
            self.data.committees, self.data.teachers, num_days, periods_per_day, teachers_per_committee
        )

        warnings = invigilators.staffing_warnings(self.data.committees, self.data.teachers, teachers_per_committee)
        if self.data.schedule is not None:
            warnings.append("The current invigilator schedule will be replaced.")
        if not _confirmed(warnings, confirm):
            return None

        self.data.schedule = invigilators.generate_schedule(
            self.data.committees, self.data.teachers, num_days, periods_per_day,
            teachers_per_committee, rng,
        )
        return self.data.schedule

    def assign_invigilator(self, day_index: int, period_index: int, committee_index: int,
                           slot: int, teacher_name: str) -> ExamSchedule:
        self.data.schedule = invigilators.assign_invigilator(
            self._require_schedule(), day_index, period_index, committee_index, slot, teacher_name
        )
        return self.data.schedule

    def update_reserve(self, day_index: int, period_index: int, reserve_index: int,
                       teacher_name: str) -> ExamSchedule:
        self.data.schedule = invigilators.update_reserve(
            self._require_schedule(), day_index, period_index, reserve_index, teacher_name
        )
        return self.data.schedule

    def set_day_date(self, day_index: int, date: str) -> ExamSchedule:
        self.data.schedule = invigilators.set_day_date(self._require_schedule(), day_index, date)
        return self.data.schedule

    def clear_schedule(self):
        self.data.schedule = None

    def workload(self) -> Dict[str, invigilators.Workload]:
        return invigilators.teacher_workload(self.data.schedule, self.data.teachers)

    def _require_schedule(self) -> ExamSchedule:
        if self.data.schedule is None:
            raise ValueError("No invigilator schedule has been generated")
        return self.data.schedule

    # --- Snapshots & Persistence ---

    def reset(self, confirm: Optional[ConfirmFn] = None) -> bool:
        if not _confirmed(["All data will be deleted."], confirm):
            return False
        self.data = AppData()
        return True

    def snapshot(self) -> AppData:
        return copy.deepcopy(self.data)

    def restore(self, snapshot: AppData):
        self.data = copy.deepcopy(snapshot)

    def to_json(self) -> str:
        return json.dumps(self.data.to_dict(), ensure_ascii=False, indent=2)

    def save(self, filepath: str):
        directory = os.path.dirname(filepath)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filepath, mode='w', encoding='utf-8') as f:
            f.write(self.to_json())
        print(f"Saved application data to {filepath}")

    @classmethod
    def load(cls, filepath: str) -> "ExamControlState":
        """A missing file gives an empty state."""
        if not os.path.exists(filepath):
            print(f"Warning: {filepath} not found, starting with empty data.")
            return cls()
        with open(filepath, mode='r', encoding='utf-8') as f:
            raw = json.load(f)
        return cls(AppData.from_dict(raw))
