"""
tests/test_validators.py

Tests for the post-edit integrity report.
"""
import random
import pytest
from exam_control.state import ExamControlState
from exam_control.models import AppData, Student, Teacher
from exam_control.validators import collect_report, validate_all


@pytest.fixture
def state() -> ExamControlState:
    s = ExamControlState()
    s.add_stage("Grade 9", "9", [Student(name=f"Pupil {i:02d}") for i in range(12)])
    s.import_teachers([Teacher("Omar"), Teacher("Laila"), Teacher("Huda")])
    s.auto_distribute(capacity=6)
    s.generate_schedule(num_days=2, rng=random.Random(8))
    return s


def test_generated_state_passes(state):
    report = collect_report(state.data)
    assert report.passed
    assert report.issues == []
    assert report.warnings == []
    assert validate_all(state.data)


def test_over_allocation_is_an_issue(state):
    state.update_count(0, 1, 10)
    report = collect_report(state.data)
    assert not report.passed
    assert any("Over-allocation" in i for i in report.issues)
    assert not validate_all(state.data)


def test_unassigned_is_a_warning(state):
    state.update_count(1, 1, 2)
    report = collect_report(state.data)
    assert report.passed
    assert any("Unassigned students: 4 of 12" in w for w in report.warnings)


def test_double_booking(state):
    first = state.data.schedule.period(0, 0).main[0]
    state.assign_invigilator(0, 0, 1, 0, first)
    report = collect_report(state.data)
    assert any("Double booking" in i and first in i for i in report.issues)


def test_empty_and_unknown_invigilators(state):
    state.assign_invigilator(0, 0, 0, 0, "")
    state.assign_invigilator(1, 0, 1, 0, "Visitor")
    report = collect_report(state.data)
    assert any(w.startswith("Empty seat: committee 1 on day 1") for w in report.warnings)
    assert "Unknown invigilator: Visitor is not in the teacher list" in report.warnings


def test_schedule_shape_after_committee_change(state):
    state.add_committee()
    report = collect_report(state.data)
    assert any("Schedule mismatch" in i for i in report.issues)


def test_report_dict(state):
    assert collect_report(state.data).to_dict() == {'passed': True, 'issues': [], 'warnings': []}


def test_zero_invigilators_per_committee_in_snapshot(state):
    state.assign_invigilator(0, 0, 0, 0, "")
    raw = state.data.to_dict()
    raw['schedule']['teachers_per_committee'] = 0
    data = AppData.from_dict(raw)
    assert data.schedule.teachers_per_committee == 1

    # An in-memory zero is reported, not a crash
    state.data.schedule.teachers_per_committee = 0
    report = collect_report(state.data)
    assert any(w.startswith("Empty seat: committee 1") for w in report.warnings)
