"""
tests/test_ranges.py

Tests for reconstructing student ranges and rosters from committee counts.
"""
import pytest
from exam_control.committees import distribute_committees, move_committee, update_count
from exam_control.models import Committee, Stage, Student
from exam_control.ranges import (
    compute_ranges, committee_rosters, committee_students, unassigned_students,
    stage_status, empty_committees, section_distribution, student_counts,
    STATUS_COMPLETE, STATUS_PENDING, STATUS_OVERFLOW,
)
from conftest import make_stage


def test_ranges_for_separate_stage(single_stage):
    committees = distribute_committees(single_stage, capacity=20, separate_stages=True)
    ranges = compute_ranges(single_stage, committees)
    assert [str(ranges[c.id][1]) for c in committees] == ["1 - 20", "21 - 40", "41 - 50"]


@pytest.mark.parametrize("capacity", [3, 8, 15, 100])
def test_ranges_partition_each_stage(two_stages, capacity):
    committees = distribute_committees(two_stages, capacity=capacity)
    ranges = compute_ranges(two_stages, committees)
    for stage in two_stages:
        covered = []
        for c in committees:
            r = ranges[c.id].get(stage.id)
            if r:
                covered.extend(range(r.start, r.end + 1))
        assert covered == list(range(1, stage.total + 1))


def test_ranges_are_idempotent(two_stages):
    committees = distribute_committees(two_stages, capacity=7)
    assert compute_ranges(two_stages, committees) == compute_ranges(two_stages, committees)


def test_zero_counts_have_no_range(two_stages):
    committees = distribute_committees(two_stages, capacity=15)
    ranges = compute_ranges(two_stages, committees)
    assert 2 not in ranges[1]
    assert 1 not in ranges[3]


def test_moving_committee_reassigns_students(single_stage):
    committees = distribute_committees(single_stage, capacity=20, separate_stages=True)
    first_before = committee_students(single_stage, committees, 1)[0]
    assert first_before.index == 0

    moved = move_committee(committees, 2, 0)
    ranges = compute_ranges(single_stage, moved)
    # Committee 3 now comes first and holds the first 10 students
    assert str(ranges[3][1]) == "1 - 10"
    assert str(ranges[1][1]) == "11 - 30"


def test_roster_seat_numbers():
    stage = make_stage(1, "Grade 7", 25, prefix="70")
    committees = distribute_committees([stage], capacity=20)
    rosters = committee_rosters([stage], committees)
    assert [s.seat_number for s in rosters[1][:2]] == ["70001", "70002"]
    assert rosters[2][0].seat_number == "70021"
    assert rosters[2][0].student == stage.students[20]
    assert rosters[2][0].committee_name == "2"


def test_roster_follows_name_order():
    stage = Stage(id=1, name="S", seat_prefix="1", students=[Student("Zaid"), Student("Adam"), Student("Maha")])
    committees = [Committee(id=1, name="1", counts={1: 2}), Committee(id=2, name="2", counts={1: 1})]
    rosters = committee_rosters([stage], committees)
    assert [s.student.name for s in rosters[1]] == ["Adam", "Maha"]
    assert [s.student.name for s in rosters[2]] == ["Zaid"]


def test_overflowing_counts_are_clipped():
    stage = make_stage(1, "A", 5)
    committees = [Committee(id=1, name="1", counts={1: 4}), Committee(id=2, name="2", counts={1: 4})]
    rosters = committee_rosters([stage], committees)
    assert len(rosters[1]) == 4
    assert len(rosters[2]) == 1
    assert stage_status([stage], committees)[0].state == STATUS_OVERFLOW


def test_unassigned_and_status(two_stages):
    committees = distribute_committees(two_stages, capacity=15)
    committees = update_count(committees, 2, 2, 6)
    left = unassigned_students(two_stages, committees)
    assert [s.index for s in left] == [6, 7, 8, 9]
    assert all(s.stage_id == 2 for s in left)

    states = {s.stage_id: s for s in stage_status(two_stages, committees)}
    assert states[1].state == STATUS_COMPLETE
    assert states[2].state == STATUS_PENDING
    assert states[2].remaining == 4


def test_committee_students_unknown_id(two_stages):
    with pytest.raises(KeyError):
        committee_students(two_stages, [], 99)


def test_empty_committees():
    committees = [Committee(id=1, name="1", counts={1: 3}), Committee(id=2, name="2", counts={1: 0})]
    assert [c.id for c in empty_committees(committees)] == [2]


def test_section_distribution():
    students = [Student("A1", section="1"), Student("A2", section="2"), Student("A3", section="1"),
                Student("A4")]
    stage = Stage(id=1, name="S", seat_prefix="1", students=students)
    committees = [Committee(id=1, name="1", counts={1: 2}), Committee(id=2, name="2", counts={1: 2})]
    rows = section_distribution([stage], committees)[1]
    assert rows == [("-", "2", 1), ("1", "1", 1), ("1", "2", 1), ("2", "1", 1)]


def test_student_counts(two_stages):
    committees = distribute_committees(two_stages, capacity=15)
    rows, total = student_counts(two_stages, committees)
    assert rows == [("1", "A", 15), ("2", "A", 15), ("3", "B", 10)]
    assert total == 40
