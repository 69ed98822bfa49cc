"""
tests/conftest.py

Shared fixtures: small stages and teacher lists.
"""
from typing import List
import pytest
from exam_control.models import Stage, Student, Teacher


def make_stage(stage_id: int, name: str, size: int, prefix: str = "") -> Stage:
    students = [Student(name=f"{name} Student {i:03d}", section=f"{name}-{i % 2 + 1}") for i in range(size)]
    return Stage(id=stage_id, name=name, seat_prefix=prefix or str(stage_id * 10), students=students)


def make_teachers(count: int) -> List[Teacher]:
    return [Teacher(name=f"Teacher {i + 1}") for i in range(count)]


@pytest.fixture
def single_stage() -> List[Stage]:
    """One stage of 50 students."""
    return [make_stage(1, "Grade 10", 50)]


@pytest.fixture
def two_stages() -> List[Stage]:
    """A:30 and B:10."""
    return [make_stage(1, "A", 30), make_stage(2, "B", 10)]
