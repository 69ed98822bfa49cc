"""
tests/test_roster.py

Tests for loading student rosters and teacher lists.
"""
import pytest
import pandas as pd
from exam_control.models import Stage, Student
from exam_control.roster import (
    ColumnMapping, detect_columns, list_sheets, load_students, load_teachers, read_rows,
)


def write_csv(path, lines):
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return str(path)


def test_detect_english_headers():
    mapping = detect_columns(["No.", "Student Name", "Student ID", "Grade", "Class", "Phone Number"])
    assert mapping == ColumnMapping(name_idx=1, id_idx=2, grade_idx=3, section_idx=4, phone_idx=5)


def test_detect_arabic_headers():
    mapping = detect_columns(["اسم الطالب", "رقم الهوية", "الصف", "الفصل", "الجوال"])
    assert mapping.name_idx == 0
    assert mapping.id_idx == 1
    assert mapping.grade_idx == 2
    assert mapping.section_idx == 3
    assert mapping.phone_idx == 4


def test_detect_missing_columns():
    mapping = detect_columns(["Name", "", "Notes"])
    assert mapping.name_idx == 0
    assert mapping.id_idx == -1
    assert mapping.section_idx == -1


def test_load_students_sorted(tmp_path):
    path = write_csv(tmp_path / "grade10.csv", [
        "Name,ID,Class",
        "Zaid,3,B",
        "Adam,1,A",
        ",9,C",
        "Maha,2,A",
    ])
    students = load_students(path)
    assert [s.name for s in students] == ["Adam", "Maha", "Zaid"]
    assert students[0].external_id == "1"
    assert students[0].section == "A"


MIXED_NAMES = ["إبراهيم", "احمد", "أحمد", "آمنة", "ايمن", "Zaid", "adam", "Émile", "eve"]
ARABIC_ORDER = ["آمنة", "إبراهيم", "أحمد", "احمد", "ايمن", "adam", "Émile", "eve", "Zaid"]


def test_arabic_collation_order():
    stage = Stage(id=1, name="Mixed", seat_prefix="1", students=[Student(name=n) for n in MIXED_NAMES])
    assert [s.name for s in stage.students] == ARABIC_ORDER


def test_load_students_uses_arabic_collation(tmp_path):
    path = write_csv(tmp_path / "mixed.csv", ["Name"] + MIXED_NAMES)
    assert [s.name for s in load_students(path)] == ARABIC_ORDER


def test_load_students_keeps_leading_zeros(tmp_path):
    path = write_csv(tmp_path / "ids.csv", ["Name,ID", "Adam,0012"])
    assert load_students(path)[0].external_id == "0012"


def test_load_students_with_explicit_mapping(tmp_path):
    path = write_csv(tmp_path / "plain.csv", ["a,b", "x1,Nour", "x2,Huda"])
    students = load_students(path, mapping=ColumnMapping(name_idx=1, id_idx=0))
    assert [(s.name, s.external_id) for s in students] == [("Huda", "x2"), ("Nour", "x1")]


def test_load_students_without_name_column(tmp_path):
    path = write_csv(tmp_path / "bad.csv", ["ID,Class", "1,A"])
    with pytest.raises(ValueError):
        load_students(path)


def test_load_students_from_excel(tmp_path):
    path = tmp_path / "roster.xlsx"
    pd.DataFrame({"Student Name": ["Sara", "Ali"], "Grade": ["10", "10"]}).to_excel(
        path, sheet_name="Grade 10", index=False
    )
    assert list_sheets(str(path)) == ["Grade 10"]
    students = load_students(str(path), sheet_name="Grade 10")
    assert [s.name for s in students] == ["Ali", "Sara"]
    assert students[0].grade == "10"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_rows(str(tmp_path / "nope.csv"))


def test_load_teachers(tmp_path):
    path = write_csv(tmp_path / "teachers.csv", [
        "Name,Phone",
        "Omar,0501",
        "Laila,",
        "Omar,0509",
        ",",
    ])
    teachers = load_teachers(path)
    assert [t.name for t in teachers] == ["Omar", "Laila"]
    assert teachers[0].phone == "0501"
    assert teachers[1].phone == ""
