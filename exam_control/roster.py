"""
exam_control/roster.py

Loads student rosters and teacher lists from Excel or CSV files.
"""

import os
from typing import List, Optional
from dataclasses import dataclass
import pandas as pd
from .models import Student, Teacher
from . import utils

EXCEL_EXTENSIONS = (".xlsx", ".xlsm", ".xls")
CSV_SHEET_NAME = "csv"

# Header keywords, checked in this order for each header cell
NAME_KEYWORDS = ("اسم", "name")
PHONE_KEYWORDS = ("جوال", "هاتف", "phone", "mobile")
ID_KEYWORDS = ("رقم", "جلوس", "هوية", "id", "number")
GRADE_KEYWORDS = ("صف", "grade")
SECTION_KEYWORDS = ("فصل", "class", "section")

TEACHER_HEADER_NAMES = {"الاسم", "اسم المعلم", "name", "teacher", "teacher name"}


@dataclass
class ColumnMapping:
    """Column positions in the sheet; -1 means the column is absent."""
    name_idx: int = -1
    id_idx: int = -1
    grade_idx: int = -1
    section_idx: int = -1
    phone_idx: int = -1


def _is_excel(filepath: str) -> bool:
    return os.path.splitext(filepath)[1].lower() in EXCEL_EXTENSIONS


def list_sheets(filepath: str) -> List[str]:
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Roster file not found at {filepath}")
    if _is_excel(filepath):
        with pd.ExcelFile(filepath) as workbook:
            return [str(name) for name in workbook.sheet_names]
    return [CSV_SHEET_NAME]


def read_rows(filepath: str, sheet_name: Optional[str] = None) -> pd.DataFrame:
    """
    Reads a sheet as raw string cells, header row included.
    Empty cells come back as "".
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"Roster file not found at {filepath}")

    if _is_excel(filepath):
        df = pd.read_excel(filepath, sheet_name=sheet_name if sheet_name is not None else 0,
                           header=None, dtype=str)
    else:
        df = pd.read_csv(filepath, header=None, dtype=str, encoding="utf-8-sig",
                         keep_default_na=False, skip_blank_lines=True)
    return df.fillna("")


def detect_columns(headers: List[str]) -> ColumnMapping:
    mapping = ColumnMapping()
    for i, header in enumerate(headers):
        text = utils.clean_cell(header).lower()
        if not text:
            continue
        if any(k in text for k in NAME_KEYWORDS):
            mapping.name_idx = i
        elif any(k in text for k in PHONE_KEYWORDS):
            mapping.phone_idx = i
        elif any(k in text for k in ID_KEYWORDS):
            mapping.id_idx = i
        elif any(k in text for k in GRADE_KEYWORDS):
            mapping.grade_idx = i
        elif any(k in text for k in SECTION_KEYWORDS):
            mapping.section_idx = i
    return mapping


def _cell(row: List[str], idx: int) -> str:
    if idx < 0 or idx >= len(row):
        return ""
    return utils.clean_cell(row[idx])


def parse_students(rows: pd.DataFrame, mapping: ColumnMapping) -> List[Student]:
    """
    Builds the sorted student list from raw rows. The first row is the
    header. Rows without a name are skipped.
    """
    if mapping.name_idx == -1:
        raise ValueError("No name column selected")

    students: List[Student] = []
    for row in rows.values.tolist()[1:]:
        name = _cell(row, mapping.name_idx)
        if not name:
            continue
        students.append(Student(
            name=name,
            external_id=_cell(row, mapping.id_idx),
            grade=_cell(row, mapping.grade_idx),
            section=_cell(row, mapping.section_idx),
            phone=_cell(row, mapping.phone_idx),
        ))

    students.sort(key=lambda s: utils.name_sort_key(s.name))
    return students


def load_students(filepath: str, sheet_name: Optional[str] = None,
                  mapping: Optional[ColumnMapping] = None) -> List[Student]:
    """
    Reads one stage's roster. Columns are detected from the header row
    unless a mapping is given.
    """
    print(f"Loading students from {filepath}...")
    rows = read_rows(filepath, sheet_name)
    if rows.empty:
        print(f"Warning: {filepath} is empty.")
        return []

    if mapping is None:
        mapping = detect_columns([str(h) for h in rows.iloc[0].tolist()])

    students = parse_students(rows, mapping)
    print(f"Successfully loaded {len(students)} students.")
    return students


def load_teachers(filepath: str) -> List[Teacher]:
    """
    Teacher names from the first column, phone from the second when
    present. Header-like cells and duplicate names are skipped.
    """
    print(f"Loading teachers from {filepath}...")
    rows = read_rows(filepath)

    teachers: List[Teacher] = []
    seen = set()
    for row in rows.values.tolist():
        name = _cell(row, 0)
        if not name or name.lower() in TEACHER_HEADER_NAMES:
            continue
        if name in seen:
            print(f"Warning: Skipping duplicate teacher '{name}'.")
            continue
        seen.add(name)
        teachers.append(Teacher(name=name, phone=_cell(row, 1)))

    print(f"Successfully loaded {len(teachers)} teachers.")
    return teachers
