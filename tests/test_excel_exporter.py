"""
tests/test_excel_exporter.py

Tests for the Excel documents. Workbooks are written to memory or
tmp_path and read back with openpyxl.
"""
import io
import random
import pytest
from openpyxl import load_workbook
from exam_control.state import ExamControlState
from exam_control.models import Committee, Student, Teacher
from exam_control.excel_exporter import ExcelExporter, DocumentType, default_report_config


@pytest.fixture
def exporter() -> ExcelExporter:
    s = ExamControlState()
    s.update_school(name="Al Noor School", year="2026")
    s.add_stage("Grade 10", "10", [Student(name=f"Ten {i:02d}", section="A") for i in range(25)])
    s.add_stage("Grade 11", "11", [Student(name=f"Eleven {i:02d}") for i in range(5)])
    s.import_teachers([Teacher("Omar"), Teacher("Laila"), Teacher("Huda")])
    s.auto_distribute(capacity=20)
    s.update_count(1, 2, 3)
    s.generate_schedule(num_days=2, periods_per_day=[1, 2], rng=random.Random(1))
    s.set_day_date(0, "2026-06-01")
    return ExcelExporter(s.data)


def _load(export, *args):
    buffer = io.BytesIO()
    export(buffer, *args)
    buffer.seek(0)
    return load_workbook(buffer)


def test_report_config_toggle():
    config = default_report_config(DocumentType.ATTENDANCE)
    config.toggle("signature")
    assert "signature" not in [f.key for f in config.visible_fields()]
    config.toggle("signature")
    assert "signature" in [f.key for f in config.visible_fields()]
    with pytest.raises(KeyError):
        config.toggle("shoe_size")


def test_default_configs_are_independent():
    first = default_report_config(DocumentType.SEAT_LABELS)
    first.toggle("location")
    assert len(default_report_config(DocumentType.SEAT_LABELS).visible_fields()) == 5


def test_distribution(exporter):
    ws = _load(exporter.export_distribution)["Distribution"]
    assert [c.value for c in ws[1]] == ["Committee", "Location", "Grade 10", "Grade 10 range",
                                        "Grade 11", "Grade 11 range", "Total"]
    row2 = [c.value for c in ws[2]]
    row3 = [c.value for c in ws[3]]
    assert row2[:1] + row2[2:] == ["1", 20, "1 - 20", 0, "-", 20]
    assert row3[:1] + row3[2:] == ["2", 5, "21 - 25", 3, "1 - 3", 8]


def test_attendance_sheets(exporter):
    wb = _load(exporter.export_attendance)
    assert wb.sheetnames == ["Committee 1", "Committee 2"]
    ws = wb["Committee 2"]
    assert ws.cell(row=1, column=1).value == "Al Noor School - 2026"
    assert [c.value for c in ws[4]] == ["No.", "Seat Number", "Student Name", "Stage", "Present", "Signature"]
    assert [c.value for c in ws[5]][:3] == [1, "10021", "Ten 20"]
    assert ws.max_row == 4 + 8


def test_attendance_hidden_columns(exporter):
    config = default_report_config(DocumentType.ATTENDANCE).toggle("presence").toggle("signature")
    ws = _load(exporter.export_attendance, config)["Committee 1"]
    assert [c.value for c in ws[4]] == ["No.", "Seat Number", "Student Name", "Stage"]


def test_seat_labels(exporter):
    ws = _load(exporter.export_seat_labels)["Seat Labels"]
    assert ws.max_row == 1 + 28
    assert [c.value for c in ws[2]][:4] == ["10001", "Ten 00", "Grade 10", "1"]


def test_student_counts_and_unassigned(exporter):
    ws = _load(exporter.export_student_counts)["Student Counts"]
    assert [c.value for c in ws[4]] == ["Grade 11", "2", 3]
    ws = _load(exporter.export_unassigned)["Unassigned"]
    assert [c.value for c in ws[2]][:2] == [1, "Eleven 03"]
    assert ws.max_row == 3


def test_invigilator_schedule(exporter):
    wb = _load(exporter.export_invigilators)
    assert wb.sheetnames == ["Day 1", "Day 2", "Workload"]
    day2 = wb["Day 2"]
    assert [c.value for c in day2[1]] == ["Committee", "Location", "Period 1", "Period 2"]
    assert day2.cell(row=4, column=1).value == "Reserves"
    assert wb["Day 1"].cell(row=6, column=1).value == "Date: 2026-06-01"
    workload = {row[0].value: row[1].value for row in wb["Workload"].iter_rows(min_row=2)}
    assert sum(workload.values()) == 2 * 3


def test_invigilator_attendance(exporter):
    wb = _load(exporter.export_invigilator_attendance)
    assert wb.sheetnames == ["Day 1 P1", "Day 2 P1", "Day 2 P2"]


def test_door_labels(exporter):
    exporter.data.committees.append(Committee(id=3, name="3", location="Lab"))
    wb = _load(exporter.export_door_labels)
    assert wb.sheetnames == ["Committee 1", "Committee 2"]
    ws = wb["Committee 2"]
    assert ws.cell(row=3, column=1).value == "Committee 2"
    assert [c.value for c in ws[5]] == ["Stage", "Students"]
    assert [c.value for c in ws[6]] == ["Grade 10", 5]
    assert [c.value for c in ws[7]] == ["Grade 11", 3]
    assert ws.cell(row=9, column=1).value == "Total: 8"


def test_empty_committees(exporter):
    ws = _load(exporter.export_empty_committees)["Empty Committees"]
    assert ws.cell(row=5, column=1).value == "No empty committees"

    exporter.data.committees.append(Committee(id=3, name="3", location="Lab"))
    ws = _load(exporter.export_empty_committees)["Empty Committees"]
    assert [c.value for c in ws[4]] == ["Committee", "Location", "Status"]
    assert [c.value for c in ws[5]] == ["3", "Lab", "Empty"]


def test_grade_distribution(exporter):
    ws = _load(exporter.export_grade_distribution)["By Grade"]
    assert ws.cell(row=4, column=1).value == "Grade 10"
    assert [c.value for c in ws[5]] == ["Class", "Committee", "Students"]
    assert [c.value for c in ws[6]] == ["A", "1", 20]
    assert [c.value for c in ws[7]] == ["A", "2", 5]
    assert ws.cell(row=9, column=1).value == "Grade 11"
    assert [c.value for c in ws[11]] == ["-", "2", 3]


def test_absence_records(exporter):
    wb = _load(exporter.export_absence_records)
    assert wb.sheetnames == ["Committee 1", "Committee 2"]
    ws = wb["Committee 2"]
    assert ws.cell(row=2, column=1).value == "Student Absence Record"
    assert ws.cell(row=4, column=1).value == "Student Name"
    assert ws.cell(row=9, column=2).value == "2"
    assert ws.cell(row=11, column=2).value == "Grade 10, Grade 11"
    assert [c.value for c in ws[13]][:3] == ["Name", "Role", "Signature"]
    assert ws.cell(row=14, column=2).value == "Committee Chair"


def test_question_envelopes(exporter):
    ws = _load(exporter.export_question_envelopes)["Committee 2"]
    assert ws.cell(row=4, column=2).value == "2026"
    assert ws.cell(row=12, column=2).value == "2"
    assert ws.cell(row=13, column=2).value == 8

    config = default_report_config(DocumentType.QUESTION_ENVELOPE).toggle("track")
    ws = _load(exporter.export_question_envelopes, config)["Committee 1"]
    labels = [ws.cell(row=r, column=1).value for r in range(4, 13)]
    assert "Track" not in labels
    assert ws.cell(row=12, column=2).value == 20


def test_answer_envelopes(exporter):
    wb = _load(exporter.export_answer_envelopes)
    assert wb.sheetnames == ["Grade 10", "Grade 11"]
    assert wb["Grade 11"].cell(row=9, column=1).value == "Grade"
    assert wb["Grade 11"].cell(row=9, column=2).value == "Grade 11"

    wb = _load(ExcelExporter(ExamControlState().data).export_answer_envelopes)
    assert wb.sheetnames == ["No Stages"]


def test_no_schedule():
    wb = _load(ExcelExporter(ExamControlState().data).export_invigilators)
    assert wb.sheetnames == ["No Schedule Generated"]


def test_export_all(exporter, tmp_path):
    written = exporter.export_all(str(tmp_path / "output"))
    assert len(written) == 13
    for path in written:
        assert load_workbook(path).sheetnames
