"""
exam_control/excel_exporter.py

Writes distribution and invigilator data to Excel workbooks.
Column sets of the committee documents come from fixed per-document
field lists (see REPORT_FIELDS) that callers may relabel or hide.
"""
import io
import os
import re
from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Dict, List, Tuple, Union
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from .models import AppData
from .ranges import (
    compute_ranges, committee_rosters, unassigned_students, student_counts, stage_status,
    empty_committees, section_distribution,
)
from .invigilators import teacher_workload

# --- Styling Constants ---
HEADER_FILL = PatternFill(start_color="4F81BD", end_color="4F81BD", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
TITLE_FONT = Font(bold=True, size=13)
ROW_LABEL_FILL = PatternFill(start_color="DCE6F1", end_color="DCE6F1", fill_type="solid")
ROW_LABEL_FONT = Font(bold=True, size=11)
CENTER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER_SIDE = Side(style="thin", color="BFBFBF")
THIN_BORDER = Border(left=THIN_BORDER_SIDE, right=THIN_BORDER_SIDE, top=THIN_BORDER_SIDE, bottom=THIN_BORDER_SIDE)
EMPTY_FILL = PatternFill(start_color="FDE9E7", end_color="FDE9E7", fill_type="solid")
RESERVE_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")
OVERFLOW_FONT = Font(color="C00000", bold=True)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class DocumentType(Enum):
    ATTENDANCE = "attendance"
    SEAT_LABELS = "seat_labels"
    STUDENT_COUNTS = "student_counts"
    INVIGILATOR_ATTENDANCE = "invigilator_attendance"
    UNASSIGNED = "unassigned"
    DOOR_LABELS = "door_labels"
    EMPTY_COMMITTEES = "empty_committees"
    GRADE_DISTRIBUTION = "grade_distribution"
    ABSENCE_RECORD = "absence_record"
    QUESTION_ENVELOPE = "question_envelope"
    ANSWER_ENVELOPE = "answer_envelope"


@dataclass(frozen=True)
class ReportField:
    key: str
    label: str
    visible: bool = True


@dataclass
class ReportConfig:
    document: DocumentType
    title: str
    fields: List[ReportField] = field(default_factory=list)

    def get_field(self, key: str) -> ReportField:
        for f in self.fields:
            if f.key == key:
                return f
        raise KeyError(f"{self.document.value} has no field '{key}'")

    def toggle(self, key: str) -> "ReportConfig":
        target = self.get_field(key)
        self.fields = [replace(f, visible=not f.visible) if f is target else f for f in self.fields]
        return self

    def relabel(self, key: str, label: str) -> "ReportConfig":
        target = self.get_field(key)
        self.fields = [replace(f, label=label) if f is target else f for f in self.fields]
        return self

    def visible_fields(self) -> List[ReportField]:
        return [f for f in self.fields if f.visible]


REPORT_FIELDS: Dict[DocumentType, Tuple[str, Tuple[ReportField, ...]]] = {
    DocumentType.ATTENDANCE: ("Student Attendance Sheet", (
        ReportField("sequence", "No."),
        ReportField("seat_number", "Seat Number"),
        ReportField("name", "Student Name"),
        ReportField("stage", "Stage"),
        ReportField("presence", "Present"),
        ReportField("signature", "Signature"),
    )),
    DocumentType.SEAT_LABELS: ("Seat Labels", (
        ReportField("seat_number", "Seat Number"),
        ReportField("name", "Student Name"),
        ReportField("stage", "Stage"),
        ReportField("committee", "Committee"),
        ReportField("location", "Location"),
    )),
    DocumentType.STUDENT_COUNTS: ("Students per Committee", (
        ReportField("stage", "Stage"),
        ReportField("committee", "Committee"),
        ReportField("count", "Students"),
    )),
    DocumentType.INVIGILATOR_ATTENDANCE: ("Invigilator Attendance", (
        ReportField("committee", "Committee"),
        ReportField("location", "Location"),
        ReportField("subject", "Subject"),
        ReportField("time", "Exam Time"),
        ReportField("invigilator", "Invigilator"),
        ReportField("signature", "Signature"),
    )),
    DocumentType.UNASSIGNED: ("Unassigned Students", (
        ReportField("sequence", "No."),
        ReportField("name", "Student Name"),
        ReportField("external_id", "Student ID"),
        ReportField("grade", "Grade"),
        ReportField("section", "Class"),
        ReportField("stage", "Stage"),
    )),
    DocumentType.DOOR_LABELS: ("Committee Door Label", (
        ReportField("stage", "Stage"),
        ReportField("count", "Students"),
    )),
    DocumentType.EMPTY_COMMITTEES: ("Empty Committees", (
        ReportField("committee", "Committee"),
        ReportField("location", "Location"),
        ReportField("status", "Status"),
    )),
    DocumentType.GRADE_DISTRIBUTION: ("Distribution by Grade and Class", (
        ReportField("section", "Class"),
        ReportField("committee", "Committee"),
        ReportField("count", "Students"),
    )),
    # Form documents: one label/value row per field
    DocumentType.ABSENCE_RECORD: ("Student Absence Record", (
        ReportField("student", "Student Name"),
        ReportField("seat_number", "Seat Number"),
        ReportField("day", "Day"),
        ReportField("date", "Date"),
        ReportField("period", "Period"),
        ReportField("committee", "Committee"),
        ReportField("subject", "Subject"),
        ReportField("grade", "Grade"),
    )),
    DocumentType.QUESTION_ENVELOPE: ("Student Question Envelope", (
        ReportField("year", "School Year"),
        ReportField("term", "Term"),
        ReportField("round", "Round"),
        ReportField("subject", "Subject"),
        ReportField("grade", "Grade"),
        ReportField("track", "Track"),
        ReportField("day_date", "Day and Date"),
        ReportField("period", "Period"),
        ReportField("committee", "Committee"),
        ReportField("count", "Committee Students"),
    )),
    DocumentType.ANSWER_ENVELOPE: ("Model Answer Envelope", (
        ReportField("year", "School Year"),
        ReportField("term", "Term"),
        ReportField("round", "Round"),
        ReportField("question_type", "Question Type"),
        ReportField("subject", "Subject"),
        ReportField("grade", "Grade"),
        ReportField("track", "Track"),
        ReportField("teacher", "Teacher Name"),
        ReportField("teacher_signature", "Teacher Signature"),
    )),
}


def default_report_config(document: DocumentType) -> ReportConfig:
    title, fields = REPORT_FIELDS[document]
    return ReportConfig(document=document, title=title, fields=list(fields))


def _safe_title(title: str) -> str:
    return re.sub(r'[\\/*?:\[\]]', '', title)[:31] or "Sheet"


def _unique_title(wb: Workbook, title: str) -> str:
    base = _safe_title(title)
    candidate = base
    n = 2
    while candidate in wb.sheetnames:
        suffix = f" ({n})"
        candidate = base[:31 - len(suffix)] + suffix
        n += 1
    return candidate


class ExcelExporter:
    def __init__(self, data: AppData):
        self.data = data

    # --- Sheet Helpers ---

    def _new_workbook(self) -> Workbook:
        wb = Workbook()
        if wb.active:
            wb.remove(wb.active)
        return wb

    def _write_header(self, ws: Worksheet, row: int, labels: List[str]):
        for c, label in enumerate(labels, start=1):
            cell = ws.cell(row=row, column=c, value=label)
            cell.fill = HEADER_FILL
            cell.font = HEADER_FONT
            cell.alignment = CENTER_ALIGN
            cell.border = THIN_BORDER
            ws.column_dimensions[get_column_letter(c)].width = max(12, len(label) + 4)

    def _write_row(self, ws: Worksheet, row: int, values: List):
        for c, value in enumerate(values, start=1):
            cell = ws.cell(row=row, column=c, value=value)
            cell.alignment = CENTER_ALIGN
            cell.border = THIN_BORDER

    def _write_title(self, ws: Worksheet, title: str, width: int):
        school = self.data.school
        heading = " - ".join(p for p in (school.name, school.year, school.term) if p)
        ws.cell(row=1, column=1, value=heading or title).font = TITLE_FONT
        ws.cell(row=2, column=1, value=title).font = TITLE_FONT
        if width > 1:
            ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=width)
            ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=width)

    def _save(self, wb: Workbook, filepath: Union[str, io.BytesIO], label: str):
        try:
            wb.save(filepath)
        except PermissionError:
            print(f"FATAL ERROR: Could not save to {filepath}. Is the file open in Excel?")
            raise
        if isinstance(filepath, str):
            print(f"Successfully saved {label} to {filepath}")

    # --- Distribution ---

    def export_distribution(self, filepath: Union[str, io.BytesIO]):
        """Committees x stages: counts with their alphabetical ranges."""
        print(f"Exporting committee distribution to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="Distribution")

        stages = self.data.stages
        ranges = compute_ranges(stages, self.data.committees)
        headers = ["Committee", "Location"]
        for stage in stages:
            headers += [stage.name, f"{stage.name} range"]
        headers.append("Total")
        self._write_header(ws, 1, headers)

        row = 2
        for committee in self.data.committees:
            values = [committee.name, committee.location]
            for stage in stages:
                count = committee.count_for(stage.id)
                student_range = ranges[committee.id].get(stage.id)
                values += [count, str(student_range) if student_range else "-"]
            values.append(committee.total)
            self._write_row(ws, row, values)
            ws.cell(row=row, column=1).fill = ROW_LABEL_FILL
            ws.cell(row=row, column=1).font = ROW_LABEL_FONT
            row += 1

        # Stage status footer
        row += 1
        self._write_header(ws, row, ["Stage", "Students", "Distributed", "Remaining", "Status"])
        for status in stage_status(stages, self.data.committees):
            row += 1
            self._write_row(ws, row, [status.stage_name, status.total, status.distributed,
                                      status.remaining, status.state])
            if status.remaining < 0:
                ws.cell(row=row, column=5).font = OVERFLOW_FONT

        self._save(wb, filepath, "committee distribution")

    # --- Committee Documents ---

    def export_attendance(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """One attendance sheet per committee."""
        config = config or default_report_config(DocumentType.ATTENDANCE)
        print(f"Exporting attendance sheets to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()
        rosters = committee_rosters(self.data.stages, self.data.committees)

        if not self.data.committees:
            wb.create_sheet(title="No Committees")

        for committee in self.data.committees:
            ws = wb.create_sheet(title=_unique_title(wb, f"Committee {committee.name}"))
            self._write_title(ws, f"{config.title} - Committee {committee.name} {committee.location}".strip(),
                              len(fields))
            self._write_header(ws, 4, [f.label for f in fields])
            for seq, seated in enumerate(rosters[committee.id], start=1):
                values = {
                    "sequence": seq,
                    "seat_number": seated.seat_number,
                    "name": seated.student.name,
                    "stage": seated.stage_name,
                    "presence": "",
                    "signature": "",
                }
                self._write_row(ws, 4 + seq, [values[f.key] for f in fields])

        self._save(wb, filepath, "attendance sheets")

    def export_seat_labels(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        config = config or default_report_config(DocumentType.SEAT_LABELS)
        print(f"Exporting seat labels to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="Seat Labels")
        fields = config.visible_fields()
        self._write_header(ws, 1, [f.label for f in fields])

        locations = {c.id: c.location for c in self.data.committees}
        rosters = committee_rosters(self.data.stages, self.data.committees)
        row = 2
        for committee in self.data.committees:
            for seated in rosters[committee.id]:
                values = {
                    "seat_number": seated.seat_number,
                    "name": seated.student.name,
                    "stage": seated.stage_name,
                    "committee": seated.committee_name,
                    "location": locations.get(seated.committee_id, ""),
                }
                self._write_row(ws, row, [values[f.key] for f in fields])
                row += 1

        self._save(wb, filepath, "seat labels")

    def export_student_counts(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        config = config or default_report_config(DocumentType.STUDENT_COUNTS)
        print(f"Exporting student counts to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="Student Counts")
        fields = config.visible_fields()
        self._write_header(ws, 1, [f.label for f in fields])

        rows, grand_total = student_counts(self.data.stages, self.data.committees)
        r = 2
        for committee_name, stage_name, count in rows:
            values = {"stage": stage_name, "committee": committee_name, "count": count}
            self._write_row(ws, r, [values[f.key] for f in fields])
            r += 1
        ws.cell(row=r + 1, column=1, value=f"Total: {grand_total}").font = ROW_LABEL_FONT

        self._save(wb, filepath, "student counts")

    def export_unassigned(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        config = config or default_report_config(DocumentType.UNASSIGNED)
        print(f"Exporting unassigned students to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="Unassigned")
        fields = config.visible_fields()
        self._write_header(ws, 1, [f.label for f in fields])

        for seq, seated in enumerate(unassigned_students(self.data.stages, self.data.committees), start=1):
            values = {
                "sequence": seq,
                "name": seated.student.name,
                "external_id": seated.student.external_id,
                "grade": seated.student.grade,
                "section": seated.student.section,
                "stage": seated.stage_name,
            }
            self._write_row(ws, seq + 1, [values[f.key] for f in fields])

        self._save(wb, filepath, "unassigned students")

    def export_door_labels(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """One door label per committee that seats students."""
        config = config or default_report_config(DocumentType.DOOR_LABELS)
        print(f"Exporting door labels to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()

        for committee in self.data.committees:
            if committee.total == 0:
                continue
            ws = wb.create_sheet(title=_unique_title(wb, f"Committee {committee.name}"))
            width = max(len(fields), 2)
            self._write_title(ws, config.title, width)
            ws.cell(row=3, column=1, value=f"Committee {committee.name}").font = TITLE_FONT
            ws.cell(row=3, column=2, value=committee.location)
            self._write_header(ws, 5, [f.label for f in fields])
            row = 6
            for stage in self.data.stages:
                count = committee.count_for(stage.id)
                if count > 0:
                    values = {"stage": stage.name, "count": count}
                    self._write_row(ws, row, [values[f.key] for f in fields])
                    row += 1
            ws.cell(row=row + 1, column=1, value=f"Total: {committee.total}").font = ROW_LABEL_FONT

        if not wb.sheetnames:
            wb.create_sheet(title="No Committees")
        self._save(wb, filepath, "door labels")

    def export_empty_committees(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        config = config or default_report_config(DocumentType.EMPTY_COMMITTEES)
        print(f"Exporting empty committees to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="Empty Committees")
        fields = config.visible_fields()
        self._write_title(ws, config.title, len(fields))
        self._write_header(ws, 4, [f.label for f in fields])

        empty = empty_committees(self.data.committees)
        for row, committee in enumerate(empty, start=5):
            values = {"committee": committee.name, "location": committee.location, "status": "Empty"}
            self._write_row(ws, row, [values[f.key] for f in fields])
        if not empty:
            ws.cell(row=5, column=1, value="No empty committees")

        self._save(wb, filepath, "empty committees")

    def export_grade_distribution(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """Per stage: which committees each class was seated in."""
        config = config or default_report_config(DocumentType.GRADE_DISTRIBUTION)
        print(f"Exporting distribution by grade to {filepath}...")
        wb = self._new_workbook()
        ws = wb.create_sheet(title="By Grade")
        fields = config.visible_fields()
        self._write_title(ws, config.title, len(fields))

        rows_by_stage = section_distribution(self.data.stages, self.data.committees)
        row = 4
        for stage in self.data.stages:
            rows = rows_by_stage[stage.id]
            if not rows:
                continue
            cell = ws.cell(row=row, column=1, value=stage.name)
            cell.fill = ROW_LABEL_FILL
            cell.font = ROW_LABEL_FONT
            self._write_header(ws, row + 1, [f.label for f in fields])
            row += 2
            for section, committee_name, count in rows:
                values = {"section": section, "committee": committee_name, "count": count}
                self._write_row(ws, row, [values[f.key] for f in fields])
                row += 1
            row += 1

        self._save(wb, filepath, "distribution by grade")

    # --- Committee Forms ---

    def _write_form(self, ws: Worksheet, start_row: int, fields: List[ReportField], values: Dict[str, str]) -> int:
        """Label/value rows; returns the next free row."""
        ws.column_dimensions["A"].width = 24
        ws.column_dimensions["B"].width = 40
        row = start_row
        for f in fields:
            label = ws.cell(row=row, column=1, value=f.label)
            label.fill = ROW_LABEL_FILL
            label.font = ROW_LABEL_FONT
            label.border = THIN_BORDER
            value = ws.cell(row=row, column=2, value=values.get(f.key, ""))
            value.border = THIN_BORDER
            value.alignment = CENTER_ALIGN
            row += 1
        return row

    def _committee_grades(self, committee) -> str:
        return ", ".join(s.name for s in self.data.stages if committee.count_for(s.id) > 0)

    def export_absence_records(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """An absence form per committee with the committee filled in."""
        config = config or default_report_config(DocumentType.ABSENCE_RECORD)
        print(f"Exporting absence records to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()

        for committee in self.data.committees:
            if committee.total == 0:
                continue
            ws = wb.create_sheet(title=_unique_title(wb, f"Committee {committee.name}"))
            self._write_title(ws, config.title, 2)
            row = self._write_form(ws, 4, fields, {
                "committee": committee.name,
                "grade": self._committee_grades(committee),
            })
            self._write_header(ws, row + 1, ["Name", "Role", "Signature"])
            for offset, role in enumerate(("Committee Chair", "Member", "Invigilator"), start=2):
                self._write_row(ws, row + offset, ["", role, ""])

        if not wb.sheetnames:
            wb.create_sheet(title="No Committees")
        self._save(wb, filepath, "absence records")

    def export_question_envelopes(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """A question envelope cover per committee, with its student count."""
        config = config or default_report_config(DocumentType.QUESTION_ENVELOPE)
        print(f"Exporting question envelopes to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()
        school = self.data.school

        for committee in self.data.committees:
            if committee.total == 0:
                continue
            ws = wb.create_sheet(title=_unique_title(wb, f"Committee {committee.name}"))
            self._write_title(ws, config.title, 2)
            self._write_form(ws, 4, fields, {
                "year": school.year,
                "term": school.term,
                "grade": self._committee_grades(committee),
                "committee": committee.name,
                "count": committee.total,
            })

        if not wb.sheetnames:
            wb.create_sheet(title="No Committees")
        self._save(wb, filepath, "question envelopes")

    def export_answer_envelopes(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """A model answer envelope cover per stage."""
        config = config or default_report_config(DocumentType.ANSWER_ENVELOPE)
        print(f"Exporting answer envelopes to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()
        school = self.data.school

        for stage in self.data.stages:
            ws = wb.create_sheet(title=_unique_title(wb, stage.name))
            self._write_title(ws, config.title, 2)
            self._write_form(ws, 4, fields, {"year": school.year, "term": school.term, "grade": stage.name})

        if not wb.sheetnames:
            wb.create_sheet(title="No Stages")
        self._save(wb, filepath, "answer envelopes")

    # --- Invigilators ---

    def export_invigilators(self, filepath: Union[str, io.BytesIO]):
        """
        One sheet per exam day (committee rows x period columns, reserves
        in the last row) and a workload sheet.
        """
        print(f"Exporting invigilator schedule to {filepath}...")
        wb = self._new_workbook()
        schedule = self.data.schedule

        if schedule is None:
            wb.create_sheet(title="No Schedule Generated")
            self._save(wb, filepath, "invigilator schedule")
            return

        tpc = schedule.teachers_per_committee
        for day in schedule.days:
            ws = wb.create_sheet(title=_unique_title(wb, f"Day {day.day_id + 1}"))
            headers = ["Committee", "Location"] + [f"Period {p.period_id + 1}" for p in day.periods]
            self._write_header(ws, 1, headers)

            for c_idx, committee in enumerate(self.data.committees):
                row = c_idx + 2
                values = [committee.name, committee.location]
                for period in day.periods:
                    seated = period.main[c_idx * tpc:(c_idx + 1) * tpc]
                    values.append("\n".join(n for n in seated if n))
                self._write_row(ws, row, values)
                ws.cell(row=row, column=1).fill = ROW_LABEL_FILL
                for p_idx, period in enumerate(day.periods):
                    seated = period.main[c_idx * tpc:(c_idx + 1) * tpc]
                    if len(seated) < tpc or not all(seated):
                        ws.cell(row=row, column=3 + p_idx).fill = EMPTY_FILL

            reserve_row = len(self.data.committees) + 2
            self._write_row(ws, reserve_row, ["Reserves", ""] + ["\n".join(p.reserves) for p in day.periods])
            for c in range(1, len(headers) + 1):
                ws.cell(row=reserve_row, column=c).fill = RESERVE_FILL
            if day.date:
                ws.cell(row=reserve_row + 2, column=1, value=f"Date: {day.date}")

        ws = wb.create_sheet(title="Workload")
        self._write_header(ws, 1, ["Teacher", "Committees", "Reserve"])
        for row, (name, load) in enumerate(teacher_workload(schedule, self.data.teachers).items(), start=2):
            self._write_row(ws, row, [name, load.active, load.reserve])

        self._save(wb, filepath, "invigilator schedule")

    def export_invigilator_attendance(self, filepath: Union[str, io.BytesIO], config: ReportConfig = None):
        """Sign-in sheet for every day and period of the schedule."""
        config = config or default_report_config(DocumentType.INVIGILATOR_ATTENDANCE)
        print(f"Exporting invigilator attendance to {filepath}...")
        wb = self._new_workbook()
        fields = config.visible_fields()
        schedule = self.data.schedule

        if schedule is None:
            wb.create_sheet(title="No Schedule Generated")
            self._save(wb, filepath, "invigilator attendance")
            return

        tpc = schedule.teachers_per_committee
        for day in schedule.days:
            for period in day.periods:
                ws = wb.create_sheet(title=_unique_title(wb, f"Day {day.day_id + 1} P{period.period_id + 1}"))
                self._write_title(ws, f"{config.title} - Day {day.day_id + 1} {day.date} Period {period.period_id + 1}",
                                  len(fields))
                self._write_header(ws, 4, [f.label for f in fields])
                row = 5
                for c_idx, committee in enumerate(self.data.committees):
                    for name in period.main[c_idx * tpc:(c_idx + 1) * tpc]:
                        values = {
                            "committee": committee.name,
                            "location": committee.location,
                            "subject": "",
                            "time": "",
                            "invigilator": name,
                            "signature": "",
                        }
                        self._write_row(ws, row, [values[f.key] for f in fields])
                        row += 1

        self._save(wb, filepath, "invigilator attendance")

    def export_all(self, output_dir: str) -> List[str]:
        os.makedirs(output_dir, exist_ok=True)
        outputs = {
            "Committee_Distribution.xlsx": self.export_distribution,
            "Attendance_Sheets.xlsx": self.export_attendance,
            "Seat_Labels.xlsx": self.export_seat_labels,
            "Student_Counts.xlsx": self.export_student_counts,
            "Unassigned_Students.xlsx": self.export_unassigned,
            "Invigilator_Schedule.xlsx": self.export_invigilators,
            "Invigilator_Attendance.xlsx": self.export_invigilator_attendance,
            "Door_Labels.xlsx": self.export_door_labels,
            "Empty_Committees.xlsx": self.export_empty_committees,
            "Distribution_By_Grade.xlsx": self.export_grade_distribution,
            "Absence_Records.xlsx": self.export_absence_records,
            "Question_Envelopes.xlsx": self.export_question_envelopes,
            "Answer_Envelopes.xlsx": self.export_answer_envelopes,
        }
        written = []
        for filename, export in outputs.items():
            path = os.path.join(output_dir, filename)
            export(path)
            written.append(path)
        return written
