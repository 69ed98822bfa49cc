"""
JSON API for the exam control system.

Run: python web_app.py
Visit: http://localhost:5000/api/state
"""

import io
import os
from typing import Dict, Callable, Optional
from flask import Flask, jsonify, send_file, request

from exam_control.state import ExamControlState
from exam_control.models import Student, Teacher
from exam_control.errors import ConfirmationRequired
from exam_control.ranges import (
    compute_ranges, committee_students, stage_status, empty_committees, section_distribution,
)
from exam_control.validators import collect_report
from exam_control.excel_exporter import ExcelExporter, DocumentType, default_report_config, XLSX_MIMETYPE
from exam_control import utils

STATE_FILE = os.environ.get("EXAM_CONTROL_STATE", "output/exam_control.json")

app = Flask(__name__)

# --- Global Application State ---
g_state: ExamControlState = ExamControlState()

# document name -> (download filename, exporter method name, report config type)
DOCUMENTS: Dict[str, tuple] = {
    'distribution': ("Committee_Distribution.xlsx", 'export_distribution', None),
    'attendance': ("Attendance_Sheets.xlsx", 'export_attendance', DocumentType.ATTENDANCE),
    'seat_labels': ("Seat_Labels.xlsx", 'export_seat_labels', DocumentType.SEAT_LABELS),
    'student_counts': ("Student_Counts.xlsx", 'export_student_counts', DocumentType.STUDENT_COUNTS),
    'unassigned': ("Unassigned_Students.xlsx", 'export_unassigned', DocumentType.UNASSIGNED),
    'invigilators': ("Invigilator_Schedule.xlsx", 'export_invigilators', None),
    'invigilator_attendance': ("Invigilator_Attendance.xlsx", 'export_invigilator_attendance',
                               DocumentType.INVIGILATOR_ATTENDANCE),
    'door_labels': ("Door_Labels.xlsx", 'export_door_labels', DocumentType.DOOR_LABELS),
    'empty_committees': ("Empty_Committees.xlsx", 'export_empty_committees', DocumentType.EMPTY_COMMITTEES),
    'grade_distribution': ("Distribution_By_Grade.xlsx", 'export_grade_distribution',
                           DocumentType.GRADE_DISTRIBUTION),
    'absence_records': ("Absence_Records.xlsx", 'export_absence_records', DocumentType.ABSENCE_RECORD),
    'question_envelopes': ("Question_Envelopes.xlsx", 'export_question_envelopes', DocumentType.QUESTION_ENVELOPE),
    'answer_envelopes': ("Answer_Envelopes.xlsx", 'export_answer_envelopes', DocumentType.ANSWER_ENVELOPE),
}


def _payload() -> dict:
    return request.get_json(silent=True) or {}


def _confirm_from(payload: dict) -> Optional[Callable[[str], bool]]:
    """A request confirms every warning up front with `confirm: true`."""
    if utils.parse_bool(payload.get('confirm')):
        return lambda warning: True
    return None


def _committees_json():
    ranges = compute_ranges(g_state.data.stages, g_state.data.committees)
    result = []
    for index, committee in enumerate(g_state.data.committees):
        entry = committee.to_dict()
        entry['index'] = index
        entry['total'] = committee.total
        entry['ranges'] = {str(sid): str(r) for sid, r in ranges[committee.id].items()}
        result.append(entry)
    return result


# --- Error Handlers ---

@app.errorhandler(ConfirmationRequired)
def handle_confirmation(e: ConfirmationRequired):
    return jsonify({'success': False, 'error': 'Confirmation required', 'warnings': e.warnings}), 409


@app.errorhandler(ValueError)
def handle_value_error(e: ValueError):
    # AllocationError and DuplicateTeacherError are ValueErrors too
    return jsonify({'success': False, 'error': str(e)}), 400


@app.errorhandler(KeyError)
@app.errorhandler(IndexError)
def handle_not_found(e: LookupError):
    message = e.args[0] if e.args else str(e)
    return jsonify({'success': False, 'error': str(message)}), 404


# --- State ---

@app.route('/api/state')
def api_state():
    data = g_state.data.to_dict()
    data['stage_status'] = [
        {'stage_id': s.stage_id, 'stage_name': s.stage_name, 'total': s.total,
         'distributed': s.distributed, 'remaining': s.remaining, 'state': s.state}
        for s in stage_status(g_state.data.stages, g_state.data.committees)
    ]
    data['empty_committees'] = [c.name for c in empty_committees(g_state.data.committees)]
    return jsonify({'success': True, 'data': data})


@app.route('/api/school', methods=['PATCH'])
def api_update_school():
    school = g_state.update_school(**_payload())
    return jsonify({'success': True, 'school': school.to_dict()})


@app.route('/api/reset', methods=['POST'])
def api_reset():
    done = g_state.reset(_confirm_from(_payload()))
    return jsonify({'success': done})


@app.route('/api/save', methods=['POST'])
def api_save():
    g_state.save(STATE_FILE)
    return jsonify({'success': True, 'path': STATE_FILE})


# --- Stages ---

@app.route('/api/stages', methods=['POST'])
def api_add_stage():
    payload = _payload()
    students = [Student(name=s) if isinstance(s, str) else Student.from_dict(s)
                for s in payload.get('students', [])]
    stage = g_state.add_stage(str(payload.get('name', '')), str(payload.get('prefix', '')), students)
    return jsonify({'success': True, 'stage': stage.to_dict()}), 201


@app.route('/api/stages/<int:stage_id>', methods=['PATCH'])
def api_update_stage(stage_id: int):
    payload = _payload()
    stage = g_state.update_stage(stage_id, payload.get('name'), payload.get('prefix'))
    return jsonify({'success': True, 'stage': stage.to_dict()})


@app.route('/api/stages/<int:stage_id>/sections')
def api_stage_sections(stage_id: int):
    """Which committees each class of a stage went to."""
    rows = section_distribution(g_state.data.stages, g_state.data.committees)
    if stage_id not in rows:
        return jsonify({'success': False, 'error': f'No stage with id {stage_id}.'}), 404
    return jsonify({'success': True, 'sections': [
        {'section': section, 'committee': committee, 'count': count}
        for section, committee, count in rows[stage_id]
    ]})


@app.route('/api/stages/<int:stage_id>', methods=['DELETE'])
def api_remove_stage(stage_id: int):
    removed = g_state.remove_stage(stage_id, _confirm_from(request.args))
    return jsonify({'success': removed})


# --- Teachers ---

@app.route('/api/teachers', methods=['POST'])
def api_add_teachers():
    """Accepts a single `name` or a `teachers` list to merge in."""
    payload = _payload()
    if 'teachers' in payload:
        teachers = [Teacher.from_dict(t) for t in payload['teachers']]
        added = g_state.import_teachers(teachers)
        return jsonify({'success': True, 'added': added}), 201
    teacher = g_state.add_teacher(str(payload.get('name', '')), str(payload.get('phone', '')))
    return jsonify({'success': True, 'teacher': teacher.to_dict()}), 201


@app.route('/api/teachers/<name>', methods=['DELETE'])
def api_remove_teacher(name: str):
    if not g_state.remove_teacher(name):
        return jsonify({'success': False, 'error': f'Teacher "{name}" not found.'}), 404
    return jsonify({'success': True})


# --- Committees ---

@app.route('/api/committees')
def api_committees():
    return jsonify({'success': True, 'committees': _committees_json()})


@app.route('/api/committees/distribute', methods=['POST'])
def api_distribute():
    payload = _payload()
    committees = g_state.auto_distribute(
        capacity=utils.optional_int(payload.get('capacity')),
        committee_count=utils.optional_int(payload.get('committee_count')),
        separate_stages=utils.parse_bool(payload.get('separate_stages')),
        confirm=_confirm_from(payload),
    )
    return jsonify({'success': committees is not None, 'committees': _committees_json()})


@app.route('/api/committees', methods=['POST'])
def api_add_committee():
    committee = g_state.add_committee(str(_payload().get('location', '')))
    return jsonify({'success': True, 'committee': committee.to_dict()}), 201


@app.route('/api/committees', methods=['DELETE'])
def api_clear_committees():
    cleared = g_state.clear_committees(_confirm_from(request.args))
    return jsonify({'success': cleared})


@app.route('/api/committees/<int:index>', methods=['PATCH'])
def api_update_committee(index: int):
    payload = _payload()
    committee = g_state.update_committee(index, payload.get('name'), payload.get('location'))
    return jsonify({'success': True, 'committee': committee.to_dict()})


@app.route('/api/committees/<int:index>', methods=['DELETE'])
def api_remove_committee(index: int):
    g_state.remove_committee(index)
    return jsonify({'success': True})


@app.route('/api/committees/<int:index>/move', methods=['POST'])
def api_move_committee(index: int):
    g_state.move_committee(index, utils.parse_int(_payload().get('to'), index))
    return jsonify({'success': True, 'committees': _committees_json()})


@app.route('/api/committees/<int:index>/counts', methods=['PATCH'])
def api_update_count(index: int):
    payload = _payload()
    if 'stage_id' not in payload:
        return jsonify({'success': False, 'error': 'stage_id is required.'}), 400
    committee = g_state.update_count(index, utils.parse_int(payload['stage_id']), payload.get('value'))
    return jsonify({'success': True, 'committee': committee.to_dict()})


@app.route('/api/committees/ranges')
def api_ranges():
    ranges = compute_ranges(g_state.data.stages, g_state.data.committees)
    return jsonify({
        'success': True,
        'ranges': {str(cid): {str(sid): {'start': r.start, 'end': r.end, 'label': str(r)}
                              for sid, r in stages.items()}
                   for cid, stages in ranges.items()},
    })


@app.route('/api/committees/<int:committee_id>/students')
def api_committee_students(committee_id: int):
    seated = committee_students(g_state.data.stages, g_state.data.committees, committee_id)
    return jsonify({'success': True, 'students': [
        {'seat_number': s.seat_number, 'name': s.student.name, 'stage_id': s.stage_id,
         'stage_name': s.stage_name, 'section': s.student.section}
        for s in seated
    ]})


# --- Invigilators ---

@app.route('/api/schedule/generate', methods=['POST'])
def api_generate_schedule():
    payload = _payload()
    periods = payload.get('periods_per_day', utils.DEFAULT_PERIODS_PER_DAY)
    if isinstance(periods, list):
        periods = [utils.parse_int(p) for p in periods]
    else:
        periods = utils.parse_int(periods, utils.DEFAULT_PERIODS_PER_DAY)
    schedule = g_state.generate_schedule(
        num_days=utils.parse_int(payload.get('num_days'), utils.DEFAULT_NUM_DAYS),
        periods_per_day=periods,
        teachers_per_committee=utils.parse_int(payload.get('teachers_per_committee'),
                                               utils.DEFAULT_TEACHERS_PER_COMMITTEE),
        confirm=_confirm_from(payload),
    )
    if schedule is None:
        return jsonify({'success': False})
    return jsonify({'success': True, 'schedule': schedule.to_dict()})


@app.route('/api/schedule/assignment', methods=['PATCH'])
def api_assign_invigilator():
    payload = _payload()
    schedule = g_state.assign_invigilator(
        utils.parse_int(payload.get('day')),
        utils.parse_int(payload.get('period')),
        utils.parse_int(payload.get('committee')),
        utils.parse_int(payload.get('slot')),
        str(payload.get('teacher', '')),
    )
    return jsonify({'success': True, 'schedule': schedule.to_dict()})


@app.route('/api/schedule/reserve', methods=['PATCH'])
def api_update_reserve():
    payload = _payload()
    schedule = g_state.update_reserve(
        utils.parse_int(payload.get('day')),
        utils.parse_int(payload.get('period')),
        utils.parse_int(payload.get('index')),
        str(payload.get('teacher', '')),
    )
    return jsonify({'success': True, 'schedule': schedule.to_dict()})


@app.route('/api/schedule/days/<int:day_index>/date', methods=['PUT'])
def api_set_day_date(day_index: int):
    schedule = g_state.set_day_date(day_index, str(_payload().get('date', '')))
    return jsonify({'success': True, 'schedule': schedule.to_dict()})


@app.route('/api/schedule', methods=['DELETE'])
def api_clear_schedule():
    g_state.clear_schedule()
    return jsonify({'success': True})


@app.route('/api/workload')
def api_workload():
    return jsonify({'success': True, 'workload': {
        name: {'active': w.active, 'reserve': w.reserve} for name, w in g_state.workload().items()
    }})


# --- Validation & Downloads ---

@app.route('/api/validation')
def api_validation():
    report = collect_report(g_state.data)
    return jsonify({'success': True, **report.to_dict()})


@app.route('/download/<document>')
def download_document(document: str):
    """
    Generates one workbook in memory. `hide=signature,presence` hides
    columns of documents with configurable fields.
    """
    if document not in DOCUMENTS:
        return jsonify({'success': False, 'error': f'Unknown document "{document}".'}), 404

    filename, method_name, doc_type = DOCUMENTS[document]
    exporter = ExcelExporter(g_state.data)
    buffer = io.BytesIO()
    export = getattr(exporter, method_name)
    if doc_type is not None:
        config = default_report_config(doc_type)
        for key in filter(None, (k.strip() for k in request.args.get('hide', '').split(','))):
            config.toggle(key)
        export(buffer, config)
    else:
        export(buffer)
    buffer.seek(0)

    return send_file(
        buffer,
        as_attachment=True,
        download_name=filename,
        mimetype=XLSX_MIMETYPE
    )


if __name__ == '__main__':
    print("=" * 70)
    print("Starting Exam Control API".center(70))
    print("=" * 70)

    g_state = ExamControlState.load(STATE_FILE)

    print("\nOpen your browser and visit: http://localhost:5000/api/state")
    print("Press Ctrl+C to stop the server\n")
    app.run(debug=True, port=5000, use_reloader=False)
