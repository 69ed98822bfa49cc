"""
main.py

Batch entry point for the exam control system: loads stage rosters and
teachers from data/, distributes committees, schedules invigilators and
writes every document to output/.
"""

import os
import random
from typing import List
from exam_control import config as run_config
from exam_control import utils
from exam_control.roster import load_students, load_teachers, EXCEL_EXTENSIONS
from exam_control.state import ExamControlState
from exam_control.validators import validate_all
from exam_control.excel_exporter import ExcelExporter
from exam_control.errors import AllocationError

# --- Configuration ---
DATA_DIR = "data"
OUTPUT_DIR = "output"
STAGES_DIR = os.path.join(DATA_DIR, "stages")
TEACHER_FILE = os.path.join(DATA_DIR, "teachers.csv")
CONFIG_FILE = os.path.join(DATA_DIR, "config.csv")
STATE_FILE = os.path.join(OUTPUT_DIR, "exam_control.json")

ROSTER_EXTENSIONS = EXCEL_EXTENSIONS + (".csv",)


def find_roster_files(stages_dir: str) -> List[str]:
    """Roster files in name order; each file is one stage."""
    if not os.path.isdir(stages_dir):
        return []
    return sorted(
        os.path.join(stages_dir, f) for f in os.listdir(stages_dir)
        if f.lower().endswith(ROSTER_EXTENSIONS) and not f.startswith("~$")
    )


def build_state(config: dict, stages_dir: str = STAGES_DIR, teacher_file: str = TEACHER_FILE) -> ExamControlState:
    state = ExamControlState()
    state.update_school(
        name=config.get('school_name', ''),
        year=config.get('year', ''),
        term=config.get('term', ''),
    )

    for position, path in enumerate(find_roster_files(stages_dir)):
        stage_name = os.path.splitext(os.path.basename(path))[0]
        students = load_students(path)
        if not students:
            print(f"Warning: {path} has no students. Skipping stage '{stage_name}'.")
            continue
        prefix = run_config.get_stage_prefix(config, stage_name, position)
        stage = state.add_stage(stage_name, prefix, students)
        print(f"Stage '{stage.name}': {stage.total} students, seat prefix {stage.seat_prefix}")

    if os.path.exists(teacher_file):
        state.import_teachers(load_teachers(teacher_file))
    else:
        print(f"Warning: {teacher_file} not found. No invigilators will be scheduled.")
    return state


def main():
    print("--- Starting Exam Control Pipeline ---")
    os.makedirs(OUTPUT_DIR, exist_ok=True)

    # --- 1. Load Data ---
    config = run_config.load_config(CONFIG_FILE)
    state = build_state(config)
    if not state.data.stages:
        print(f"Fatal Error: No stage rosters found in '{STAGES_DIR}'.")
        return

    # --- 2. Distribute Committees ---
    mode = run_config.get_capacity_mode(config)
    separate = utils.parse_bool(config.get('separate_stages'))
    try:
        committees = state.auto_distribute(separate_stages=separate, **mode)
    except AllocationError as e:
        print(f"Fatal Error: {e}")
        return
    print(f"\nDistributed students into {len(committees)} committee(s).")

    # --- 3. Schedule Invigilators ---
    if state.data.teachers:
        seed = run_config.get_seed(config)
        try:
            state.generate_schedule(
                num_days=run_config.get_num_days(config),
                periods_per_day=run_config.get_periods_per_day(config),
                teachers_per_committee=utils.parse_int(
                    config.get('teachers_per_committee'), utils.DEFAULT_TEACHERS_PER_COMMITTEE
                ),
                # Batch runs accept staffing warnings after printing them
                confirm=lambda warning: print(f"Warning: {warning}") or True,
                rng=random.Random(seed) if seed is not None else None,
            )
        except AllocationError as e:
            print(f"Error: Invigilator schedule not generated: {e}")
    else:
        print("\n--- No teachers loaded. Skipping invigilator schedule. ---")

    # --- 4. Run Validators ---
    validate_all(state.data)

    # --- 5. Export All Results ---
    ExcelExporter(state.data).export_all(OUTPUT_DIR)
    state.save(STATE_FILE)

    print("\n--- Exam Control Pipeline Complete. ---")
    print(f"Output files are in the '{OUTPUT_DIR}' directory.")


if __name__ == "__main__":
    main()
