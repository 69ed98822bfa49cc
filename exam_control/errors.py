"""
exam_control/errors.py
"""
from typing import List


class AllocationError(ValueError):
    """Bad parameters for committee allocation or invigilator scheduling."""


class DuplicateTeacherError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Teacher '{name}' already exists")
        self.name = name


class ConfirmationRequired(Exception):
    """
    Raised when an operation has soft warnings and the caller gave no
    way to confirm them. Nothing has been changed when this is raised.
    """

    def __init__(self, warnings: List[str]):
        super().__init__("; ".join(warnings))
        self.warnings = list(warnings)
