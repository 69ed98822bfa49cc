"""
exam_control/utils.py
"""
import math
from typing import Iterable, List, Optional, Tuple
import icu

# --- Seat Numbering ---
SEAT_NUMBER_WIDTH: int = 3

# --- Allocation Defaults ---
DEFAULT_CAPACITY: int = 20
DEFAULT_TEACHERS_PER_COMMITTEE: int = 1
DEFAULT_NUM_DAYS: int = 5
DEFAULT_PERIODS_PER_DAY: int = 1

# --- Name Ordering ---
COLLATION_LOCALE: str = "ar"

# Arabic collation: Arabic script before Latin, alef forms in dictionary order
_COLLATOR = icu.Collator.createInstance(icu.Locale(COLLATION_LOCALE))


def format_seat_number(prefix: str, index: int) -> str:
    """Seat number for the student at zero-based `index` in a stage."""
    return f"{prefix}{str(index + 1).zfill(SEAT_NUMBER_WIDTH)}"


def name_sort_key(name: str) -> Tuple[bytes, str]:
    """
    Ordering key for student names under the Arabic locale collation.
    The raw name breaks ties so the order is total.
    """
    return (_COLLATOR.getSortKey(name), name)


def parse_int(value, default: int = 0) -> int:
    """Lenient int parsing for manual cell edits ('' / 'abc' -> default)."""
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        text = str(value).strip()
        if text.lower() in ("", "nan", "none"):
            return default
        return int(float(text))
    except (ValueError, TypeError):
        return default


def parse_bool(value, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "y", "on"):
        return True
    if text in ("0", "false", "no", "n", "off", ""):
        return False
    return default


def ceil_div(numerator: int, denominator: int) -> int:
    return math.ceil(numerator / denominator)


def next_numeric_id(existing_ids: Iterable[int]) -> int:
    ids = list(existing_ids)
    return max(ids) + 1 if ids else 1


def next_committee_name(names: List[str]) -> str:
    """Last committee name + 1 when numeric, otherwise the next position."""
    if not names:
        return "1"
    last = names[-1].strip()
    if last.isdigit():
        return str(int(last) + 1)
    return str(len(names) + 1)


def clean_cell(value) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if text.lower() == "nan":
        return ""
    return text


def optional_int(value) -> Optional[int]:
    """None for blank config values, int otherwise."""
    text = clean_cell(value)
    if not text:
        return None
    return parse_int(text)
