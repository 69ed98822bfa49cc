"""
exam_control/config.py

Run configuration read from a `parameter,value` CSV file.
"""

import os
from typing import Dict, List, Optional, Union
import pandas as pd
from . import utils

DEFAULT_CONFIG: Dict[str, str] = {
    'capacity': str(utils.DEFAULT_CAPACITY),
    'committee_count': '',
    'separate_stages': 'false',
    'num_days': str(utils.DEFAULT_NUM_DAYS),
    'periods_per_day': str(utils.DEFAULT_PERIODS_PER_DAY),
    'teachers_per_committee': str(utils.DEFAULT_TEACHERS_PER_COMMITTEE),
    'school_name': '',
    'year': '',
    'term': '',
    'seed': '',
}


def load_config(filepath: str) -> Dict[str, str]:
    """
    Reads the config file over the defaults. A missing file yields the
    defaults with a warning.
    """
    config = dict(DEFAULT_CONFIG)

    if not os.path.exists(filepath):
        print(f"Warning: {filepath} not found, using default configuration.")
        return config

    df = pd.read_csv(filepath, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    df.columns = df.columns.str.strip()
    if 'parameter' not in df.columns or 'value' not in df.columns:
        raise ValueError(f"{filepath} must have 'parameter' and 'value' columns")

    for _, row in df.iterrows():
        param = str(row['parameter']).strip()
        if not param:
            continue
        config[param] = str(row['value']).strip()

    print(f"Loaded {len(df)} configuration parameter(s) from {filepath}.")
    return config


def get_capacity_mode(config: Dict[str, str]) -> Dict[str, Optional[int]]:
    """
    Keyword arguments for distribute_committees. A committee count, when
    set, takes precedence over the capacity.
    """
    committee_count = utils.optional_int(config.get('committee_count'))
    if committee_count is not None:
        return {'capacity': None, 'committee_count': committee_count}
    capacity = utils.optional_int(config.get('capacity'))
    return {
        'capacity': capacity if capacity is not None else utils.DEFAULT_CAPACITY,
        'committee_count': None,
    }


def get_periods_per_day(config: Dict[str, str]) -> Union[int, List[int]]:
    """'2' applies to every day; '2,1,1' sets each day separately."""
    raw = config.get('periods_per_day', '') or str(utils.DEFAULT_PERIODS_PER_DAY)
    parts = [p.strip() for p in raw.split(',') if p.strip()]
    if len(parts) == 1:
        return utils.parse_int(parts[0], utils.DEFAULT_PERIODS_PER_DAY)
    return [utils.parse_int(p) for p in parts]


def get_num_days(config: Dict[str, str]) -> int:
    periods = get_periods_per_day(config)
    if isinstance(periods, list):
        return len(periods)
    return utils.parse_int(config.get('num_days'), utils.DEFAULT_NUM_DAYS)


def get_seed(config: Dict[str, str]) -> Optional[int]:
    return utils.optional_int(config.get('seed'))


def get_stage_prefix(config: Dict[str, str], stage_name: str, position: int) -> str:
    """Configured `prefix_<stage>` or a running 10, 20, 30..."""
    configured = config.get(f'prefix_{stage_name}', '').strip()
    if configured:
        return configured
    return str((position + 1) * 10)
