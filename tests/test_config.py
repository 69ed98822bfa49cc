"""
tests/test_config.py

Tests for the parameter,value run configuration.
"""
import pytest
from exam_control import config as run_config


def write_config(tmp_path, rows):
    path = tmp_path / "config.csv"
    path.write_text("parameter,value\n" + "\n".join(rows) + "\n", encoding="utf-8")
    return str(path)


def test_missing_file_gives_defaults(tmp_path):
    config = run_config.load_config(str(tmp_path / "missing.csv"))
    assert config == run_config.DEFAULT_CONFIG
    assert run_config.get_capacity_mode(config) == {'capacity': 20, 'committee_count': None}
    assert run_config.get_num_days(config) == 5
    assert run_config.get_periods_per_day(config) == 1
    assert run_config.get_seed(config) is None


def test_values_override_defaults(tmp_path):
    path = write_config(tmp_path, [
        "committee_count,6",
        "separate_stages,yes",
        "periods_per_day,\"2,1,1\"",
        "seed,11",
        "school_name,Al Noor",
        "prefix_Grade 10,100",
    ])
    config = run_config.load_config(path)
    assert run_config.get_capacity_mode(config) == {'capacity': None, 'committee_count': 6}
    assert config['separate_stages'] == "yes"
    assert run_config.get_periods_per_day(config) == [2, 1, 1]
    assert run_config.get_num_days(config) == 3
    assert run_config.get_seed(config) == 11
    assert config['school_name'] == "Al Noor"
    assert run_config.get_stage_prefix(config, "Grade 10", 0) == "100"
    assert run_config.get_stage_prefix(config, "Grade 11", 1) == "20"


def test_bad_columns(tmp_path):
    path = tmp_path / "config.csv"
    path.write_text("key,val\ncapacity,10\n", encoding="utf-8")
    with pytest.raises(ValueError):
        run_config.load_config(str(path))
