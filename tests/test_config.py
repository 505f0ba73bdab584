"""
Tests for configuration loading.
"""

from __future__ import annotations

import pytest

from cohort_tree.config import CohortTreeConfig, get_settings, load_config
from cohort_tree.exceptions import ConfigError


def test_default_config_loads_and_validates():
    cfg = load_config()

    assert isinstance(cfg, CohortTreeConfig)
    assert cfg.logging.level == "INFO"
    assert cfg.validation.strict is False
    assert cfg.drift.root_name == "drift"
    assert cfg.drift.percentile == 0
    assert cfg.drift.thresholds.wild == 1.0


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_user_config_overrides_per_section(tmp_path):
    path = tmp_path / "cohort.yaml"
    path.write_text("drift:\n  percentile: 75\n  thresholds:\n    random: 3\nlogging:\n  level: debug\n")

    cfg = load_config(path)

    assert cfg.drift.percentile == 75
    assert cfg.drift.thresholds.random == 3
    assert cfg.drift.thresholds.loose == 0.5
    assert cfg.drift.root_name == "drift"
    assert cfg.logging.level == "DEBUG"


def test_env_placeholders_expand(tmp_path, monkeypatch):
    monkeypatch.setenv("COHORT_ROOT", "fleet")
    path = tmp_path / "cohort.yaml"
    path.write_text("drift:\n  root_name: ${COHORT_ROOT}\n")

    assert load_config(path).drift.root_name == "fleet"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml")


def test_unknown_key_raises(tmp_path):
    path = tmp_path / "cohort.yaml"
    path.write_text("drift:\n  colour: blue\n")

    with pytest.raises(ConfigError, match="Invalid configuration"):
        load_config(path)


def test_non_mapping_raises(tmp_path):
    path = tmp_path / "cohort.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


def test_thresholds_must_be_ordered(tmp_path):
    path = tmp_path / "cohort.yaml"
    path.write_text("drift:\n  thresholds:\n    loose: 3\n")

    with pytest.raises(ConfigError):
        load_config(path)
