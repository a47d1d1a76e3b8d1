from __future__ import annotations
import os
import pytest

from lineup_core.config import (
    DEFAULT_FORMATIONS_YAML, DEFAULT_FORMATION, ensure_assets_exist, load_formations_yaml,
    parse_formations, save_formations_yaml, settings_from_formation, default_settings,
)
from lineup_core.constants import Role
from lineup_core.csv_io import parse_roster_csv


def test_default_formations_parse():
    formations = parse_formations(DEFAULT_FORMATIONS_YAML)
    assert DEFAULT_FORMATION in formations
    assert sum(formations[DEFAULT_FORMATION].values()) == default_settings().total_slots

def test_unknown_role_or_bad_count_rejected():
    with pytest.raises(ValueError):
        parse_formations("x:\n  Sweeper: 1\n")
    with pytest.raises(ValueError):
        parse_formations("x:\n  Goalie: -1\n")
    with pytest.raises(ValueError):
        parse_formations("- Goalie\n")

def test_settings_from_formation():
    formations = parse_formations(DEFAULT_FORMATIONS_YAML)
    s = settings_from_formation(formations, "9v9 1-3-3-2", 1, 4)
    assert s.count_for(Role.FORWARD) == 2
    assert (s.min_segments_per_game, s.max_segments_per_game) == (1, 4)
    with pytest.raises(ValueError):
        settings_from_formation(formations, "nope", 1, 4)

def test_assets_written_once(tmp_path):
    base = str(tmp_path / "assets")
    ensure_assets_exist(base)
    path = os.path.join(base, "formations.yaml")
    save_formations_yaml(path, "mini:\n  Goalie: 1\n")
    ensure_assets_exist(base)
    assert list(load_formations_yaml(path)) == ["mini"]

    with open(os.path.join(base, "sample_roster.csv"), "rb") as f:
        roster = parse_roster_csv(f)
    assert len(roster) == 11
    assert roster[0].name == "Abel"
    assert roster[0].count_for(Role.GOALIE) == 4
