from __future__ import annotations
from lineup_core.config import default_settings
from lineup_core.constants import Role
from lineup_core.engine_test_helpers import quick_player
from lineup_core.models import Settings
from lineup_core.validation import validate_roster, validate_settings, players_below_minimum


def _roster(n):
    return [quick_player(f"P{i}") for i in range(n)]

def test_default_settings_with_full_roster_is_clean():
    assert validate_settings(_roster(11), default_settings()) == []

def test_min_above_max_is_reported():
    s = Settings(min_segments_per_game=3, max_segments_per_game=2)
    errs = validate_settings(_roster(11), s)
    assert any("greater than the maximum" in e for e in errs)

def test_not_enough_active_players():
    roster = _roster(6) + [quick_player("Out", active=False)]
    errs = validate_settings(roster, default_settings())
    assert errs == ["Not enough active players (6) for the formation (7 positions)."]

def test_no_players_and_empty_formation():
    s = Settings(roles_and_counts={r: 0 for r in Role})
    errs = validate_settings([], s)
    assert "Formation has no positions to fill." in errs
    assert "No active players." in errs

def test_minimum_that_cannot_be_met_is_a_warning():
    s = Settings(roles_and_counts={Role.GOALIE: 1}, min_segments_per_game=2, max_segments_per_game=3)
    errs = validate_settings(_roster(3), s)
    assert len(errs) == 1
    assert errs[0].startswith("Warning")

def test_roster_names_must_be_unique_and_present():
    roster = [quick_player("A"), quick_player("A"), quick_player(" ")]
    errs = validate_roster(roster)
    assert "Every player needs a name." in errs
    assert "Duplicate player names: A" in errs

def test_players_below_minimum_ignores_inactive():
    roster = [quick_player("A", this_game=1), quick_player("B", this_game=2), quick_player("C", active=False)]
    assert players_below_minimum(roster, 2) == ["A"]
