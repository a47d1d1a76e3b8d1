from __future__ import annotations
from datetime import datetime

from lineup_core.constants import Role
from lineup_core.engine_test_helpers import quick_player
from lineup_core.history import append_history
from lineup_core.models import Settings, SegmentSlot
from lineup_core.storage import LocalStore, PLAYERS_FILE


def test_missing_files_give_defaults(tmp_path):
    store = LocalStore(str(tmp_path / "data"))
    assert store.load_players() == []
    assert store.load_settings() == Settings()
    assert store.load_lineup() == []
    assert store.load_history() == []

def test_roundtrip(tmp_path):
    store = LocalStore(str(tmp_path))
    players = [quick_player("A", gk=2, total=9, this_game=3), quick_player("B", active=False)]
    settings = Settings(roles_and_counts={Role.GOALIE: 1, Role.FORWARD: 2}, min_segments_per_game=1)
    plan = [[SegmentSlot(name="A", role="Goalie")]]

    store.save_players(players)
    store.save_settings(settings)
    store.save_lineup(plan)
    store.save_history(append_history([], plan, when=datetime(2024, 9, 7)))

    assert store.load_players() == players
    assert store.load_players()[0].count_for(Role.GOALIE) == 2
    assert store.load_settings() == settings
    assert store.load_lineup() == plan
    assert store.load_history()[0].date == datetime(2024, 9, 7)

def test_corrupt_file_falls_back_to_default(tmp_path):
    (tmp_path / PLAYERS_FILE).write_text("{not json", encoding="utf-8")
    assert LocalStore(str(tmp_path)).load_players() == []

def test_clear_removes_saved_data(tmp_path):
    store = LocalStore(str(tmp_path))
    store.save_players([quick_player("A")])
    store.clear()
    assert store.load_players() == []
    store.clear()
