from __future__ import annotations
import pytest

from lineup_core.constants import Role, CSV_HEADERS
from lineup_core.csv_io import (
    parse_roster_csv, build_template_csv, roster_to_dataframe, dataframe_to_roster, new_player,
)
from lineup_core.engine_test_helpers import quick_player


def test_parse_applies_header_aliases_and_defaults():
    data = (
        "Player,Goalie,Def,Mid,Fwd,Total Quarters\n"
        "  Abel   Smith ,1,2,3,4,10\n"
        ",9,9,9,9,9\n"
        "Taj,,x,0,1,1\n"
    ).encode("utf-8")
    players = parse_roster_csv(data)
    assert [p.name for p in players] == ["Abel Smith", "Taj"]

    abel = players[0]
    assert abel.count_for(Role.GOALIE) == 1
    assert abel.count_for(Role.DEFENDER) == 2
    assert abel.count_for(Role.MIDFIELDER) == 3
    assert abel.count_for(Role.FORWARD) == 4
    assert abel.total_segments == 10
    assert abel.active is True

    # blanks and junk coerce to zero
    assert players[1].count_for(Role.GOALIE) == 0
    assert players[1].count_for(Role.DEFENDER) == 0

def test_parse_reads_active_flag():
    data = b"Name,Active\nA,1\nB,no\nC,\n"
    players = parse_roster_csv(data)
    assert [p.active for p in players] == [True, False, True]

def test_parse_rejects_missing_name_column():
    with pytest.raises(ValueError):
        parse_roster_csv(b"Goalie,Defender\n1,2\n")

def test_parse_rejects_duplicate_names():
    with pytest.raises(ValueError):
        parse_roster_csv(b"Name\nAsher\nAsher\n")

def test_template_has_all_headers():
    first = build_template_csv().decode("utf-8").splitlines()[0]
    assert first.split(",") == CSV_HEADERS
    assert len(parse_roster_csv(build_template_csv())) == 1

def test_dataframe_roundtrip_keeps_counts():
    roster = [quick_player("A", gk=1, df=2, total=7), quick_player("B", fw=3, active=False)]
    df = roster_to_dataframe(roster)
    assert list(df.columns) == CSV_HEADERS
    back = dataframe_to_roster(df)
    assert [(p.name, p.role_counts, p.total_segments, p.active) for p in back] == \
        [(p.name, p.role_counts, p.total_segments, p.active) for p in roster]

def test_new_player_name_is_unique():
    roster = [quick_player("Player 2"), quick_player("X")]
    p = new_player(roster)
    assert p.name == "Player 3"
    assert p.total_segments == 0

def test_player_named_nan_is_kept():
    players = parse_roster_csv(b"Name,GoalieCount\nNan,1\nAbel,2\n")
    assert [p.name for p in players] == ["Nan", "Abel"]
    assert players[0].count_for(Role.GOALIE) == 1

def test_editor_blank_rows_are_skipped():
    df = roster_to_dataframe([quick_player("A")])
    df.loc[len(df)] = [None] * len(df.columns)
    assert [p.name for p in dataframe_to_roster(df)] == ["A"]
