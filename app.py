from __future__ import annotations
import logging
import os
from typing import List

import streamlit as st

from lineup_core.constants import ROLE_ORDER
from lineup_core.config import (
    DEFAULT_FORMATION,
    ensure_assets_exist,
    load_formations_yaml,
    settings_from_formation,
)
from lineup_core.csv_io import (
    parse_roster_csv,
    build_template_csv,
    roster_to_dataframe,
    dataframe_to_roster,
    roster_to_csv_bytes,
    new_player,
)
from lineup_core.engine import allocate_game
from lineup_core.history import append_history, export_history_csv, plan_to_dataframe, roster_summary_dataframe
from lineup_core.models import Player, Settings, SegmentSlot
from lineup_core.storage import LocalStore
from lineup_core.validation import validate_roster, validate_settings, players_below_minimum

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

# -----------------------------
# Page config
# -----------------------------
st.set_page_config(layout="wide", page_title="Soccer Lineup Generator")

BASE_DIR = os.path.dirname(__file__)
ASSETS_DIR = os.path.join(BASE_DIR, "assets")
ensure_assets_exist(ASSETS_DIR)
store = LocalStore(os.path.join(BASE_DIR, ".data"))

# -----------------------------
# Session state init
# -----------------------------
def _ensure_state():
    ss = st.session_state
    if ss.get("_loaded_once"):
        return
    ss["roster"] = [p.model_dump() for p in store.load_players()]
    ss["settings"] = store.load_settings().model_dump()
    ss["lineup"] = [[s.model_dump() for s in seg] for seg in store.load_lineup()]
    ss["formations"] = load_formations_yaml(os.path.join(ASSETS_DIR, "formations.yaml"))
    ss["_loaded_once"] = True

_ensure_state()

def _roster() -> List[Player]:
    return [Player(**p) for p in st.session_state["roster"]]

def _set_roster(players: List[Player]):
    st.session_state["roster"] = [p.model_dump() for p in players]
    store.save_players(players)

def _settings_obj() -> Settings:
    return Settings(**st.session_state["settings"])

def _set_settings(s: Settings):
    st.session_state["settings"] = s.model_dump()
    store.save_settings(s)

# -----------------------------
# Sidebar: game settings
# -----------------------------
def settings_sidebar():
    settings = _settings_obj()
    formations = st.session_state["formations"]
    with st.sidebar:
        st.header("Game Settings")
        names = list(formations.keys())
        preset = st.selectbox("Formation", ["(custom)"] + names, index=0, key="preset")
        lo = st.number_input("Min quarters per game", 0, 4, settings.min_segments_per_game, key="min_q")
        hi = st.number_input("Max quarters per game", 0, 4, settings.max_segments_per_game, key="max_q")
        st.divider()
        if preset != "(custom)":
            settings = settings_from_formation(formations, preset, int(lo), int(hi))
            for role in ROLE_ORDER:
                st.write(f"{role.value}s: **{settings.count_for(role)}**")
        else:
            counts = {
                role: st.number_input(f"{role.value}s", 0, 11, settings.count_for(role), key=f"count_{role.value}")
                for role in ROLE_ORDER
            }
            settings = Settings(
                roles_and_counts=counts,
                min_segments_per_game=int(lo),
                max_segments_per_game=int(hi),
            )
        if settings.model_dump() != st.session_state["settings"]:
            _set_settings(settings)
        st.caption(f"Typical small-sided setup: {DEFAULT_FORMATION}")

# -----------------------------
# Roster editor
# -----------------------------
def roster_section():
    st.subheader("Players")
    c1, c2, c3 = st.columns([1, 1, 2])
    with c1:
        if st.button("Add Player", key="add_player"):
            roster = _roster()
            roster.append(new_player(roster))
            _set_roster(roster)
    with c2:
        st.download_button("Download CSV Template", data=build_template_csv(), file_name="roster_template.csv", key="dl_tpl")
        st.download_button("Export Roster CSV", data=roster_to_csv_bytes(_roster()), file_name="roster.csv", key="dl_roster")
    with c3:
        up = st.file_uploader("Upload Roster CSV", type=["csv"], key="uploader_roster")
        if up is not None and st.button("Replace roster with upload", key="use_upload"):
            try:
                players = parse_roster_csv(up.getvalue())
            except ValueError as e:
                st.error(f"Import error: {e}")
            else:
                _set_roster(players)
                st.success(f"Loaded {len(players)} players.")

    edited = st.data_editor(
        roster_to_dataframe(_roster()),
        num_rows="dynamic",
        key="roster_editor",
        use_container_width=True,
        column_config={
            "Name": st.column_config.TextColumn("Name", required=True),
            "Active": st.column_config.CheckboxColumn("Active"),
        },
    )
    try:
        players = dataframe_to_roster(edited)
    except ValueError as e:
        st.error(str(e))
        return
    # keep this-game counts from the last run for the summary table
    prev = {p.name: p.segments_this_game for p in _roster()}
    for p in players:
        p.segments_this_game = prev.get(p.name, 0)
    if [p.model_dump() for p in players] != st.session_state["roster"]:
        _set_roster(players)

# -----------------------------
# Generate + display
# -----------------------------
def _generate():
    roster, settings = _roster(), _settings_obj()
    msgs = validate_roster(roster) + validate_settings(roster, settings)
    blocking = [m for m in msgs if not m.startswith("Warning")]
    for m in msgs:
        (st.warning if m.startswith("Warning") else st.error)(m)
    if blocking:
        return
    result = allocate_game(roster, settings)
    _set_roster(result.updated_roster)
    st.session_state["lineup"] = [[s.model_dump() for s in seg] for seg in result.plan]
    store.save_lineup(result.plan)
    store.save_history(append_history(store.load_history(), result.plan))

def lineup_section():
    settings = _settings_obj()
    c1, c2 = st.columns([1, 5])
    with c1:
        if st.button("Generate Lineup", type="primary", key="generate"):
            _generate()
    with c2:
        if st.button("Clear All Data", key="clear_all"):
            st.session_state["confirm_clear"] = True
        if st.session_state.get("confirm_clear"):
            st.warning("This removes the saved roster, settings, lineup and history.")
            if st.button("Yes, clear everything", key="confirm_clear_btn"):
                store.clear()
                for k in ("roster", "settings", "lineup", "_loaded_once", "confirm_clear"):
                    st.session_state.pop(k, None)
                st.rerun()

    plan = [[SegmentSlot(**s) for s in seg] for seg in st.session_state.get("lineup", [])]
    if plan:
        st.subheader("Game Plan")
        st.dataframe(plan_to_dataframe(plan), use_container_width=True)

    roster = _roster()
    if roster:
        st.subheader("Playtime")
        summary = roster_summary_dataframe(roster, settings.min_segments_per_game)
        st.dataframe(
            summary.style.apply(
                lambda row: ["background-color: #fef3c7" if row["Below Minimum"] else "" for _ in row], axis=1
            ),
            use_container_width=True,
        )
        short = players_below_minimum(roster, settings.min_segments_per_game)
        if plan and short:
            st.info(f"Below {settings.min_segments_per_game} quarters this game: {', '.join(short)}")

def history_section():
    history = store.load_history()
    with st.expander(f"Previous Game Plans ({len(history)})"):
        if not history:
            st.write("No previous plans found.")
            return
        st.download_button("Download History CSV", data=export_history_csv(history), file_name="game_history.csv", key="dl_hist")
        for entry in reversed(history):
            st.markdown(f"**Game on {entry.date:%Y-%m-%d %H:%M}**")
            st.dataframe(plan_to_dataframe(entry.plan), use_container_width=True)

# -----------------------------
# Layout render
# -----------------------------
st.title("Soccer Lineup Generator")
settings_sidebar()
roster_section()
lineup_section()
history_section()
