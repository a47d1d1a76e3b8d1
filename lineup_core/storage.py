"""
JSON-file persistence for roster, settings, last lineup and game history.
One file per key under a data directory.
"""
from __future__ import annotations
import json
import logging
import os
from typing import List

from pydantic import TypeAdapter, ValidationError

from .models import Player, Settings, Segment, HistoryEntry

logger = logging.getLogger(__name__)

PLAYERS_FILE = "players.json"
LINEUP_FILE = "last_lineup.json"
SETTINGS_FILE = "settings.json"
HISTORY_FILE = "history.json"

_players = TypeAdapter(List[Player])
_plan = TypeAdapter(List[Segment])
_history = TypeAdapter(List[HistoryEntry])


class LocalStore:
    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def _path(self, fname: str) -> str:
        return os.path.join(self.data_dir, fname)

    def _read(self, fname: str):
        path = self._path(fname)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("could not read %s: %s", path, e)
            return None

    def _write(self, fname: str, payload: bytes):
        os.makedirs(self.data_dir, exist_ok=True)
        with open(self._path(fname), "wb") as f:
            f.write(payload)

    def _load(self, fname: str, adapter: TypeAdapter, default):
        raw = self._read(fname)
        if raw is None:
            return default
        try:
            return adapter.validate_python(raw)
        except ValidationError as e:
            logger.warning("ignoring invalid %s: %s", fname, e)
            return default

    # ---- roster ----
    def load_players(self) -> List[Player]:
        return self._load(PLAYERS_FILE, _players, [])

    def save_players(self, players: List[Player]):
        self._write(PLAYERS_FILE, _players.dump_json(players, indent=2))

    # ---- settings ----
    def load_settings(self) -> Settings:
        return self._load(SETTINGS_FILE, TypeAdapter(Settings), Settings())

    def save_settings(self, settings: Settings):
        self._write(SETTINGS_FILE, settings.model_dump_json(indent=2).encode("utf-8"))

    # ---- last lineup ----
    def load_lineup(self) -> List[Segment]:
        return self._load(LINEUP_FILE, _plan, [])

    def save_lineup(self, plan: List[Segment]):
        self._write(LINEUP_FILE, _plan.dump_json(plan, indent=2))

    # ---- history ----
    def load_history(self) -> List[HistoryEntry]:
        return self._load(HISTORY_FILE, _history, [])

    def save_history(self, history: List[HistoryEntry]):
        self._write(HISTORY_FILE, _history.dump_json(history, indent=2))

    def clear(self):
        for fname in (PLAYERS_FILE, LINEUP_FILE, SETTINGS_FILE, HISTORY_FILE):
            path = self._path(fname)
            if os.path.exists(path):
                os.remove(path)
