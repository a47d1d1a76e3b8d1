from __future__ import annotations
import io
from typing import Dict, Iterable, List
import pandas as pd

from .constants import CSV_HEADERS, HEADER_ALIASES, ROLE_COLUMNS, ROLE_ORDER, TRUTHY, normalize_name
from .models import Player

def _header_map(cols: Iterable[str]) -> Dict[str, str]:
    """
    Build a mapping from provided column -> canonical header.
    Case-insensitive, uses HEADER_ALIASES, leaves unknown columns untouched.
    """
    canon = {c.lower(): c for c in CSV_HEADERS}
    out = {}
    for c in cols:
        lc = str(c).strip().lower()
        if lc in canon:
            out[c] = canon[lc]
            continue
        mapped = None
        for k, aliases in HEADER_ALIASES.items():
            if lc == k.lower() or lc in aliases:
                mapped = k
                break
        out[c] = mapped if mapped else c
    return out

def _as_count(v) -> int:
    if v is None or (isinstance(v, str) and v.strip() == ""):
        return 0
    n = pd.to_numeric(v, errors="coerce")
    if pd.isna(n):
        return 0
    return max(0, int(n))

def _as_bool(v) -> bool:
    if isinstance(v, bool):
        return v
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return True
    s = str(v).strip().lower()
    if s == "":
        return True
    return s in TRUTHY

def _row_to_player(row: Dict) -> Player:
    counts = {r: _as_count(row.get(ROLE_COLUMNS[r], 0)) for r in ROLE_ORDER}
    return Player(
        name=normalize_name(row.get("Name", "")),
        role_counts=counts,
        total_segments=_as_count(row.get("TotalQuarters", 0)),
        active=_as_bool(row.get("Active", True)),
    )

def _to_players(df: pd.DataFrame) -> List[Player]:
    players: List[Player] = []
    seen = set()
    for _, r in df.iterrows():
        raw = r.get("Name")
        # blank rows added in the data editor come through as NaN
        if raw is None or pd.isna(raw):
            continue
        name = normalize_name(raw)
        if name == "":
            continue
        if name in seen:
            raise ValueError(f"Duplicate player name: {name}")
        seen.add(name)
        players.append(_row_to_player(r.to_dict()))
    return players

def parse_roster_csv(file) -> List[Player]:
    """
    Parse uploaded CSV (bytes or file-like).
    Applies header aliasing and returns a list[Player].
    """
    if isinstance(file, (bytes, bytearray)):
        df = pd.read_csv(io.BytesIO(file), dtype=str, keep_default_na=False)
    else:
        df = pd.read_csv(file, dtype=str, keep_default_na=False)

    df = df.rename(columns=_header_map(df.columns))
    if "Name" not in df.columns:
        raise ValueError("Roster CSV needs a Name column.")

    # missing counters default to zero, missing Active to present
    for k in CSV_HEADERS:
        if k not in df.columns:
            df[k] = "1" if k == "Active" else "0"

    return _to_players(df[CSV_HEADERS].copy())

def build_template_csv() -> bytes:
    example = (
        ",".join(CSV_HEADERS) + "\n"
        "Alex Quinn,0,0,0,0,0,1\n"
    )
    return example.encode("utf-8")

def roster_to_dataframe(players: List[Player]) -> pd.DataFrame:
    rows = []
    for p in players:
        row = {"Name": p.name}
        for r in ROLE_ORDER:
            row[ROLE_COLUMNS[r]] = p.count_for(r)
        row["TotalQuarters"] = p.total_segments
        row["Active"] = p.active
        rows.append(row)
    return pd.DataFrame(rows, columns=CSV_HEADERS)

def dataframe_to_roster(df: pd.DataFrame) -> List[Player]:
    return _to_players(df)

def roster_to_csv_bytes(players: List[Player]) -> bytes:
    buf = io.StringIO()
    roster_to_dataframe(players).to_csv(buf, index=False)
    return buf.getvalue().encode("utf-8")

def new_player(roster: List[Player]) -> Player:
    """Blank player named 'Player N', skipping names already taken."""
    taken = {p.name for p in roster}
    n = len(roster) + 1
    while f"Player {n}" in taken:
        n += 1
    return Player(name=f"Player {n}")
