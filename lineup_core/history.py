from __future__ import annotations
from datetime import datetime
from typing import List, Optional
import csv
import io

import pandas as pd

from .constants import SEGMENT_LABEL, ROLE_ORDER
from .models import HistoryEntry, Player, Segment

def append_history(history: List[HistoryEntry], plan: List[Segment], when: Optional[datetime] = None) -> List[HistoryEntry]:
    entry = HistoryEntry(date=when or datetime.now(), plan=[[s.model_copy() for s in seg] for seg in plan])
    history.append(entry)
    return history

def export_history_csv(history: List[HistoryEntry]) -> bytes:
    """
    Shape: per game a 'Game <date>' row, then for each quarter a 'Quarter N' row,
    Player,Role rows, then a blank line.
    """
    buf = io.StringIO()
    w = csv.writer(buf)
    for entry in history:
        w.writerow([f"Game {entry.date.isoformat(timespec='minutes')}"])
        for idx, segment in enumerate(entry.plan, start=1):
            w.writerow([f"{SEGMENT_LABEL} {idx}"])
            w.writerow(["Player", "Role"])
            for slot in segment:
                w.writerow([slot.name, slot.role])
            w.writerow([])  # blank separator
    return buf.getvalue().encode("utf-8")

def plan_to_dataframe(plan: List[Segment]) -> pd.DataFrame:
    # quarters may be short when the roster runs out; pad with blanks
    depth = max((len(seg) for seg in plan), default=0)
    data = {}
    for idx, segment in enumerate(plan, start=1):
        col = [f"{s.name} - {s.role}" for s in segment]
        col += [""] * (depth - len(col))
        data[f"{SEGMENT_LABEL} {idx}"] = col
    return pd.DataFrame(data)

def roster_summary_dataframe(roster: List[Player], min_per_game: int) -> pd.DataFrame:
    rows = []
    for p in roster:
        row = {"Name": p.name}
        for r in ROLE_ORDER:
            row[r.value] = p.count_for(r)
        row["Role Total"] = p.role_total
        row["Total Quarters"] = p.total_segments
        row["This Game"] = p.segments_this_game
        row["Below Minimum"] = p.active and p.segments_this_game < min_per_game
        rows.append(row)
    return pd.DataFrame(rows)
