# lineup_core/config.py
from __future__ import annotations
import os
import textwrap
from typing import Dict

import yaml

from .constants import Role
from .models import Settings

# ===== App defaults =====
DEFAULT_SETTINGS = {
    "max_segments_per_game": 3,
    "min_segments_per_game": 2,
    "roles_and_counts": {
        "Goalie": 1,
        "Defender": 3,
        "Midfielder": 2,
        "Forward": 1,
    },
}

DEFAULT_FORMATION = "7v7 1-3-2-1"

def ensure_assets_exist(base_dir: str = "assets"):
    os.makedirs(base_dir, exist_ok=True)
    formations = os.path.join(base_dir, "formations.yaml")
    if not os.path.exists(formations):
        with open(formations, "w", encoding="utf-8") as f:
            f.write(DEFAULT_FORMATIONS_YAML)
    roster = os.path.join(base_dir, "sample_roster.csv")
    if not os.path.exists(roster):
        with open(roster, "w", encoding="utf-8") as f:
            f.write(DEFAULT_SAMPLE_ROSTER_CSV)

def parse_formations(text: str) -> Dict[str, Dict[Role, int]]:
    obj = yaml.safe_load(text) or {}
    if not isinstance(obj, dict):
        raise ValueError("Formations file must map formation names to role counts.")
    out: Dict[str, Dict[Role, int]] = {}
    for name, counts in obj.items():
        if not isinstance(counts, dict):
            raise ValueError(f"Formation {name} must be a mapping of role -> count.")
        parsed: Dict[Role, int] = {}
        for role, n in counts.items():
            try:
                r = Role(str(role))
            except ValueError:
                raise ValueError(f"Formation {name}: unknown role '{role}'.") from None
            if not isinstance(n, int) or n < 0:
                raise ValueError(f"Formation {name}: count for {r.value} must be a non-negative integer.")
            parsed[r] = n
        out[str(name)] = parsed
    return out

def load_formations_yaml(path: str) -> Dict[str, Dict[Role, int]]:
    with open(path, "r", encoding="utf-8") as f:
        return parse_formations(f.read())

def save_formations_yaml(path: str, text: str):
    parse_formations(text)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)

def default_settings() -> Settings:
    return Settings(**DEFAULT_SETTINGS)

def settings_from_formation(
    formations: Dict[str, Dict[Role, int]],
    name: str,
    min_segments_per_game: int,
    max_segments_per_game: int,
) -> Settings:
    if name not in formations:
        raise ValueError(f"Unknown formation: {name}")
    return Settings(
        roles_and_counts=dict(formations[name]),
        min_segments_per_game=min_segments_per_game,
        max_segments_per_game=max_segments_per_game,
    )

# ===== Formation presets (counts per quarter) =====
DEFAULT_FORMATIONS_YAML = textwrap.dedent("""\
7v7 1-3-2-1:
  Goalie: 1
  Defender: 3
  Midfielder: 2
  Forward: 1
7v7 1-2-3-1:
  Goalie: 1
  Defender: 2
  Midfielder: 3
  Forward: 1
9v9 1-3-3-2:
  Goalie: 1
  Defender: 3
  Midfielder: 3
  Forward: 2
11v11 1-4-4-2:
  Goalie: 1
  Defender: 4
  Midfielder: 4
  Forward: 2
""")

# ===== Sample roster (counts carried over from prior games) =====
DEFAULT_SAMPLE_ROSTER_CSV = textwrap.dedent("""\
Name,GoalieCount,DefenderCount,MidfielderCount,ForwardCount,TotalQuarters,Active
Abel,4,5,4,2,15,1
Taj,2,7,6,1,16,1
Talon,2,8,4,2,16,1
Xander,2,7,3,2,14,1
James,2,5,6,3,16,1
Zeke,2,8,4,2,16,1
Asher,2,6,4,1,13,1
Ryder,2,6,5,2,15,1
Grayson,2,7,4,3,16,1
Bronx,2,7,4,3,16,1
Tadhg,2,6,4,3,15,1
""")
