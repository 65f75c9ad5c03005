# src/scoresheet_extractor/exporters.py
from __future__ import annotations
from pathlib import Path
from typing import List, Sequence
import csv
import json

from .structures import PlayerScore

def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

def scores_to_csv(scores: Sequence[PlayerScore], csv_path: str) -> None:
    _ensure_parent_dir(csv_path)
    with open(csv_path, "w", encoding="utf-8-sig", newline="") as f:
        w = csv.writer(f)
        w.writerow(PlayerScore.FIELDS)
        w.writerows(s.to_row() for s in scores)

def scores_to_json(scores: Sequence[PlayerScore], json_path: str) -> None:
    _ensure_parent_dir(json_path)
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump([s.to_dict() for s in scores], f, indent=2, ensure_ascii=False)

def read_scores_csv(csv_path: str) -> List[PlayerScore]:
    """Lee un CSV escrito por `scores_to_csv` (u otro con las mismas columnas)."""
    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        return [PlayerScore.from_values([row.get(k) or "" for k in PlayerScore.FIELDS])
                for row in reader]
