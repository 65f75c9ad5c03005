from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import re

BBOX_RE = re.compile(r"bbox (\d+)\s+(\d+)\s+(\d+)\s+(\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x1, y1, x2, y2 = map(int, m.groups())
    return x1, y1, x2, y2

def within_bbox(bbox: Tuple[int,int,int,int], box: "BBox") -> bool:
    X1, Y1, X2, Y2 = bbox
    return (box.left >= X1 and box.top >= Y1 and box.right <= X2 and box.bottom <= Y2)

@dataclass(frozen=True)
class BBox:
    """Bounding box en píxeles; `top` crece hacia abajo."""
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def center_x(self) -> int:
        return self.left + self.width // 2

@dataclass(frozen=True)
class Token:
    """Palabra reconocida por el OCR. `box` es None si el motor no dio geometría."""
    text: str
    box: Optional[BBox] = None

# Tokens de una fila visual, ordenados por box.left
Row = List[Token]

@dataclass(frozen=True)
class LogicalColumn:
    label: str
    center_x: int

@dataclass(frozen=True)
class PlayerScore:
    """Registro de salida. Los puntajes se mantienen como texto tal cual los leyó el OCR."""
    name: str
    games: Tuple[str, str, str]
    scratch: str
    handicap: str
    total: str

    FIELDS = ("name", "game1", "game2", "game3", "scratch", "handicap", "total")

    @classmethod
    def from_values(cls, values: Sequence[str]) -> "PlayerScore":
        cells = [(v or "").strip() for v in list(values)[:len(cls.FIELDS)]]
        cells += [""] * (len(cls.FIELDS) - len(cells))
        name, g1, g2, g3, scratch, handicap, total = cells
        return cls(name=name, games=(g1, g2, g3), scratch=scratch, handicap=handicap, total=total)

    def to_row(self) -> List[str]:
        return [self.name, *self.games, self.scratch, self.handicap, self.total]

    def to_dict(self) -> Dict[str, object]:
        data = asdict(self)
        data["games"] = list(self.games)
        return data
