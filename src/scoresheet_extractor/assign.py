from __future__ import annotations
from typing import List, Sequence

from .structures import LogicalColumn, Row

def assign_row_to_columns(row: Row,
                          columns: Sequence[LogicalColumn],
                          player_boundary: int,
                          threshold: int = 40
                          ) -> List[str]:
    """Asigna cada token de una fila de datos a una columna lógica según su centro horizontal.

    La columna 0 (nombre) toma todo token con centro <= `player_boundary + threshold`.
    Cada columna restante toma, de forma independiente, los tokens sobrantes cuyo
    centro esté a menos de `threshold` del suyo; un token puede caer en dos
    columnas o en ninguna.
    """
    if not columns:
        return [" ".join(t.text for t in row)]

    cells = [""] * len(columns)
    player_words = [t for t in row if t.box is not None and t.box.center_x <= player_boundary + threshold]
    cells[0] = " ".join(t.text for t in player_words)

    remaining = [t for t in row if t not in player_words]
    for idx in range(1, len(columns)):
        col_x = columns[idx].center_x
        words = [t for t in remaining if t.box is not None and abs(t.box.center_x - col_x) < threshold]
        cells[idx] = " ".join(t.text for t in words)
    return cells
