# src/scoresheet_extractor/header.py
from __future__ import annotations
import logging
import re
from typing import List, Optional, Sequence

from .matching import closest_header
from .structures import LogicalColumn, Row

log = logging.getLogger(__name__)

DIGITS_RE = re.compile(r"^[0-9]+$")

def locate_header_row(rows: Sequence[Row],
                      vocabulary: Sequence[str],
                      min_labels: int = 3,
                      max_distance: int = 3
                      ) -> Optional[int]:
    """
    Devuelve el índice de la primera fila (de arriba a abajo) con al menos
    `min_labels` etiquetas distintas del vocabulario, o None.
    """
    for i, row in enumerate(rows):
        matched = set()
        for tok in row:
            label = closest_header(tok.text, vocabulary, max_distance=max_distance)
            if label is not None:
                matched.add(label)
        if len(matched) >= min_labels:
            log.debug("Fila %d reconocida como cabecera: %s", i, sorted(matched))
            return i
    return None

def merge_header_columns(header_row: Row) -> List[LogicalColumn]:
    """
    Convierte la fila de cabecera en columnas lógicas.

    "Game" seguido de un token numérico se fusiona en "Game <n>", centrado en
    la unión de ambos bbox. Luego se eliminan etiquetas repetidas conservando
    la primera aparición.
    """
    raw: List[LogicalColumn] = []
    i = 0
    while i < len(header_row):
        tok = header_row[i]
        if tok.text.lower() == "game" and i + 1 < len(header_row):
            nxt = header_row[i + 1]
            if DIGITS_RE.match(nxt.text):
                center_x = (tok.box.left + nxt.box.right) // 2
                raw.append(LogicalColumn(label=f"Game {nxt.text}", center_x=center_x))
                i += 2
                continue
        raw.append(LogicalColumn(label=tok.text, center_x=tok.box.center_x))
        i += 1

    columns: List[LogicalColumn] = []
    seen = set()
    for col in raw:
        if col.label in seen:
            continue
        seen.add(col.label)
        columns.append(col)
    return columns

def player_column_boundary(columns: Sequence[LogicalColumn], fallback_offset: int = 200) -> int:
    """Límite derecho de la columna de nombre: punto medio entre las dos primeras columnas."""
    if not columns:
        raise ValueError("Se requiere al menos una columna lógica.")
    if len(columns) >= 2:
        return (columns[0].center_x + columns[1].center_x) // 2
    return columns[0].center_x + fallback_offset
