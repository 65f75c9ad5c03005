# src/scoresheet_extractor/rows.py
from __future__ import annotations
import logging
from typing import Iterable, List

from .structures import Row, Token

log = logging.getLogger(__name__)

def cluster_rows(tokens: Iterable[Token], tolerance: int = 15) -> List[Row]:
    """Agrupa tokens en filas visuales por proximidad vertical.

    Cada token se une al primer cluster cuyo token *inicial* tenga un `top`
    a distancia <= tolerance; si ninguno sirve, abre un cluster nuevo.
    La comparación es contra el primer miembro, no contra un promedio.
    Tokens sin bbox se descartan. Devuelve filas de arriba a abajo,
    cada una ordenada por `left`.
    """
    tokens = list(tokens)
    placed = [t for t in tokens if t.box is not None]
    if len(placed) != len(tokens):
        log.debug("Se descartaron %d tokens sin bbox.", len(tokens) - len(placed))
    if not placed:
        return []

    clusters: List[List[Token]] = []
    for tok in sorted(placed, key=lambda t: t.box.top):
        top = tok.box.top
        for cluster in clusters:
            if abs(cluster[0].box.top - top) <= tolerance:
                cluster.append(tok)
                break
        else:
            clusters.append([tok])

    return [sorted(cluster, key=lambda t: t.box.left) for cluster in clusters]
