# src/scoresheet_extractor/table.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from .assign import assign_row_to_columns
from .config import DEFAULT_CONFIG, ExtractorConfig
from .header import locate_header_row, merge_header_columns, player_column_boundary
from .rows import cluster_rows
from .structures import LogicalColumn, PlayerScore, Row, Token

log = logging.getLogger(__name__)

class ReconstructionStatus(str, Enum):
    OK = "ok"
    NO_TOKENS = "no_tokens"
    NO_HEADER_FOUND = "no_header_found"

@dataclass
class TableReconstruction:
    scores: List[PlayerScore] = field(default_factory=list)
    columns: List[LogicalColumn] = field(default_factory=list)
    header_index: Optional[int] = None
    status: ReconstructionStatus = ReconstructionStatus.OK

def _is_stop_row(row: Row, stop_words: Sequence[str]) -> bool:
    stops = {w.lower() for w in stop_words}
    return any(t.text.lower() in stops for t in row)

def build_player_scores(rows: Sequence[Row],
                        header_index: int,
                        columns: Sequence[LogicalColumn],
                        player_boundary: int,
                        config: ExtractorConfig = DEFAULT_CONFIG
                        ) -> List[PlayerScore]:
    """
    Recorre las filas posteriores a la cabecera y emite un PlayerScore por fila.
    Una fila con "Team" corta el recorrido: a partir de ahí es el resumen del equipo.
    """
    scores: List[PlayerScore] = []
    for row in rows[header_index + 1:]:
        if _is_stop_row(row, config.stop_words):
            log.debug("Fila de equipo encontrada; se detiene la lectura.")
            break
        cells = assign_row_to_columns(row, columns, player_boundary, threshold=config.column_threshold)
        while len(cells) < len(columns):
            cells.append("")
        scores.append(PlayerScore.from_values(cells))
    return scores

def reconstruct_table(tokens: Iterable[Token],
                      config: ExtractorConfig = DEFAULT_CONFIG
                      ) -> TableReconstruction:
    """Reconstruye la tabla de puntajes a partir de tokens posicionados.

    Nunca lanza por entrada ruidosa: sin tokens o sin cabecera devuelve una
    reconstrucción vacía con el estado correspondiente.
    """
    rows = cluster_rows(tokens, tolerance=config.row_tolerance)
    if not rows:
        log.warning("No hay tokens con bbox para reconstruir la tabla.")
        return TableReconstruction(status=ReconstructionStatus.NO_TOKENS)
    log.info("Se agruparon los tokens en %d filas.", len(rows))

    header_index = locate_header_row(rows, config.vocabulary,
                                     min_labels=config.min_header_labels,
                                     max_distance=config.max_edit_distance)
    if header_index is None:
        log.warning("No se encontró la fila de cabecera.")
        return TableReconstruction(status=ReconstructionStatus.NO_HEADER_FOUND)

    columns = merge_header_columns(rows[header_index])
    log.info("Cabecera detectada en la fila %d: %s", header_index, [c.label for c in columns])

    boundary = player_column_boundary(columns, fallback_offset=config.player_fallback_offset)
    scores = build_player_scores(rows, header_index, columns, boundary, config)
    log.info("Se reconstruyeron %d registros de jugadores.", len(scores))
    return TableReconstruction(scores=scores, columns=columns, header_index=header_index)

def reconstruct_scores(tokens: Iterable[Token],
                       config: ExtractorConfig = DEFAULT_CONFIG
                       ) -> List[PlayerScore]:
    return reconstruct_table(tokens, config).scores
