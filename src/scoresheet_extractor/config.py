# src/scoresheet_extractor/config.py
from __future__ import annotations
import json
import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Tuple

log = logging.getLogger(__name__)

KNOWN_HEADERS: Tuple[str, ...] = ("Player", "Game 1", "Game 2", "Game 3", "Scratch", "Hdcp", "Total")

@dataclass(frozen=True)
class ExtractorConfig:
    """Vocabulario de cabecera y constantes de ajuste para distintas hojas/resoluciones."""
    vocabulary: Tuple[str, ...] = KNOWN_HEADERS
    row_tolerance: int = 15
    min_header_labels: int = 3
    max_edit_distance: int = 3
    column_threshold: int = 40
    player_fallback_offset: int = 200
    stop_words: Tuple[str, ...] = ("Team",)

    def with_overrides(self, **overrides: Any) -> "ExtractorConfig":
        """Devuelve una copia aplicando sólo los valores que no son None."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **_coerce(changes)) if changes else self

DEFAULT_CONFIG = ExtractorConfig()

INT_FIELDS = ("row_tolerance", "min_header_labels", "max_edit_distance",
              "column_threshold", "player_fallback_offset")

def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
    known = {f.name for f in fields(ExtractorConfig)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ValueError(f"Claves de configuración desconocidas: {unknown}")
    out = dict(values)
    for key in INT_FIELDS:
        if key in out:
            value = out[key]
            try:
                if isinstance(value, bool):
                    raise TypeError(value)
                out[key] = int(value)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Valor inválido para {key}: {value!r} (se espera un entero)") from exc
    for key in ("vocabulary", "stop_words"):
        if key in out:
            out[key] = tuple(str(v) for v in out[key])
    return out

def load_config(path: str) -> ExtractorConfig:
    """Lee un JSON con cualquier subconjunto de los campos de ExtractorConfig."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"El archivo de configuración debe contener un objeto JSON: {path}")
    log.debug("Configuración cargada desde %s: %s", path, data)
    return replace(DEFAULT_CONFIG, **_coerce(data))
