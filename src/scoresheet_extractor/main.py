from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, ExtractorConfig
from .exporters import scores_to_csv, scores_to_json
from .ocr_utils import ImageDecodeError, OcrError, recognize_image
from .parser import hocr_plain_text, parse_hocr_text
from .structures import PlayerScore, Token, within_bbox
from .table import ReconstructionStatus, reconstruct_table

log = logging.getLogger(__name__)


@dataclass
class ExtractionResult:
    scores: List[PlayerScore] = field(default_factory=list)
    recognized_text: str = ""
    status: Optional[ReconstructionStatus] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_message is None


def _load_hocr(hocr_path: str, table_bbox: Optional[Tuple[int, int, int, int]]) -> Tuple[List[Token], str]:
    log.info("Parseando HOCR desde: %s", hocr_path)
    with open(hocr_path, "r", encoding="utf-8") as fh:
        raw = fh.read()
    return parse_hocr_text(raw, table_bbox=table_bbox), hocr_plain_text(raw)


def _load_image(
    image_path: str,
    table_bbox: Optional[Tuple[int, int, int, int]],
    ocr_lang: str,
    ocr_psm: int,
) -> Tuple[List[Token], str]:
    log.info("Reconociendo imagen: %s", image_path)
    result = recognize_image(image_path, lang=ocr_lang, psm=ocr_psm)
    tokens = result.tokens
    if table_bbox:
        tokens = [t for t in tokens if t.box and within_bbox(table_bbox, t.box)]
    return tokens, result.text


def extract_scores(
    hocr_path: Optional[str] = None,
    image_path: Optional[str] = None,
    *,
    config: ExtractorConfig = DEFAULT_CONFIG,
    table_bbox: Optional[Tuple[int, int, int, int]] = None,
    ocr_lang: str = "eng",
    ocr_psm: int = 6,
) -> ExtractionResult:
    """
    Orquesta la lectura de una hoja de puntajes: entrada (HOCR o imagen) → tokens
    → reconstrucción de la tabla. Los fallos de lectura/OCR se devuelven como
    mensajes opacos en `error_message`; la reconstrucción en sí nunca falla.
    """
    if bool(hocr_path) == bool(image_path):
        raise ValueError("Se requiere exactamente uno de hocr_path o image_path.")

    try:
        if hocr_path:
            tokens, text = _load_hocr(hocr_path, table_bbox)
        else:
            tokens, text = _load_image(image_path, table_bbox, ocr_lang, ocr_psm)
    except ImageDecodeError as exc:
        log.error("No se pudo decodificar la imagen: %s", exc)
        return ExtractionResult(error_message="Failed to decode image.")
    except OcrError as exc:
        log.error("OCR falló: %s", exc)
        return ExtractionResult(error_message=f"OCR failed: {str(exc) or 'unknown'}")
    except Exception as exc:
        log.error("Error leyendo la entrada: %s", exc, exc_info=True)
        return ExtractionResult(error_message=f"Error: {str(exc) or 'unknown'}")

    log.debug("Texto OCR crudo:\n%s", text)
    reconstruction = reconstruct_table(tokens, config)
    return ExtractionResult(
        scores=reconstruction.scores,
        recognized_text=text,
        status=reconstruction.status,
    )


def write_outputs(
    result: ExtractionResult,
    csv_path: str,
    *,
    json_path: Optional[str] = None,
    text_path: Optional[str] = None,
) -> None:
    scores_to_csv(result.scores, csv_path)
    log.info("CSV escrito en: %s (%d filas)", csv_path, len(result.scores))
    if json_path:
        scores_to_json(result.scores, json_path)
        log.info("JSON escrito en: %s", json_path)
    if text_path:
        Path(text_path).parent.mkdir(parents=True, exist_ok=True)
        Path(text_path).write_text(result.recognized_text, encoding="utf-8")
        log.info("Texto OCR crudo escrito en: %s", text_path)
