from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .structures import BBox, Token

log = logging.getLogger(__name__)


class OcrError(RuntimeError):
    """Fallo del motor OCR al procesar una imagen."""


class ImageDecodeError(OcrError):
    """La imagen no se pudo abrir o decodificar."""


@dataclass
class OcrResult:
    tokens: List[Token] = field(default_factory=list)
    text: str = ""


def _import_backends():
    try:
        from PIL import Image
    except ImportError as exc:
        raise RuntimeError("Pillow es requerido para reconocer imágenes.") from exc

    try:
        import pytesseract
    except ImportError as exc:
        raise RuntimeError("pytesseract es requerido para reconocer imágenes.") from exc
    return Image, pytesseract


def _open_image(Image, image_path: str):
    try:
        return Image.open(str(image_path)).convert("RGB")
    except (OSError, ValueError) as exc:
        raise ImageDecodeError(f"No se pudo decodificar la imagen {image_path}: {exc}") from exc


def tokens_from_tesseract_data(data: Dict[str, list]) -> OcrResult:
    """
    Convierte la salida de `pytesseract.image_to_data(..., output_type=DICT)`
    en tokens posicionados y texto crudo (una línea por block/par/line).
    """
    tokens: List[Token] = []
    lines: Dict[Tuple[int, int, int], List[str]] = {}
    for i, raw_text in enumerate(data.get("text", [])):
        text = (raw_text or "").strip()
        if not text:
            continue
        left, top = int(data["left"][i]), int(data["top"][i])
        width, height = int(data["width"][i]), int(data["height"][i])
        tokens.append(Token(text=text, box=BBox(left, top, left + width, top + height)))
        key = (int(data["block_num"][i]), int(data["par_num"][i]), int(data["line_num"][i]))
        lines.setdefault(key, []).append(text)
    raw = "\n".join(" ".join(words) for _, words in sorted(lines.items()))
    return OcrResult(tokens=tokens, text=raw)


def recognize_image(
    image_path: str,
    *,
    lang: str = "eng",
    psm: int = 6,
    oem: int = 3,
) -> OcrResult:
    """Ejecuta Tesseract sobre la imagen y devuelve tokens con bbox y el texto crudo."""
    Image, pytesseract = _import_backends()
    image = _open_image(Image, image_path)

    custom_config = f"--oem {oem} --psm {psm}"
    log.debug("Reconociendo %s (lang=%s, config=%s)", image_path, lang, custom_config)
    try:
        data = pytesseract.image_to_data(
            image, lang=lang, config=custom_config, output_type=pytesseract.Output.DICT
        )
    except pytesseract.TesseractError as exc:
        raise OcrError(str(exc)) from exc
    except pytesseract.TesseractNotFoundError as exc:
        raise OcrError("Tesseract no está instalado o no está en el PATH.") from exc

    result = tokens_from_tesseract_data(data)
    log.info("OCR: %d tokens reconocidos en %s", len(result.tokens), image_path)
    return result
