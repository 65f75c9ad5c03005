# src/scoresheet_extractor/parser.py
from __future__ import annotations
from typing import List, Optional, Tuple
from bs4 import BeautifulSoup
from .structures import BBox, Token, parse_bbox, within_bbox

def _load_soup(text: str) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def _read(hocr_path: str) -> str:
    with open(hocr_path, "r", encoding="utf-8") as f:
        return f.read()

def parse_hocr_text(raw: str,
                    table_bbox: Optional[Tuple[int,int,int,int]] = None
                    ) -> List[Token]:
    """
    Extrae tokens de palabras (`ocrx_word`) de todas las páginas.
    Una palabra sin bbox se conserva con box=None; el agrupador de filas la descarta.
    Con `table_bbox` sólo se conservan palabras dentro de ese recorte.
    """
    soup = _load_soup(raw)
    tokens: List[Token] = []
    for w in soup.find_all(class_=lambda c: c and "ocrx_word" in c):
        text = (w.get_text() or "").strip()
        if not text:
            continue

        bb = parse_bbox(w.get("title", ""))
        box = BBox(*bb) if bb else None
        if table_bbox and (box is None or not within_bbox(table_bbox, box)):
            continue
        tokens.append(Token(text=text, box=box))
    return tokens

def parse_hocr_words(hocr_path: str,
                     table_bbox: Optional[Tuple[int,int,int,int]] = None
                     ) -> List[Token]:
    return parse_hocr_text(_read(hocr_path), table_bbox=table_bbox)

LINE_CLASSES = {"ocr_line", "ocr_header", "ocr_caption", "ocr_textfloat"}

def _is_line(c) -> bool:
    if not c:
        return False
    classes = c.split() if isinstance(c, str) else c
    return any(k in LINE_CLASSES for k in classes)

def hocr_plain_text(raw: str) -> str:
    """Texto crudo reconocido, una línea por línea hOCR (`ocr_line`, `ocr_header`, ...), para diagnóstico."""
    soup = _load_soup(raw)
    lines = []
    for line in soup.find_all(class_=_is_line):
        words = [(w.get_text() or "").strip()
                 for w in line.find_all(class_=lambda c: c and "ocrx_word" in c)]
        words = [w for w in words if w]
        if words:
            lines.append(" ".join(words))
    return "\n".join(lines)
