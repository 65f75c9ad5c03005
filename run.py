# run.py
from __future__ import annotations
import sys
from pathlib import Path
import logging
import argparse

sys.path.append(str(Path(__file__).parent / "src"))
from scoresheet_extractor.config import DEFAULT_CONFIG, load_config  # noqa: E402
from scoresheet_extractor.main import extract_scores, write_outputs  # noqa: E402

# La configuración del logging se hace en main(); dejamos un logger básico aquí.
log = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reconstruir la tabla de puntajes de una hoja de bolos (hOCR o imagen) a CSV.")
    parser.add_argument("csv_path", type=str, help="Ruta al archivo de salida .csv")
    parser.add_argument("--hocr_path", type=str, help="Ruta al archivo de entrada .hocr")
    parser.add_argument("--image", type=str, help="Ruta a la imagen de entrada (se reconoce con Tesseract)")
    parser.add_argument("--bbox", type=int, nargs=4, metavar=('X1', 'Y1', 'X2', 'Y2'),
                        help="Bbox opcional de la tabla: x1 y1 x2 y2")
    parser.add_argument("--config", type=str, help="JSON con vocabulario y constantes de ajuste")
    parser.add_argument("--row-tolerance", type=int, help="Tolerancia vertical para agrupar filas (px)")
    parser.add_argument("--min-header-labels", type=int, help="Etiquetas distintas mínimas para reconocer la cabecera")
    parser.add_argument("--max-edit-distance", type=int, help="Distancia de edición máxima para el match difuso")
    parser.add_argument("--column-threshold", type=int, help="Proximidad horizontal para asignar columnas (px)")
    parser.add_argument("--player-fallback-offset", type=int, help="Ancho de la columna de nombre si sólo hay una columna (px)")
    parser.add_argument("--ocr-lang", type=str, default="eng", help="Idioma OCR para Tesseract (default: eng)")
    parser.add_argument("--ocr-psm", type=int, default=6, help="Page segmentation mode de Tesseract (default: 6)")
    parser.add_argument("--json", type=str, help="Ruta opcional para guardar los registros en JSON")
    parser.add_argument("--text-out", type=str, help="Ruta opcional para guardar el texto OCR crudo")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser

def main(argv=None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    # --- Validación de argumentos ---
    if bool(args.hocr_path) == bool(args.image):
        parser.error("Indique exactamente uno de --hocr_path o --image")

    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')
    log.info(f"ENTRADA: {args.hocr_path or args.image}")
    log.info(f"CSV : {args.csv_path}")

    try:
        config = load_config(args.config) if args.config else DEFAULT_CONFIG
        config = config.with_overrides(
            row_tolerance=args.row_tolerance,
            min_header_labels=args.min_header_labels,
            max_edit_distance=args.max_edit_distance,
            column_threshold=args.column_threshold,
            player_fallback_offset=args.player_fallback_offset,
        )
        result = extract_scores(
            hocr_path=args.hocr_path,
            image_path=args.image,
            config=config,
            table_bbox=tuple(args.bbox) if args.bbox else None,
            ocr_lang=args.ocr_lang,
            ocr_psm=args.ocr_psm,
        )
        if not result.ok:
            log.error(result.error_message)
            sys.exit(1)
        write_outputs(result, args.csv_path, json_path=args.json, text_path=args.text_out)
        log.info(f"✔ Proceso completado ({len(result.scores)} jugadores, estado: {result.status.value}).")
    except FileNotFoundError:
        log.error(f"Error: No se encontró el archivo de configuración: {args.config}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
