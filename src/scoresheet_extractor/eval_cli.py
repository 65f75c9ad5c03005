from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional, Sequence

from .evaluation import evaluate_scores, write_report

log = logging.getLogger(__name__)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Evalúa un CSV de puntajes predicho contra una referencia (accuracy por campo, MSE, RMSE, R2)."
    )
    parser.add_argument("--reference", required=True, help="CSV de referencia (ground truth).")
    parser.add_argument("--predicted", required=True, help="CSV generado por el extractor.")
    parser.add_argument("--report", help="Ruta opcional para guardar un reporte CSV con las métricas.")
    parser.add_argument("--json", help="Ruta opcional para guardar métricas en JSON.")
    parser.add_argument("--loglevel", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")

    evaluation = evaluate_scores(reference_csv=args.reference, predicted_csv=args.predicted)

    log.info("Filas: referencia=%d predichas=%d", evaluation.reference_rows, evaluation.predicted_rows)
    log.info("Cell accuracy: %.4f (%d/%d)", evaluation.cell_accuracy, evaluation.matched_cells, evaluation.total_cells)
    for column, acc in evaluation.field_accuracy.items():
        log.info("Accuracy %s: %.4f", column, acc)
    for metric in evaluation.numeric_by_column:
        log.info("Numeric column %s -> MSE: %.6f RMSE: %.6f R2: %.6f (n=%d)", metric.column, metric.mse, metric.rmse, metric.r2, metric.n)
    if evaluation.numeric_overall:
        overall = evaluation.numeric_overall
        log.info("Numeric overall -> MSE: %.6f RMSE: %.6f R2: %.6f (n=%d)", overall.mse, overall.rmse, overall.r2, overall.n)

    if args.report:
        write_report(evaluation, args.report)
        log.info("Reporte CSV guardado en %s", args.report)

    if args.json:
        Path(args.json).parent.mkdir(parents=True, exist_ok=True)
        with open(args.json, "w", encoding="utf-8") as fh:
            json.dump(evaluation.to_dict(), fh, indent=2)
        log.info("Reporte JSON guardado en %s", args.json)


if __name__ == "__main__":
    main()
