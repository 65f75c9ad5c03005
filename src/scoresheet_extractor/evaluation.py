from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .structures import PlayerScore

SCORE_FIELDS = PlayerScore.FIELDS[1:]


@dataclass
class NumericMetrics:
    column: str
    mse: float
    rmse: float
    r2: float
    n: int


@dataclass
class ScoreEvaluation:
    field_accuracy: Dict[str, float]
    numeric_by_column: List[NumericMetrics]
    numeric_overall: Optional[NumericMetrics]
    cell_accuracy: float
    total_cells: int
    matched_cells: int
    reference_rows: int
    predicted_rows: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "field_accuracy": dict(self.field_accuracy),
            "numeric_by_column": [metric.__dict__ for metric in self.numeric_by_column],
            "numeric_overall": self.numeric_overall.__dict__ if self.numeric_overall else None,
            "cell_accuracy": self.cell_accuracy,
            "total_cells": self.total_cells,
            "matched_cells": self.matched_cells,
            "reference_rows": self.reference_rows,
            "predicted_rows": self.predicted_rows,
        }


def _read_scores(path: str) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    missing = [c for c in PlayerScore.FIELDS if c not in df.columns]
    for column in missing:
        df[column] = ""
    df = df[list(PlayerScore.FIELDS)]
    # normalizar espacios
    return df.map(lambda x: (x or "").strip())


def _pad_rows(df: pd.DataFrame, n_rows: int) -> pd.DataFrame:
    if len(df) >= n_rows:
        return df
    padding = pd.DataFrame([[""] * df.shape[1]] * (n_rows - len(df)), columns=df.columns)
    return pd.concat([df, padding], ignore_index=True)


def _coerce_numeric(series: pd.Series) -> Tuple[np.ndarray, np.ndarray]:
    clean = series.replace({"": np.nan, "-": np.nan})
    numeric = pd.to_numeric(clean, errors="coerce")
    mask = ~numeric.isna()
    return numeric.to_numpy(dtype=float), mask.to_numpy()


def _compute_numeric_metrics(y_true: np.ndarray, y_pred: np.ndarray, column: str) -> Optional[NumericMetrics]:
    if len(y_true) == 0:
        return None
    errors = y_pred - y_true
    mse = float(np.mean(errors ** 2))
    denom = float(np.sum((y_true - np.mean(y_true)) ** 2))
    r2 = float("nan") if denom == 0 else float(1.0 - np.sum(errors ** 2) / denom)
    return NumericMetrics(column=column, mse=mse, rmse=float(np.sqrt(mse)), r2=r2, n=len(y_true))


def evaluate_scores(reference_csv: str, predicted_csv: str) -> ScoreEvaluation:
    """
    Compara fila a fila (por posición) un CSV de puntajes predicho contra la referencia.
    Las filas faltantes en cualquiera de los dos lados cuentan como celdas vacías.
    """
    df_ref = _read_scores(reference_csv)
    df_pred = _read_scores(predicted_csv)
    reference_rows, predicted_rows = len(df_ref), len(df_pred)

    max_rows = max(reference_rows, predicted_rows)
    df_ref = _pad_rows(df_ref, max_rows)
    df_pred = _pad_rows(df_pred, max_rows)

    equal = df_ref.values == df_pred.values
    total_cells = int(equal.size)
    matched = int(equal.sum())
    field_accuracy = {
        column: (float(equal[:, idx].mean()) if max_rows else 0.0)
        for idx, column in enumerate(PlayerScore.FIELDS)
    }

    numeric_metrics: List[NumericMetrics] = []
    all_true: List[float] = []
    all_pred: List[float] = []
    for column in SCORE_FIELDS:
        true_values, mask_true = _coerce_numeric(df_ref[column])
        pred_values, mask_pred = _coerce_numeric(df_pred[column])
        mask = mask_true & mask_pred
        if not mask.any():
            continue
        metric = _compute_numeric_metrics(true_values[mask], pred_values[mask], column=column)
        if metric:
            numeric_metrics.append(metric)
            all_true.extend(true_values[mask].tolist())
            all_pred.extend(pred_values[mask].tolist())

    overall = None
    if all_true:
        overall = _compute_numeric_metrics(np.array(all_true), np.array(all_pred), column="overall")

    return ScoreEvaluation(
        field_accuracy=field_accuracy,
        numeric_by_column=numeric_metrics,
        numeric_overall=overall,
        cell_accuracy=matched / total_cells if total_cells else 0.0,
        total_cells=total_cells,
        matched_cells=matched,
        reference_rows=reference_rows,
        predicted_rows=predicted_rows,
    )


def write_report(evaluation: ScoreEvaluation, output_path: str) -> None:
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(["Metric", "Column", "Value", "N"])
        writer.writerow(["cell_accuracy", "-", f"{evaluation.cell_accuracy:.4f}", evaluation.total_cells])
        writer.writerow(["rows", "reference", evaluation.reference_rows, ""])
        writer.writerow(["rows", "predicted", evaluation.predicted_rows, ""])
        for column, acc in evaluation.field_accuracy.items():
            writer.writerow(["accuracy", column, f"{acc:.4f}", max(evaluation.reference_rows, evaluation.predicted_rows)])
        metrics = list(evaluation.numeric_by_column)
        if evaluation.numeric_overall:
            metrics.append(evaluation.numeric_overall)
        for metric in metrics:
            writer.writerow(["mse", metric.column, f"{metric.mse:.6f}", metric.n])
            writer.writerow(["rmse", metric.column, f"{metric.rmse:.6f}", metric.n])
            writer.writerow(["r2", metric.column, f"{metric.r2:.6f}", metric.n])
