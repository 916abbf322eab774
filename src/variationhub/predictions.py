"""SIFT and PolyPhen prediction matrices keyed by protein position and residue."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

MATRIX_COLUMNS: tuple[str, ...] = ("position", "amino_acid", "prediction", "score")


class PredictionTool(str, Enum):
    """Deleteriousness predictors with precomputed matrices."""

    SIFT = "sift"
    POLYPHEN = "polyphen"


def prediction_from_score(tool: str | PredictionTool, score: float) -> str:
    """Classify a raw score with the thresholds Ensembl applies for ``tool``."""

    tool = PredictionTool(tool)
    if tool is PredictionTool.SIFT:
        return "deleterious" if score <= 0.05 else "tolerated"

    if score > 0.908:
        return "probably damaging"
    if score > 0.446:
        return "possibly damaging"
    return "benign"


class ProteinFunctionPredictionMatrix:
    """Predictions of one tool for every substitution in one translation.

    Rows are indexed by ``(position, amino_acid)`` with 1-based positions, and
    carry a ``prediction`` label and a numeric ``score``. Either may be absent.
    """

    def __init__(self, tool: str | PredictionTool, frame: pd.DataFrame) -> None:
        self.tool = PredictionTool(tool)

        missing = [column for column in MATRIX_COLUMNS if column not in frame.columns]
        if missing:
            raise ValueError(f"Prediction matrix missing columns: {', '.join(missing)}")

        table = frame.loc[:, list(MATRIX_COLUMNS)].copy()
        table["position"] = table["position"].astype(int)
        table["amino_acid"] = table["amino_acid"].astype(str).str.strip().str.upper()
        table["score"] = pd.to_numeric(table["score"], errors="coerce")
        table["prediction"] = [
            self._label_for(prediction, score)
            for prediction, score in zip(table["prediction"], table["score"])
        ]

        self._table = table.drop_duplicates(
            subset=["position", "amino_acid"], keep="last"
        ).set_index(["position", "amino_acid"]).sort_index()

    @classmethod
    def from_records(
        cls,
        tool: str | PredictionTool,
        rows: Iterable[Mapping[str, Any]],
    ) -> ProteinFunctionPredictionMatrix:
        frame = pd.DataFrame(list(rows), columns=list(MATRIX_COLUMNS))
        return cls(tool, frame)

    @classmethod
    def from_csv(
        cls,
        tool: str | PredictionTool,
        path: str | Path,
        *,
        sep: str = ",",
    ) -> ProteinFunctionPredictionMatrix:
        frame = pd.read_csv(path, sep=sep)
        if "prediction" not in frame.columns:
            frame["prediction"] = None
        return cls(tool, frame)

    def __len__(self) -> int:
        return len(self._table)

    def get_prediction(self, position: int, amino_acid: str) -> tuple[str | None, float | None]:
        """Return ``(label, score)`` for a substitution; either may be ``None``."""

        key = (int(position), amino_acid.upper())
        if key not in self._table.index:
            return None, None

        row = self._table.loc[key]
        prediction = row["prediction"]
        score = row["score"]
        return (
            None if _is_missing(prediction) else str(prediction),
            None if _is_missing(score) else float(score),
        )

    def _label_for(self, prediction: Any, score: Any) -> str | None:
        if not _is_missing(prediction):
            cleaned = str(prediction).strip()
            if cleaned:
                return cleaned
        if _is_missing(score):
            return None
        return prediction_from_score(self.tool, float(score))


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))
