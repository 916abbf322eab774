import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from variationhub.predictions import (  # noqa: E402
    PredictionTool,
    ProteinFunctionPredictionMatrix,
    prediction_from_score,
)


@pytest.mark.parametrize(
    ("tool", "score", "expected"),
    [
        ("sift", 0.0, "deleterious"),
        ("sift", 0.05, "deleterious"),
        ("sift", 0.06, "tolerated"),
        ("polyphen", 0.95, "probably damaging"),
        ("polyphen", 0.908, "possibly damaging"),
        ("polyphen", 0.446, "benign"),
    ],
)
def test_prediction_from_score_thresholds(tool: str, score: float, expected: str) -> None:
    assert prediction_from_score(tool, score) == expected


def test_matrix_lookup_returns_label_and_score() -> None:
    matrix = ProteinFunctionPredictionMatrix.from_records(
        "sift",
        [
            {"position": 19, "amino_acid": "L", "prediction": "tolerated", "score": 0.8},
            {"position": 20, "amino_acid": "w", "prediction": None, "score": 0.02},
        ],
    )

    assert matrix.tool is PredictionTool.SIFT
    assert len(matrix) == 2
    assert matrix.get_prediction(19, "L") == ("tolerated", 0.8)
    assert matrix.get_prediction(20, "W") == ("deleterious", 0.02)
    assert matrix.get_prediction(19, "Q") == (None, None)
    assert matrix.get_prediction(99, "L") == (None, None)


def test_matrix_from_csv_without_prediction_column(tmp_path: Path) -> None:
    path = tmp_path / "polyphen.csv"
    path.write_text("position,amino_acid,score\n5,R,0.97\n6,K,\n")

    matrix = ProteinFunctionPredictionMatrix.from_csv("polyphen", path)

    assert matrix.get_prediction(5, "R") == ("probably damaging", 0.97)
    assert matrix.get_prediction(6, "K") == (None, None)


def test_matrix_rejects_missing_columns() -> None:
    import pandas as pd

    with pytest.raises(ValueError):
        ProteinFunctionPredictionMatrix("sift", pd.DataFrame({"position": [1]}))
