import json
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from variationhub import (  # noqa: E402
    ProteinFunctionPredictionMatrix,
    ReferenceTranscript,
    TranscriptHaplotypeContainer,
)
from variationhub.publishers import (  # noqa: E402
    SUMMARY_COLUMNS,
    JsonHaplotypePublisher,
    SummaryTablePublisher,
    haplotype_summary_frame,
)


def _container() -> TranscriptHaplotypeContainer:
    transcript = ReferenceTranscript(
        stable_id="ENST00000000003",
        translation_id="ENSP00000000003",
        coding_sequence="ATGCCCAAATAA",
        protein="MPK*",
    )
    sift = ProteinFunctionPredictionMatrix.from_records(
        "sift",
        [{"position": 2, "amino_acid": "L", "prediction": "deleterious", "score": 0.02}],
    )
    container = TranscriptHaplotypeContainer(transcript, prediction_matrices={"sift": sift})
    container.add_cds_sequence("ATGCCCAAATAA")
    container.add_cds_sequence("ATGCTCAAATAA")
    return container


def test_json_publisher_writes_serialized_haplotypes(tmp_path: Path) -> None:
    container = _container()
    output_path = tmp_path / "out" / "haplotypes.json"

    JsonHaplotypePublisher(output_path=output_path).publish(
        container.get_all_protein_haplotypes()
    )

    payload = json.loads(output_path.read_text())
    assert [item["sequence"] for item in payload] == ["MPK*", "MLK*"]
    assert payload[0]["flags"] == []
    assert payload[1]["flags"] == ["deleterious_sift_or_polyphen"]
    assert payload[1]["diffs"] == [
        {"diff": "2P>L", "sift_prediction": "deleterious", "sift_score": 0.02}
    ]


def test_summary_frame_skips_cds_haplotypes() -> None:
    container = _container()
    haplotypes = container.get_all_cds_haplotypes() + container.get_all_protein_haplotypes()

    frame = haplotype_summary_frame(haplotypes)

    assert list(frame.columns) == list(SUMMARY_COLUMNS)
    assert frame["name"].tolist() == ["ENSP00000000003:REF", "ENSP00000000003:2P>L"]
    assert frame["diff_count"].tolist() == [0, 1]
    assert frame["mean_sift_score"].iloc[1] == 0.02


def test_summary_publisher_writes_tsv(tmp_path: Path) -> None:
    container = _container()
    output_path = tmp_path / "summary.tsv"

    SummaryTablePublisher(output_path=output_path).publish(container.get_all_protein_haplotypes())

    frame = pd.read_csv(output_path, sep="\t")
    assert len(frame) == 2
    assert frame.loc[1, "flags"] == "deleterious_sift_or_polyphen"
