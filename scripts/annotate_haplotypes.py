#!/usr/bin/env python3
"""Build transcript haplotypes from CDS sequences and publish their annotations."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from variationhub import (  # noqa: E402
    HaplotypePublisher,
    JsonHaplotypePublisher,
    ProteinFunctionPredictionMatrix,
    ReferenceTranscript,
    SummaryTablePublisher,
    TranscriptHaplotypeContainer,
)
from variationhub.haplotypes import translate_cds  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Annotate transcript haplotypes from JSON config")
    parser.add_argument("--config", required=True, help="Path to annotation JSON config")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level.",
    )
    return parser.parse_args()


def load_json(path: str | Path) -> dict[str, Any]:
    return json.loads(Path(path).read_text())


def build_transcript(config: dict[str, Any]) -> ReferenceTranscript:
    raw = config.get("transcript")
    if not raw:
        raise ValueError("Config must define transcript")

    coding_sequence = str(raw["coding_sequence"]).strip().upper()
    protein = raw.get("protein") or translate_cds(coding_sequence)
    return ReferenceTranscript(
        stable_id=str(raw["stable_id"]),
        coding_sequence=coding_sequence,
        protein=str(protein).strip().upper(),
        translation_id=raw.get("translation_id"),
    )


def build_matrices(config: dict[str, Any]) -> dict[str, ProteinFunctionPredictionMatrix]:
    matrices: dict[str, ProteinFunctionPredictionMatrix] = {}
    for tool, path in config.get("prediction_matrices", {}).items():
        matrix = ProteinFunctionPredictionMatrix.from_csv(tool, path)
        matrices[matrix.tool.value] = matrix
    return matrices


def build_publishers(config: dict[str, Any]) -> list[HaplotypePublisher]:
    publishers: list[HaplotypePublisher] = []
    for item in config.get("publishers", []):
        name = str(item["name"]).strip().lower()
        params = dict(item.get("params", {}))

        if name == "json":
            publishers.append(JsonHaplotypePublisher(**params))
        elif name == "summary":
            publishers.append(SummaryTablePublisher(**params))
        else:
            raise ValueError(f"Unknown publisher: {name}")

    return publishers


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logger = logging.getLogger("variationhub.scripts.annotate_haplotypes")

    config = load_json(args.config)
    transcript = build_transcript(config)
    matrices = build_matrices(config)
    logger.info(
        "Transcript %s with prediction matrices: %s",
        transcript.stable_id,
        ", ".join(sorted(matrices)) or "none",
    )

    sequences = [str(sequence).strip().upper() for sequence in config.get("cds_sequences", [])]
    if not sequences:
        raise ValueError("No cds_sequences configured.")

    container = TranscriptHaplotypeContainer(transcript, prediction_matrices=matrices)
    for sequence in sequences:
        container.add_cds_sequence(sequence)

    proteins = container.get_all_protein_haplotypes()
    logger.info(
        "Built %d CDS and %d protein haplotypes",
        len(container.get_all_cds_haplotypes()),
        len(proteins),
    )

    for publisher in build_publishers(config):
        publisher.publish(proteins)

    payload = {
        "transcript": transcript.stable_id,
        "cds_haplotypes": len(container.get_all_cds_haplotypes()),
        "protein_haplotypes": len(proteins),
        "flagged": sum(1 for haplotype in proteins if haplotype.get_all_flags()),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
