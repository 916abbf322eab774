"""Tabular per-haplotype summary of flags and mean prediction scores."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from variationhub.haplotypes import ProteinHaplotype, TranscriptHaplotype
from variationhub.publishers.base import HaplotypePublisher

SUMMARY_COLUMNS: tuple[str, ...] = (
    "name",
    "hex",
    "count",
    "indel",
    "flags",
    "mean_sift_score",
    "mean_polyphen_score",
    "diff_count",
)


def haplotype_summary_frame(haplotypes: Iterable[TranscriptHaplotype]) -> pd.DataFrame:
    """One row per protein haplotype; CDS haplotypes are skipped."""

    rows = []
    for haplotype in haplotypes:
        if not isinstance(haplotype, ProteinHaplotype):
            continue
        rows.append(
            {
                "name": haplotype.name,
                "hex": haplotype.hex,
                "count": haplotype.count,
                "indel": haplotype.indel,
                "flags": ",".join(haplotype.get_all_flags()),
                "mean_sift_score": haplotype.mean_sift_score(),
                "mean_polyphen_score": haplotype.mean_polyphen_score(),
                "diff_count": len(haplotype.get_all_diffs()),
            }
        )

    return pd.DataFrame(rows, columns=list(SUMMARY_COLUMNS))


class SummaryTablePublisher(HaplotypePublisher):
    """Write :func:`haplotype_summary_frame` as a tab-separated file."""

    def __init__(self, *, output_path: str | Path) -> None:
        self.output_path = Path(output_path)

    def publish(self, haplotypes: list[TranscriptHaplotype]) -> None:
        frame = haplotype_summary_frame(haplotypes)

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        frame.to_csv(self.output_path, sep="\t", index=False)
