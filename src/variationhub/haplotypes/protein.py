"""Protein haplotypes annotated with SIFT and PolyPhen predictions."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from variationhub.haplotypes.base import INDEL_RE, TranscriptHaplotype
from variationhub.models import ProteinDiff

if TYPE_CHECKING:
    from variationhub.haplotypes.cds import CDSHaplotype

SUBSTITUTION_RE = re.compile(r"^(\d+)[A-Z]>([A-Z])$")


class ProteinHaplotype(TranscriptHaplotype):
    """A transcript's translated sequence modified by sample genotypes.

    Differences to the reference protein are annotated with predictions from
    the matrices held by the container. Once an insertion or deletion has been
    seen, later substitutions are left unannotated because their numbering no
    longer lines up with the reference.
    """

    haplotype_type = "protein"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.diffs: list[ProteinDiff] | None = None
        self.flags: list[str] | None = None

    @property
    def reference_name(self) -> str:
        transcript = self.transcript
        return transcript.translation_id or transcript.stable_id

    def reference_seq(self) -> str:
        return self.transcript.protein

    def get_all_cds_haplotypes(self) -> list[CDSHaplotype]:
        """Return all CDS haplotypes that translate to this protein."""

        return self.get_other_haplotypes()  # type: ignore[return-value]

    def get_all_diffs(self) -> list[ProteinDiff]:
        """Differences to the reference protein with any predictions attached."""

        if self.diffs is None:
            matrices = self._container.get_prediction_matrices()
            tools = self._container.config.prediction_tools
            ref_length = len(self.reference_seq())
            seen_indel = False

            diffs: list[ProteinDiff] = []
            for raw_diff in self._get_raw_diffs():
                diff = ProteinDiff(diff=raw_diff)

                match = SUBSTITUTION_RE.match(raw_diff)
                if match and not seen_indel:
                    position = int(match.group(1))
                    amino_acid = match.group(2)

                    if position <= ref_length:
                        for tool in tools:
                            matrix = matrices.get(tool)
                            if matrix is None:
                                continue
                            prediction, score = matrix.get_prediction(position, amino_acid)
                            diff.annotate(tool, prediction, score)

                elif INDEL_RE.search(raw_diff):
                    seen_indel = True

                diffs.append(diff)

            self.diffs = diffs

        return self.diffs

    def get_all_flags(self) -> list[str]:
        """Names of the conditions in ``FLAG_PREDICATES`` that hold, in table order."""

        if self.flags is None:
            self.flags = [name for name, predicate in self.FLAG_PREDICATES if predicate(self)]
        return self.flags

    def has_deleterious_sift_or_polyphen(self) -> bool:
        """True if any diff is deleterious (SIFT) or probably damaging (PolyPhen)."""

        config = self._container.config
        labels = [
            (tool, config.deleterious_label_for(tool)) for tool in config.prediction_tools
        ]

        for diff in self.get_all_diffs():
            for tool, label in labels:
                if label is not None and diff.prediction(tool) == label:
                    return True
        return False

    def has_stop_change(self) -> bool:
        """True if any diff gains or loses a stop codon."""

        stop_marker = self._container.config.stop_marker
        return any(stop_marker in diff.diff for diff in self.get_all_diffs())

    def has_indel(self) -> bool:
        return self.indel

    def mean_sift_score(self) -> float | None:
        return self._mean_score("sift")

    def mean_polyphen_score(self) -> float | None:
        return self._mean_score("polyphen")

    def to_json_dict(self) -> dict[str, Any]:
        self.get_all_flags()
        return super().to_json_dict()

    def _mean_score(self, tool: str) -> float | None:
        scores = [
            diff.score(tool) for diff in self.get_all_diffs() if diff.score(tool) is not None
        ]
        if not scores:
            return None
        return sum(scores) / len(scores)

    FLAG_PREDICATES = (
        ("deleterious_sift_or_polyphen", has_deleterious_sift_or_polyphen),
        ("stop_change", has_stop_change),
        ("indel", has_indel),
    )
