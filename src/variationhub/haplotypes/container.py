"""Container tying CDS and protein haplotypes to one reference transcript."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from Bio.Seq import Seq

from variationhub.config import DEFAULT_ANNOTATION_CONFIG, AnnotationConfig
from variationhub.haplotypes.base import TranscriptHaplotype, sequence_hex
from variationhub.haplotypes.cds import CDSHaplotype
from variationhub.haplotypes.protein import ProteinHaplotype
from variationhub.models import ReferenceTranscript
from variationhub.predictions import PredictionTool, ProteinFunctionPredictionMatrix

logger = logging.getLogger(__name__)


def translate_cds(cds_sequence: str) -> str:
    """Translate a CDS, ignoring a trailing partial codon."""

    usable = len(cds_sequence) - len(cds_sequence) % 3
    return str(Seq(cds_sequence[:usable]).translate())


class TranscriptHaplotypeContainer:
    """Holds the haplotypes observed for a transcript and their prediction matrices.

    Haplotypes keep a reference back to this container and cache what they
    derive from it, so matrices and the transcript must be fixed before any
    haplotype diffs or flags are requested.
    """

    def __init__(
        self,
        transcript: ReferenceTranscript,
        *,
        prediction_matrices: Mapping[str | PredictionTool, ProteinFunctionPredictionMatrix] | None = None,
        config: AnnotationConfig = DEFAULT_ANNOTATION_CONFIG,
    ) -> None:
        self.transcript = transcript
        self.config = config
        self._prediction_matrices = {
            PredictionTool(tool).value: matrix
            for tool, matrix in (prediction_matrices or {}).items()
        }
        self._cds_haplotypes: dict[str, CDSHaplotype] = {}
        self._protein_haplotypes: dict[str, ProteinHaplotype] = {}

    def get_prediction_matrices(self) -> dict[str, ProteinFunctionPredictionMatrix]:
        """Return prediction matrices keyed by tool name (``sift``, ``polyphen``)."""

        return self._prediction_matrices

    def add_cds_sequence(self, cds_sequence: str) -> CDSHaplotype:
        """Record one observed CDS sequence and its translation.

        Repeated sequences reuse the existing haplotypes and bump their counts.
        """

        cds_hex = sequence_hex(cds_sequence)
        cds_haplotype = self._cds_haplotypes.get(cds_hex)
        if cds_haplotype is None:
            cds_haplotype = CDSHaplotype(container=self, sequence=cds_sequence, hex=cds_hex)
            self._cds_haplotypes[cds_hex] = cds_haplotype

        protein_sequence = translate_cds(cds_sequence)
        protein_hex = sequence_hex(protein_sequence)
        protein_haplotype = self._protein_haplotypes.get(protein_hex)
        if protein_haplotype is None:
            protein_haplotype = ProteinHaplotype(
                container=self,
                sequence=protein_sequence,
                hex=protein_hex,
            )
            self._protein_haplotypes[protein_hex] = protein_haplotype

        cds_haplotype.link(protein_haplotype)
        protein_haplotype.link(cds_haplotype)
        cds_haplotype.count += 1
        protein_haplotype.count += 1

        logger.debug(
            "Added CDS haplotype %s -> protein haplotype %s on %s",
            cds_hex,
            protein_hex,
            self.transcript.stable_id,
        )
        return cds_haplotype

    def get_all_cds_haplotypes(self) -> list[CDSHaplotype]:
        return list(self._cds_haplotypes.values())

    def get_all_protein_haplotypes(self) -> list[ProteinHaplotype]:
        return list(self._protein_haplotypes.values())

    def get_haplotype_by_hex(self, hex_id: str) -> TranscriptHaplotype:
        if hex_id in self._cds_haplotypes:
            return self._cds_haplotypes[hex_id]
        if hex_id in self._protein_haplotypes:
            return self._protein_haplotypes[hex_id]
        raise KeyError(f"Unknown haplotype hex: {hex_id}")

    def total_haplotype_count(self, haplotype_type: str) -> int:
        """Number of observations across all haplotypes of one type."""

        if haplotype_type == CDSHaplotype.haplotype_type:
            haplotypes: list[TranscriptHaplotype] = list(self._cds_haplotypes.values())
        else:
            haplotypes = list(self._protein_haplotypes.values())
        return sum(haplotype.count for haplotype in haplotypes)
