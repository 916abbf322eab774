"""Coding sequence haplotypes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from variationhub.haplotypes.base import TranscriptHaplotype

if TYPE_CHECKING:
    from variationhub.haplotypes.protein import ProteinHaplotype


class CDSHaplotype(TranscriptHaplotype):
    """A transcript's CDS sequence modified by sample genotypes."""

    haplotype_type = "cds"

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.diffs: list[dict[str, str]] | None = None

    @property
    def reference_name(self) -> str:
        return self.transcript.stable_id

    def reference_seq(self) -> str:
        return self.transcript.coding_sequence

    def get_protein_haplotype(self) -> ProteinHaplotype | None:
        """Return the protein haplotype this CDS translates to."""

        others = self.get_other_haplotypes()
        return others[0] if others else None  # type: ignore[return-value]

    def get_all_diffs(self) -> list[dict[str, str]]:
        """Nucleotide differences to the reference CDS, e.g. ``{"diff": "57C>T"}``."""

        if self.diffs is None:
            self.diffs = [{"diff": raw_diff} for raw_diff in self._get_raw_diffs()]
        return self.diffs

    def to_json_dict(self) -> dict[str, Any]:
        self.get_all_diffs()
        return super().to_json_dict()
