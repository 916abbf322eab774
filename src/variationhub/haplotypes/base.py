"""Shared behaviour for haplotypes built on a reference transcript."""

from __future__ import annotations

import hashlib
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from variationhub.haplotypes.alignment import diff_sequences
from variationhub.models import ProteinDiff, ReferenceTranscript

if TYPE_CHECKING:
    from variationhub.haplotypes.container import TranscriptHaplotypeContainer

INDEL_RE = re.compile(r"ins|del")


def sequence_hex(sequence: str) -> str:
    """Stable identifier for a haplotype sequence."""

    return hashlib.md5(sequence.encode("utf-8")).hexdigest()


class TranscriptHaplotype(ABC):
    """A transcript sequence (CDS or protein) modified by sample genotypes.

    The container is shared between all haplotypes of a transcript and is not
    owned by any of them. Derived values are cached on first use and never
    recomputed, so the container must not change once they exist.
    """

    haplotype_type: str

    def __init__(
        self,
        *,
        container: TranscriptHaplotypeContainer,
        sequence: str,
        hex: str | None = None,  # noqa: A002
        indel: bool | None = None,
    ) -> None:
        self._container = container
        self._raw_diffs: list[str] | None = None
        self._linked_hexes: list[str] = []

        self.sequence = sequence
        self.hex = hex or sequence_hex(sequence)
        self.type = self.haplotype_type
        self.count = 0
        self.indel = (
            bool(indel)
            if indel is not None
            else len(sequence) != len(self.reference_seq())
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(hex={self.hex!r}, indel={self.indel})"

    @property
    def container(self) -> TranscriptHaplotypeContainer:
        return self._container

    @property
    def transcript(self) -> ReferenceTranscript:
        return self._container.transcript

    @property
    def frequency(self) -> float | None:
        """Share of all observed haplotypes on the container that are this one."""

        total = self._container.total_haplotype_count(self.type)
        if not total:
            return None
        return self.count / total

    @property
    @abstractmethod
    def reference_name(self) -> str:
        """Identifier of the reference sequence this haplotype is compared to."""

    @abstractmethod
    def reference_seq(self) -> str:
        """Return the reference sequence this haplotype is compared to."""

    @property
    def name(self) -> str:
        raw_diffs = self._get_raw_diffs()
        return f"{self.reference_name}:{','.join(raw_diffs) if raw_diffs else 'REF'}"

    def is_reference(self) -> bool:
        return not self._get_raw_diffs()

    def get_other_haplotypes(self) -> list[TranscriptHaplotype]:
        """Return linked haplotypes of the other type (CDS for protein and vice versa)."""

        return [self._container.get_haplotype_by_hex(hex_id) for hex_id in self._linked_hexes]

    def link(self, other: TranscriptHaplotype) -> None:
        if other.hex not in self._linked_hexes:
            self._linked_hexes.append(other.hex)

    def to_json_dict(self) -> dict[str, Any]:
        """Plain mapping of public fields, suitable for JSON output."""

        return {
            key: _to_jsonable(value)
            for key, value in vars(self).items()
            if not key.startswith("_")
        }

    def _get_raw_diffs(self) -> list[str]:
        if self._raw_diffs is None:
            self._raw_diffs = diff_sequences(self.reference_seq(), self.sequence)
        return self._raw_diffs


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, ProteinDiff):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value
