"""In-memory domain models for variation sources and haplotype diffs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class SomaticStatus(str, Enum):
    """Whether a source reports germline, somatic or mixed variation."""

    GERMLINE = "germline"
    SOMATIC = "somatic"
    MIXED = "mixed"


class SourceType(str, Enum):
    """Optional source classification."""

    CHIP = "chip"
    LSDB = "lsdb"


SOURCE_DATA_TYPES: tuple[str, ...] = (
    "variation",
    "variation_synonym",
    "structural_variation",
    "phenotype_feature",
    "study",
)


@dataclass(frozen=True)
class Source:
    """Provenance of variation data, as stored in the ``source`` table.

    Instances are created by a :class:`~variationhub.storage.SourceStore` on
    fetch and never mutated afterwards. ``source_id`` is ``None`` until the
    record has been stored.
    """

    name: str
    version: int | None = None
    description: str | None = None
    url: str | None = None
    type: SourceType | None = None
    somatic_status: SomaticStatus = SomaticStatus.GERMLINE
    data_types: tuple[str, ...] = ()
    source_id: int | None = None

    @property
    def is_somatic(self) -> bool:
        return self.somatic_status is SomaticStatus.SOMATIC

    def get_all_data_types(self) -> list[str]:
        """Return the data types this source provides, in stored order."""

        return list(self.data_types)

    def with_id(self, source_id: int) -> Source:
        return replace(self, source_id=source_id)

    def to_row(self) -> dict[str, Any]:
        """Serialize into a plain dict for storage backends."""

        return {
            "source_id": self.source_id,
            "name": self.name,
            "version": self.version,
            "description": self.description,
            "url": self.url,
            "type": self.type.value if self.type is not None else None,
            "somatic_status": self.somatic_status.value,
            "data_types": list(self.data_types),
        }


@dataclass(frozen=True)
class ReferenceTranscript:
    """Reference sequences for the transcript a set of haplotypes is built on."""

    stable_id: str
    coding_sequence: str
    protein: str
    translation_id: str | None = None


@dataclass
class ProteinDiff:
    """One difference between a protein haplotype and its reference.

    ``diff`` is the raw token (``19P>L`` is Proline to Leucine at position 19).
    ``annotations`` holds tool-specific keys such as ``sift_prediction`` and
    ``polyphen_score``; only values a tool actually returned are present.
    """

    diff: str
    annotations: dict[str, Any] = field(default_factory=dict)

    def prediction(self, tool: str) -> str | None:
        return self.annotations.get(f"{tool}_prediction")

    def score(self, tool: str) -> float | None:
        return self.annotations.get(f"{tool}_score")

    def annotate(self, tool: str, prediction: str | None, score: float | None) -> None:
        if score is not None:
            self.annotations[f"{tool}_score"] = score
        if prediction is not None:
            self.annotations[f"{tool}_prediction"] = prediction

    def to_dict(self) -> dict[str, Any]:
        return {"diff": self.diff, **self.annotations}
