"""Publisher interface for haplotype outputs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from variationhub.haplotypes import TranscriptHaplotype


class HaplotypePublisher(ABC):
    """Publishes annotated haplotypes into consumer-facing artifacts."""

    @abstractmethod
    def publish(self, haplotypes: Sequence[TranscriptHaplotype]) -> None:
        """Publish haplotypes into output targets."""
