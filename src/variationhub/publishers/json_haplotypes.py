"""Write haplotypes as a JSON document."""

from __future__ import annotations

import json
from pathlib import Path

from variationhub.haplotypes import TranscriptHaplotype
from variationhub.publishers.base import HaplotypePublisher


class JsonHaplotypePublisher(HaplotypePublisher):
    """Serialize each haplotype through ``to_json_dict`` into one JSON array."""

    def __init__(self, *, output_path: str | Path, indent: int | None = 2) -> None:
        self.output_path = Path(output_path)
        self.indent = indent

    def publish(self, haplotypes: list[TranscriptHaplotype]) -> None:
        payload = [haplotype.to_json_dict() for haplotype in haplotypes]

        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(json.dumps(payload, indent=self.indent, sort_keys=True))
