"""Configuration contracts for variation sources and haplotype annotation."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


PREDICTION_TOOLS: tuple[str, ...] = ("sift", "polyphen")

DELETERIOUS_LABELS: Mapping[str, str] = {
    "sift": "deleterious",
    "polyphen": "probably damaging",
}


@dataclass(frozen=True)
class AnnotationConfig:
    """Which prediction tools annotate protein diffs and what counts as damaging."""

    prediction_tools: tuple[str, ...] = PREDICTION_TOOLS
    deleterious_labels: Mapping[str, str] = field(
        default_factory=lambda: dict(DELETERIOUS_LABELS)
    )
    stop_marker: str = "*"

    def deleterious_label_for(self, tool: str) -> str | None:
        """Return the label that marks a prediction from ``tool`` as damaging."""

        return self.deleterious_labels.get(tool)


DEFAULT_ANNOTATION_CONFIG = AnnotationConfig()


@dataclass(frozen=True)
class StoreConfig:
    """Location of the relational store holding variation sources."""

    db_path: Path
    table_name: str = "source"

    @classmethod
    def from_json(cls, path: str | Path) -> StoreConfig:
        """Load a store config from a JSON file with ``db_path`` and ``table_name``."""

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Store config not found: {config_path}")

        payload = json.loads(config_path.read_text())
        return cls.from_mapping(payload, base_dir=config_path.parent)

    @classmethod
    def from_mapping(
        cls,
        payload: Mapping[str, Any],
        *,
        base_dir: Path | None = None,
    ) -> StoreConfig:
        raw_path = str(payload.get("db_path", "")).strip()
        if not raw_path:
            raise ValueError("Store config must define db_path")

        db_path = Path(raw_path).expanduser()
        if base_dir is not None and not db_path.is_absolute():
            db_path = base_dir / db_path

        table_name = str(payload.get("table_name", "source")).strip()
        if not table_name:
            raise ValueError("Store config table_name cannot be empty")

        return cls(db_path=db_path, table_name=table_name)
