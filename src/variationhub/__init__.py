"""Variation sources and transcript haplotype annotation.

Sources are loaded from a relational store through a :class:`SourceStore`
adaptor. Haplotypes compare sample-modified CDS and protein sequences with a
reference transcript and annotate protein changes with SIFT and PolyPhen
predictions.
"""

from .config import (
    DEFAULT_ANNOTATION_CONFIG,
    DELETERIOUS_LABELS,
    PREDICTION_TOOLS,
    AnnotationConfig,
    StoreConfig,
)
from .haplotypes import (
    CDSHaplotype,
    ProteinHaplotype,
    TranscriptHaplotype,
    TranscriptHaplotypeContainer,
    diff_sequences,
)
from .models import (
    SOURCE_DATA_TYPES,
    ProteinDiff,
    ReferenceTranscript,
    SomaticStatus,
    Source,
    SourceType,
)
from .predictions import PredictionTool, ProteinFunctionPredictionMatrix, prediction_from_score
from .publishers import HaplotypePublisher, JsonHaplotypePublisher, SummaryTablePublisher
from .storage import DuckDBSourceStore, SourceNotFoundError, SourceStore

__all__ = [
    "AnnotationConfig",
    "CDSHaplotype",
    "DEFAULT_ANNOTATION_CONFIG",
    "DELETERIOUS_LABELS",
    "DuckDBSourceStore",
    "HaplotypePublisher",
    "JsonHaplotypePublisher",
    "PREDICTION_TOOLS",
    "PredictionTool",
    "ProteinDiff",
    "ProteinFunctionPredictionMatrix",
    "ProteinHaplotype",
    "ReferenceTranscript",
    "SOURCE_DATA_TYPES",
    "SomaticStatus",
    "Source",
    "SourceNotFoundError",
    "SourceStore",
    "SourceType",
    "StoreConfig",
    "SummaryTablePublisher",
    "TranscriptHaplotype",
    "TranscriptHaplotypeContainer",
    "diff_sequences",
    "prediction_from_score",
]
