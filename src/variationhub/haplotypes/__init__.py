"""Transcript haplotypes and the container that links them."""

from .alignment import diff_sequences
from .base import TranscriptHaplotype, sequence_hex
from .cds import CDSHaplotype
from .container import TranscriptHaplotypeContainer, translate_cds
from .protein import ProteinHaplotype

__all__ = [
    "CDSHaplotype",
    "ProteinHaplotype",
    "TranscriptHaplotype",
    "TranscriptHaplotypeContainer",
    "diff_sequences",
    "sequence_hex",
    "translate_cds",
]
