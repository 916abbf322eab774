"""Haplotype output publishers."""

from .base import HaplotypePublisher
from .json_haplotypes import JsonHaplotypePublisher
from .summary import SUMMARY_COLUMNS, SummaryTablePublisher, haplotype_summary_frame

__all__ = [
    "HaplotypePublisher",
    "JsonHaplotypePublisher",
    "SUMMARY_COLUMNS",
    "SummaryTablePublisher",
    "haplotype_summary_frame",
]
