"""Base adaptor contract for variation source storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from variationhub.models import Source


class SourceNotFoundError(LookupError):
    """Raised when no stored source matches a lookup."""


class SourceStore(ABC):
    """Fetches and stores :class:`Source` records in a relational backend."""

    @abstractmethod
    def fetch_by_dbID(self, source_id: int) -> Source:  # noqa: N802
        """Return the source with primary key ``source_id``."""

    @abstractmethod
    def fetch_by_name(self, name: str) -> Source:
        """Return the source with the given unique name."""

    @abstractmethod
    def fetch_all(self) -> list[Source]:
        """Return every stored source ordered by primary key."""

    @abstractmethod
    def store(self, source: Source) -> Source:
        """Insert ``source`` and return a copy carrying its new primary key."""
