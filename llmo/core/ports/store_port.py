"""Diagnosis Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import DiagnosisRecord, HistoryEntry


class DiagnosisStorePort(ABC):
    """Abstract interface for persisting diagnosis records."""

    @abstractmethod
    def persist(self, record: DiagnosisRecord) -> int | str:
        """Store a record and return its identifier."""
        ...

    @abstractmethod
    def recent(self, limit: int = 10) -> list[HistoryEntry]:
        """Return the newest records first."""
        ...

    @abstractmethod
    def setup(self, reset: bool = False) -> None:
        """Create (or recreate) the underlying table or collection."""
        ...

    @abstractmethod
    def ping(self) -> bool:
        """Check the store is reachable."""
        ...
