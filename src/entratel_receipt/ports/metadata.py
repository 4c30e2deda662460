"""Metadata port - interface for PDF metadata and sidecar."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.models import ReceiptInfo, RecordStore


class MetadataPort(ABC):
    """Interface for PDF metadata and sidecar handling."""

    @abstractmethod
    def update_pdf(self, path: Path, info: "ReceiptInfo") -> None:
        """Stamp receipt metadata onto a generated PDF."""
        pass

    @abstractmethod
    def write_sidecar(self, path: Path, store: "RecordStore") -> Path:
        """Write sidecar file alongside PDF.

        Returns path to sidecar file.
        """
        pass
