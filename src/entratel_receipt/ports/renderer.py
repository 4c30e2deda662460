"""Renderer port - interface for page layout primitives."""

from abc import ABC, abstractmethod
from pathlib import Path


class RendererPort(ABC):
    """Interface for a stateful page-oriented document builder.

    The builder keeps a cursor: cells are emitted at the current position,
    either moving right (default) or to the start of the next line
    (``below=True``).
    """

    @abstractmethod
    def set_font(self, family: str, style: str = "", size: float = 8) -> None:
        pass

    @abstractmethod
    def add_page(self) -> None:
        """Start a new page; header and footer are drawn by the builder."""
        pass

    @abstractmethod
    def ln(self, height: float | None = None) -> None:
        """Line break; None reuses the height of the last cell."""
        pass

    @abstractmethod
    def cell(
        self,
        width: float,
        height: float,
        text: str = "",
        align: str = "L",
        below: bool = False,
    ) -> None:
        """Emit a single-line cell; width 0 extends to the right margin."""
        pass

    @property
    @abstractmethod
    def page_count(self) -> int:
        pass

    @abstractmethod
    def save(self, path: Path) -> Path:
        """Write the finished document. Returns the output path."""
        pass
