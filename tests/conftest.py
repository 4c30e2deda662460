"""Shared test fixtures."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from entratel_receipt.ports.metadata import MetadataPort
from entratel_receipt.ports.renderer import RendererPort

LINE_WIDTH = 2000
PROTOCOL_ID = "24011512345678901"

TextRows = Sequence[tuple[str, str]]


def _put(buf: list[str], offset: int, value: str, width: int) -> None:
    buf[offset : offset + width] = list(value.ljust(width)[:width])


def _put_rows(buf: list[str], start: int, rows: TextRows) -> None:
    for i, (kind, text) in enumerate(rows):
        offset = start + i * 80
        _put(buf, offset, kind, 1)
        _put(buf, offset + 1, text, 79)


def _count(value: int | str) -> str:
    return f"{value:06d}" if isinstance(value, int) else value


def build_summary_line(
    title: str = "TEST",
    accepted: int | str = 3,
    rejected: int | str = 1,
    received: str = "20240115",
    supply_code: str = "I24A0",
    short_file_name: str = "ABC12345",
    long_file_name: str = "ATTESTAZIONE_F24.rel",
    version: int | str = 1,
    total_received: int | str = 4,
    rows: TextRows = (("A", "Si comunica che il file e' stato ricevuto"),),
    protocol_id: str = PROTOCOL_ID,
    record_type: str = "P",
    width: int = LINE_WIDTH,
) -> str:
    """Build a summary ("P") line; the text body ends with an "F" row if room."""
    buf = [" "] * max(width, 400 + (len(rows) + 1) * 80)
    _put(buf, 0, protocol_id, 17)
    _put(buf, 17, record_type, 1)
    _put(buf, 27, supply_code, 5)
    _put(buf, 38, short_file_name, 8)
    _put(buf, 46, received, 8)
    _put(buf, 54, _count(accepted), 6)
    _put(buf, 60, _count(rejected), 6)
    _put(buf, 68, long_file_name, 47)
    _put(buf, 115, _count(version), 6)
    _put(buf, 121, _count(total_received), 6)
    _put(buf, 250, title, 150)
    _put_rows(buf, 400, rows)
    if len(rows) < 20:
        _put(buf, 400 + len(rows) * 80, "F", 1)
    return "".join(buf)


def build_detail_line(
    record_type: str = "Q",
    protocol_sequence_number: str = "000000001",
    fiscal_code: str = "RSSMRA80A01H501U",
    denomination: str = "ROSSI MARIO",
    rows: TextRows = (("A", "Documento scartato"),),
    protocol_id: str = PROTOCOL_ID,
    width: int = LINE_WIDTH,
) -> str:
    """Build a detail ("R"/"Q") line; the text body ends with an "F" row if room."""
    buf = [" "] * max(width, 480 + (len(rows) + 1) * 80)
    _put(buf, 0, protocol_id, 17)
    _put(buf, 17, record_type, 1)
    _put(buf, 18, protocol_sequence_number, 9)
    _put(buf, 38, fiscal_code, 16)
    _put(buf, 54, denomination, 60)
    _put_rows(buf, 480, rows)
    if len(rows) < 19:
        _put(buf, 480 + len(rows) * 80, "F", 1)
    return "".join(buf)


@dataclass
class Cell:
    text: str
    width: float
    height: float
    align: str
    below: bool
    font: tuple[str, str, float] | None


@dataclass
class RecordingRenderer(RendererPort):
    """In-memory renderer that keeps every cell per page."""

    pages: list[list[Cell]] = field(default_factory=list)
    calls: list[tuple] = field(default_factory=list)
    font: tuple[str, str, float] | None = None
    saved_to: Path | None = None

    def set_font(self, family: str, style: str = "", size: float = 8) -> None:
        self.font = (family, style, size)
        self.calls.append(("set_font", family, style, size))

    def add_page(self) -> None:
        self.pages.append([])
        self.calls.append(("add_page",))

    def ln(self, height: float | None = None) -> None:
        self.calls.append(("ln", height))

    def cell(
        self,
        width: float,
        height: float,
        text: str = "",
        align: str = "L",
        below: bool = False,
    ) -> None:
        if not self.pages:
            raise RuntimeError("No page open")
        self.pages[-1].append(Cell(text, width, height, align, below, self.font))
        self.calls.append(("cell", text))

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def save(self, path: Path) -> Path:
        path.write_bytes(b"%PDF-1.4 test content")
        self.saved_to = path
        return path

    def texts(self, page: int) -> list[str]:
        return [c.text for c in self.pages[page]]

    def find(self, text: str) -> list[tuple[int, Cell]]:
        """All (page index, cell) pairs whose text equals ``text``."""
        return [
            (i, c) for i, page in enumerate(self.pages) for c in page if c.text == text
        ]


@pytest.fixture
def summary_line() -> Callable[..., str]:
    """Factory for fixed-width summary lines."""
    return build_summary_line


@pytest.fixture
def detail_line() -> Callable[..., str]:
    """Factory for fixed-width detail lines."""
    return build_detail_line


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def mock_metadata(tmp_path: Path) -> MagicMock:
    """Mock metadata port."""
    mock = MagicMock(spec=MetadataPort)
    mock.write_sidecar.return_value = tmp_path / "receipt.yaml"
    return mock


@pytest.fixture
def receipt_file(tmp_path: Path) -> Callable[[list[str]], Path]:
    """Write lines to a Latin-1 receipt file and return its path."""

    def _write(lines: list[str], name: str = "receipt.rel") -> Path:
        path = tmp_path / name
        path.write_bytes("".join(f"{line}\r\n" for line in lines).encode("latin-1"))
        return path

    return _write
