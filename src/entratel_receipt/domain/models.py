"""Domain models."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

SUMMARY_TYPE = "P"
ACCEPTED_TYPE = "R"
REJECTED_TYPE = "Q"

TERMINATOR_KIND = "F"
FIRST_PAGE_KIND = "P"
TITLE_KIND = "T"

OUTCOME_LABELS = {
    ACCEPTED_TYPE: "acquisito",
    REJECTED_TYPE: "scartato",
}


@dataclass(frozen=True)
class RecordHeader:
    """Prefix shared by every record line."""

    protocol_id: str  # Transmission identifier, opaque
    record_type: str  # Discriminator


@dataclass(frozen=True)
class TextLine:
    """One row of a record's free-text body."""

    kind: str
    text: str

    @property
    def is_first_page(self) -> bool:
        return self.kind == FIRST_PAGE_KIND


@dataclass(frozen=True)
class SummaryRecord:
    """Receipt summary ("P" record), one per file."""

    header: RecordHeader
    supply_code: str
    short_file_name: str
    received_on: date | None
    accepted_count: int
    rejected_count: int
    long_file_name: str
    version: int
    total_received: int
    title: str
    text_lines: tuple[TextLine, ...] = ()

    @property
    def protocol_id(self) -> str:
        return self.header.protocol_id

    @property
    def record_type(self) -> str:
        return self.header.record_type


@dataclass(frozen=True)
class DetailRecord:
    """Accepted ("R") or rejected ("Q") sub-document."""

    header: RecordHeader
    protocol_sequence_number: str
    fiscal_code: str
    denomination: str
    receipt_sequence_number: str = ""  # Not present in the current layout
    text_lines: tuple[TextLine, ...] = ()

    @property
    def protocol_id(self) -> str:
        return self.header.protocol_id

    @property
    def record_type(self) -> str:
        return self.header.record_type

    @property
    def first_page(self) -> bool:
        return any(t.is_first_page for t in self.text_lines)

    @property
    def outcome(self) -> str:
        return OUTCOME_LABELS[self.record_type]


Record = SummaryRecord | DetailRecord


@dataclass
class RecordStore:
    """Parsed records in input line order."""

    records: list[Record] = field(default_factory=list)

    def append(self, record: Record) -> None:
        self.records.append(record)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def summaries(self) -> Iterator[SummaryRecord]:
        return (r for r in self.records if isinstance(r, SummaryRecord))

    def details(self) -> Iterator[DetailRecord]:
        return (r for r in self.records if isinstance(r, DetailRecord))


@dataclass
class ReceiptInfo:
    """Document metadata for the generated PDF."""

    title: str
    protocol_id: str
    file_name: str
    received_on: date | None
    accepted_count: int = 0
    rejected_count: int = 0

    @classmethod
    def from_summary(cls, summary: SummaryRecord) -> "ReceiptInfo":
        return cls(
            title=summary.title,
            protocol_id=summary.protocol_id,
            file_name=summary.long_file_name,
            received_on=summary.received_on,
            accepted_count=summary.accepted_count,
            rejected_count=summary.rejected_count,
        )


@dataclass
class ConversionResult:
    """Result of converting one receipt file."""

    source_path: Path
    output_path: Path | None = None
    sidecar_path: Path | None = None
    record_count: int = 0
    skipped_lines: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0 and self.output_path is not None
