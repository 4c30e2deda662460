"""Record classification and parsing.

Each input line holds one record. The first 17 characters carry the
telematic protocol id and character 17 the record type:

    P      receipt summary, text body at 400 (max 20 rows)
    R, Q   accepted / rejected document, text body at 480 (max 19 rows)

Text body rows are 80 characters wide (1-char kind + 79-char text) and end
at the first row of kind "F". Lines with any other record type are ignored.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from .errors import DecodeError, LineError
from .fields import FieldKind, FieldSpec, decode_fields, slice_field
from .models import (
    ACCEPTED_TYPE,
    REJECTED_TYPE,
    SUMMARY_TYPE,
    TERMINATOR_KIND,
    DetailRecord,
    Record,
    RecordHeader,
    RecordStore,
    SummaryRecord,
    TextLine,
)

logger = logging.getLogger(__name__)

PROTOCOL_ID = FieldSpec("protocol_id", 0, 17)
RECORD_TYPE = FieldSpec("record_type", 17, 1)

SUMMARY_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("supply_code", 27, 5),
    FieldSpec("short_file_name", 38, 8, FieldKind.TEXT),
    FieldSpec("received_on", 46, 8, FieldKind.DATE),
    FieldSpec("accepted_count", 54, 6, FieldKind.INT),
    FieldSpec("rejected_count", 60, 6, FieldKind.INT),
    FieldSpec("long_file_name", 68, 47, FieldKind.TEXT),
    FieldSpec("version", 115, 6, FieldKind.INT),
    FieldSpec("total_received", 121, 6, FieldKind.INT),
    FieldSpec("title", 250, 150, FieldKind.TEXT),
)

DETAIL_SCHEMA: tuple[FieldSpec, ...] = (
    FieldSpec("protocol_sequence_number", 18, 9),
    FieldSpec("fiscal_code", 38, 16, FieldKind.TEXT),
    FieldSpec("denomination", 54, 60, FieldKind.TEXT),
)

TEXT_ROW_WIDTH = 80
TEXT_KIND_WIDTH = 1
TEXT_WIDTH = TEXT_ROW_WIDTH - TEXT_KIND_WIDTH

SUMMARY_TEXT_OFFSET = 400
SUMMARY_TEXT_ROWS = 20
DETAIL_TEXT_OFFSET = 480
DETAIL_TEXT_ROWS = 19


class ErrorPolicy(str, Enum):
    """What to do with a line that fails to decode."""

    SKIP = "skip"
    ABORT = "abort"


@dataclass
class ParseOutcome:
    """Records parsed from a file plus diagnostics for skipped lines."""

    store: RecordStore = field(default_factory=RecordStore)
    skipped_lines: list[str] = field(default_factory=list)
    ignored_count: int = 0


def parse_header(line: str) -> RecordHeader:
    return RecordHeader(
        protocol_id=slice_field(line, PROTOCOL_ID.offset, PROTOCOL_ID.length),
        record_type=slice_field(line, RECORD_TYPE.offset, RECORD_TYPE.length),
    )


def parse_text_lines(line: str, start: int, max_rows: int) -> tuple[TextLine, ...]:
    """Decode up to max_rows text rows, stopping before the terminator."""
    rows: list[TextLine] = []
    for i in range(max_rows):
        offset = start + i * TEXT_ROW_WIDTH
        kind = slice_field(line, offset, TEXT_KIND_WIDTH)
        if kind == TERMINATOR_KIND:
            break
        text = slice_field(line, offset + TEXT_KIND_WIDTH, TEXT_WIDTH, trim=True)
        rows.append(TextLine(kind=kind, text=text))
    return tuple(rows)


def parse_summary(line: str, header: RecordHeader, strict: bool = False) -> SummaryRecord:
    values = decode_fields(line, SUMMARY_SCHEMA, strict)
    text_lines = parse_text_lines(line, SUMMARY_TEXT_OFFSET, SUMMARY_TEXT_ROWS)
    return SummaryRecord(header=header, text_lines=text_lines, **values)


def parse_detail(line: str, header: RecordHeader, strict: bool = False) -> DetailRecord:
    values = decode_fields(line, DETAIL_SCHEMA, strict)
    text_lines = parse_text_lines(line, DETAIL_TEXT_OFFSET, DETAIL_TEXT_ROWS)
    return DetailRecord(header=header, text_lines=text_lines, **values)


def parse_line(line: str, strict: bool = False) -> Record | None:
    """Parse one line into a record, or None for unrecognised record types."""
    header = parse_header(line)

    if header.record_type == SUMMARY_TYPE:
        return parse_summary(line, header, strict)
    if header.record_type in (ACCEPTED_TYPE, REJECTED_TYPE):
        return parse_detail(line, header, strict)
    return None


def parse_lines(
    lines: Iterable[str],
    on_error: ErrorPolicy = ErrorPolicy.SKIP,
    strict: bool = False,
) -> ParseOutcome:
    """Parse every line into a RecordStore, preserving input order."""
    outcome = ParseOutcome()

    for line_no, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue

        try:
            record = parse_line(line, strict)
        except DecodeError as e:
            if on_error == ErrorPolicy.ABORT:
                raise LineError(line_no, e) from e
            logger.warning(f"Skipping line {line_no}: {e}")
            outcome.skipped_lines.append(f"line {line_no}: {e}")
            continue

        if record is None:
            logger.debug(f"Ignoring line {line_no}: record type {line[17:18]!r}")
            outcome.ignored_count += 1
            continue

        logger.debug(f"Line {line_no}: {record!r}")
        outcome.store.append(record)

    return outcome
