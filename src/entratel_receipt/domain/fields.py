"""Fixed-width field decoding."""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from .errors import BoundsError, FormatError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y%m%d"
_DIGITS = re.compile(r"[0-9]+")
_DATE_DIGITS = re.compile(r"[0-9]{8}")


class FieldKind(str, Enum):
    """How a raw substring is turned into a value."""

    STR = "str"  # Raw slice, untouched
    TEXT = "text"  # Trimmed slice
    INT = "int"
    DATE = "date"


@dataclass(frozen=True)
class FieldSpec:
    """One column of a fixed-width layout."""

    name: str
    offset: int
    length: int
    kind: FieldKind = FieldKind.STR

    @property
    def end(self) -> int:
        return self.offset + self.length


def slice_field(line: str, offset: int, length: int, trim: bool = False) -> str:
    """Return line[offset:offset+length], failing if the line is too short."""
    if offset < 0 or length < 0 or len(line) < offset + length:
        raise BoundsError(offset, length, len(line))
    value = line[offset : offset + length]
    return value.strip() if trim else value


def decode_int(raw: str) -> int:
    """Decode a base-10 unsigned integer made of ASCII digits only."""
    if not _DIGITS.fullmatch(raw):
        raise FormatError(raw, "integer")
    return int(raw)


def decode_date(raw: str) -> date:
    """Decode a YYYYMMDD date."""
    if not _DATE_DIGITS.fullmatch(raw):
        raise FormatError(raw, "date")
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()
    except ValueError as e:
        raise FormatError(raw, "date") from e


def decode_field(line: str, spec: FieldSpec, strict: bool = False) -> Any:
    """Decode one field.

    Bounds errors always propagate. Format errors propagate only when
    ``strict``; otherwise integers fall back to 0 and dates to None.
    """
    raw = slice_field(line, spec.offset, spec.length)

    if spec.kind == FieldKind.STR:
        return raw
    if spec.kind == FieldKind.TEXT:
        return raw.strip()

    try:
        if spec.kind == FieldKind.INT:
            return decode_int(raw)
        return decode_date(raw)
    except FormatError as e:
        if strict:
            raise
        logger.warning(f"Field {spec.name}: {e}, using default")
        return 0 if spec.kind == FieldKind.INT else None


def decode_fields(
    line: str, schema: tuple[FieldSpec, ...], strict: bool = False
) -> dict[str, Any]:
    """Decode every field of a schema into a name -> value mapping."""
    return {spec.name: decode_field(line, spec, strict) for spec in schema}
