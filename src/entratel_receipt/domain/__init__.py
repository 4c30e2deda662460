"""Domain layer - core business logic."""

from .models import (
    ConversionResult,
    DetailRecord,
    ReceiptInfo,
    Record,
    RecordHeader,
    RecordStore,
    SummaryRecord,
    TextLine,
)

__all__ = [
    "ConversionResult",
    "DetailRecord",
    "ReceiptInfo",
    "Record",
    "RecordHeader",
    "RecordStore",
    "SummaryRecord",
    "TextLine",
]
