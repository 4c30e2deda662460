"""Domain errors."""


class ReceiptError(Exception):
    """Base class for all entratel-receipt errors."""

    pass


class DecodeError(ReceiptError):
    """A fixed-width field could not be decoded."""

    pass


class BoundsError(DecodeError):
    """Line is shorter than the field it should contain."""

    def __init__(self, offset: int, length: int, line_length: int) -> None:
        super().__init__(
            f"Field at {offset}+{length} out of range (line length {line_length})"
        )
        self.offset = offset
        self.length = length
        self.line_length = line_length


class FormatError(DecodeError):
    """Numeric or date field contains invalid characters."""

    def __init__(self, raw: str, expected: str) -> None:
        super().__init__(f"Invalid {expected} value: {raw!r}")
        self.raw = raw
        self.expected = expected


class LineError(ReceiptError):
    """A decode error that aborts the whole run."""

    def __init__(self, line_no: int, cause: DecodeError) -> None:
        super().__init__(f"Line {line_no}: {cause}")
        self.line_no = line_no
        self.cause = cause


class FatalAssemblyError(ReceiptError):
    """Layout contract violated while assembling the document."""

    pass


class EmptyReportError(ReceiptError):
    """Input contains no summary or detail records."""

    pass
