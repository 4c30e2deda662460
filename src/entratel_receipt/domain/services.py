"""Domain services - orchestrate business logic."""

import logging
from collections.abc import Callable
from pathlib import Path

from ..ports.metadata import MetadataPort
from ..ports.renderer import RendererPort
from .assembler import DocumentAssembler
from .errors import EmptyReportError
from .models import ConversionResult, ReceiptInfo
from .parser import ErrorPolicy, ParseOutcome, parse_lines

logger = logging.getLogger(__name__)

INPUT_ENCODING = "latin-1"


def output_path_for(path: Path) -> Path:
    """The PDF path for an input file: same directory and stem, .pdf suffix."""
    return path.with_suffix(".pdf")


class ConversionService:
    """Orchestrates the receipt-to-PDF pipeline."""

    def __init__(
        self,
        renderer_factory: Callable[[], RendererPort],
        metadata: MetadataPort | None = None,
        on_error: ErrorPolicy = ErrorPolicy.SKIP,
        strict_fields: bool = False,
        stamp_metadata: bool = True,
        write_sidecar: bool = False,
    ) -> None:
        self.renderer_factory = renderer_factory
        self.metadata = metadata
        self.on_error = on_error
        self.strict_fields = strict_fields
        self.stamp_metadata = stamp_metadata
        self.write_sidecar = write_sidecar

    def parse(self, path: Path) -> ParseOutcome:
        with open(path, encoding=INPUT_ENCODING) as f:
            return parse_lines(f, self.on_error, self.strict_fields)

    def convert(self, path: Path) -> ConversionResult:
        """Convert a receipt file into a PDF next to it.

        Pipeline:
            1. Parse every line into the record store
            2. Assemble the document (four passes)
            3. Write the PDF
            4. Stamp metadata / write sidecar (if configured)

        Decode errors are handled per line according to the error policy;
        assembly and I/O errors propagate.
        """
        result = ConversionResult(source_path=path)
        logger.info(f"Converting: {path.name}")

        outcome = self.parse(path)
        store = outcome.store
        result.record_count = len(store)
        result.skipped_lines = outcome.skipped_lines
        logger.info(
            f"Parsed {len(store)} records "
            f"({len(outcome.skipped_lines)} skipped, {outcome.ignored_count} ignored)"
        )

        if not store:
            raise EmptyReportError(f"No receipt records found in {path.name}")

        renderer = self.renderer_factory()
        DocumentAssembler(renderer).assemble(store)
        result.output_path = renderer.save(output_path_for(path))

        if self.metadata is None:
            return result

        try:
            summary = next(store.summaries(), None)
            if self.stamp_metadata and summary is not None:
                self.metadata.update_pdf(result.output_path, ReceiptInfo.from_summary(summary))
            if self.write_sidecar:
                result.sidecar_path = self.metadata.write_sidecar(result.output_path, store)
        except Exception as e:
            logger.exception(f"Metadata update failed: {e}")
            result.errors.append(str(e))

        return result
