"""Document assembly - lays out parsed records as receipt pages."""

import logging

from ..ports.renderer import RendererPort
from .errors import FatalAssemblyError
from .models import (
    FIRST_PAGE_KIND,
    TITLE_KIND,
    DetailRecord,
    RecordStore,
    SummaryRecord,
    TextLine,
)

logger = logging.getLogger(__name__)

FONT_FAMILY = "Courier"
BODY_SIZE = 8
DATE_FORMAT = "%d/%m/%Y"

LIST_HEADING = "ELENCO DEI DOCUMENTI ACQUISITI E/O SCARTATI"
DOCUMENT_TYPES = {
    "I24A0": "Esito versamento F24",
}

# (width, caption) of the closing list columns
LIST_COLUMNS = (
    (20, "Esito"),
    (40, "Protocollo Documenti"),
    (40, "Codice Fiscale"),
    (60, "Denominazione"),
)
LABEL_WIDTH = 50
VALUE_WIDTH = 50
COUNT_WIDTH = 10


def document_type_label(supply_code: str) -> str:
    return DOCUMENT_TYPES.get(supply_code.strip(), "")


def _check_detail_line(record: DetailRecord, line: TextLine) -> None:
    if line.kind == TITLE_KIND:
        raise FatalAssemblyError(
            f"Unexpected text line kind {line.kind!r} in record "
            f"{record.protocol_sequence_number!r}: {line.text!r}"
        )


class DocumentAssembler:
    """Builds the receipt document in four passes over the record store.

    Passes never interleave:
        1. Opening page per summary record
        2. First-page lines of detail records, on the current page
        3. One page per detail record
        4. Closing list: summary block per summary record, a row per detail
    """

    def __init__(self, renderer: RendererPort) -> None:
        self.renderer = renderer

    def assemble(self, store: RecordStore) -> None:
        for summary in store.summaries():
            self.start_document(summary)

        for detail in store.details():
            if detail.first_page:
                self.add_to_first_page(detail)

        for detail in store.details():
            self.add_detail_page(detail)

        for record in store:
            if isinstance(record, SummaryRecord):
                self.add_last_page(record)
            elif isinstance(record, DetailRecord):
                self.add_last_page_row(record)
            else:
                raise TypeError(f"Unknown record: {record!r}")

        logger.info(f"Assembled {self.renderer.page_count} pages")

    def _body_font(self) -> None:
        self.renderer.set_font(FONT_FAMILY, "", BODY_SIZE)

    def start_document(self, summary: SummaryRecord) -> None:
        r = self.renderer
        self._body_font()
        r.add_page()
        r.ln()

        r.cell(0, 6, summary.title, align="C", below=True)
        for line in summary.text_lines:
            r.cell(0, 5, line.text, below=True)
        r.ln()

        received = summary.received_on.strftime(DATE_FORMAT) if summary.received_on else ""
        r.cell(0, 5, f"Li, {received}", below=True)
        r.ln()

    def add_to_first_page(self, detail: DetailRecord) -> None:
        r = self.renderer
        self._body_font()
        if r.page_count == 0:
            logger.warning("No opening page for first-page lines, starting one")
            r.add_page()
        r.ln()

        for line in detail.text_lines:
            _check_detail_line(detail, line)
            if line.kind == FIRST_PAGE_KIND:
                r.cell(0, 6, line.text, below=True)

    def add_detail_page(self, detail: DetailRecord) -> None:
        r = self.renderer
        self._body_font()
        r.add_page()
        r.ln()

        for line in detail.text_lines:
            _check_detail_line(detail, line)
            r.cell(0, 6, line.text, below=True)

    def add_last_page(self, summary: SummaryRecord) -> None:
        r = self.renderer
        self._body_font()
        r.add_page()
        r.ln()

        r.cell(0, 6, LIST_HEADING, align="C", below=True)
        r.ln()

        rows = (
            ("PROTOCOLLO DI RICEZIONE:", summary.protocol_id),
            ("NOME DEL FILE:", summary.long_file_name),
            ("TIPO DOCUMENTO:", document_type_label(summary.supply_code)),
        )
        for label, value in rows:
            r.cell(LABEL_WIDTH, 5, label)
            r.cell(VALUE_WIDTH, 5, value)
            r.ln()

        r.cell(LABEL_WIDTH, 5, "DOCUMENTI ACQUISITI:")
        r.cell(COUNT_WIDTH, 5, str(summary.accepted_count), align="R")
        r.ln()
        r.cell(LABEL_WIDTH, 5, "DOCUMENTI SCARTATI:")
        r.cell(COUNT_WIDTH, 5, str(summary.rejected_count), align="R")

        r.ln()
        r.ln()
        for width, caption in LIST_COLUMNS:
            r.cell(width, 5, caption)

    def add_last_page_row(self, detail: DetailRecord) -> None:
        r = self.renderer
        self._body_font()
        r.ln()

        values = (
            detail.outcome,
            detail.protocol_sequence_number,
            detail.fiscal_code,
            detail.denomination,
        )
        for (width, _), value in zip(LIST_COLUMNS, values):
            r.cell(width, 5, value)
