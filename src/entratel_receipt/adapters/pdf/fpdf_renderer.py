"""Renderer adapter using fpdf2."""

import logging
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from ...ports.renderer import RendererPort

logger = logging.getLogger(__name__)

HEADER_CAPTION = (
    "SERVIZIO TELEMATICO ENTRATEL DI PRESENTAZIONE DELLE DICHIARAZIONI\n"
    "COMUNICAZIONE DI AVVENUTO RICEVIMENTO (art. 3, comma 10, D.P.R. 322/1998)"
)
HEADER_FONT = "Courier"
LOGO_X = 85
LOGO_Y = 5
CAPTION_Y = 20


class ReceiptPDF(FPDF):
    """A4 portrait page with the Entratel logo, caption and page number."""

    def __init__(self, logo: Path | None = None) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.logo = logo
        self.set_font(HEADER_FONT, "B", 12)

    def header(self) -> None:
        self.set_font(HEADER_FONT, "B", 12)
        if self.logo is not None:
            self.image(str(self.logo), x=LOGO_X, y=LOGO_Y)
        self.set_y(CAPTION_Y)
        self.set_font(HEADER_FONT, "B", 8)
        self.multi_cell(
            0, 6, HEADER_CAPTION, align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT
        )

    def footer(self) -> None:
        self.set_font(HEADER_FONT, "B", 12)
        self.set_y(-15)
        self.cell(0, 10, str(self.page_no()), align="C")


class FpdfRenderer(RendererPort):
    """Renderer implementation on top of an fpdf2 document."""

    def __init__(self, logo: Path | None = Path("logo.png")) -> None:
        if logo is not None and not logo.exists():
            logger.warning(f"Logo not found, header drawn without it: {logo}")
            logo = None
        self.pdf = ReceiptPDF(logo=logo)

    def set_font(self, family: str, style: str = "", size: float = 8) -> None:
        self.pdf.set_font(family, style, size)

    def add_page(self) -> None:
        self.pdf.add_page()

    def ln(self, height: float | None = None) -> None:
        self.pdf.ln(height)

    def cell(
        self,
        width: float,
        height: float,
        text: str = "",
        align: str = "L",
        below: bool = False,
    ) -> None:
        if below:
            new_x, new_y = XPos.LEFT, YPos.NEXT
        else:
            new_x, new_y = XPos.RIGHT, YPos.TOP
        self.pdf.cell(width, height, text, align=align, new_x=new_x, new_y=new_y)

    @property
    def page_count(self) -> int:
        return self.pdf.page_no()

    def save(self, path: Path) -> Path:
        logger.info(f"Writing PDF: {path.name} ({self.page_count} pages)")
        self.pdf.output(str(path))
        return path
