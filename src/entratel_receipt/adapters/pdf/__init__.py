"""PDF rendering adapters."""

from .fpdf_renderer import FpdfRenderer, ReceiptPDF

__all__ = ["FpdfRenderer", "ReceiptPDF"]
