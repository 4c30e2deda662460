"""Unit tests for the pikepdf metadata adapter."""

from collections.abc import Callable
from datetime import date
from pathlib import Path

import pikepdf
import pytest
import yaml

from entratel_receipt.adapters.metadata import PikePdfAdapter
from entratel_receipt.adapters.pdf import FpdfRenderer
from entratel_receipt.domain.models import ReceiptInfo
from entratel_receipt.domain.parser import parse_lines

LineFactory = Callable[..., str]


@pytest.fixture
def pdf_path(tmp_path: Path) -> Path:
    renderer = FpdfRenderer(logo=None)
    renderer.add_page()
    return renderer.save(tmp_path / "ricevuta.pdf")


@pytest.fixture
def info() -> ReceiptInfo:
    return ReceiptInfo(
        title="RICEVUTA F24",
        protocol_id="24011512345678901",
        file_name="ATTESTAZIONE_F24.rel",
        received_on=date(2024, 1, 15),
        accepted_count=3,
        rejected_count=1,
    )


class TestUpdatePdf:
    """Tests for PikePdfAdapter.update_pdf."""

    def test_writes_dublin_core(self, pdf_path: Path, info: ReceiptInfo) -> None:
        PikePdfAdapter().update_pdf(pdf_path, info)

        with pikepdf.open(pdf_path) as pdf:
            meta = pdf.open_metadata()
            assert meta["dc:title"] == "RICEVUTA F24"
            assert meta["dc:subject"] == {"Comunicazione di avvenuto ricevimento"}
            assert "24011512345678901" in meta["dc:description"]
            assert meta["dc:date"].startswith("2024-01-15")
            assert len(pdf.pages) == 1

    def test_empty_title_falls_back_to_subject(self, pdf_path: Path, info: ReceiptInfo) -> None:
        info.title = ""
        PikePdfAdapter().update_pdf(pdf_path, info)

        with pikepdf.open(pdf_path) as pdf:
            assert pdf.open_metadata()["dc:title"] == "Comunicazione di avvenuto ricevimento"

    def test_no_date(self, pdf_path: Path, info: ReceiptInfo) -> None:
        info.received_on = None
        PikePdfAdapter().update_pdf(pdf_path, info)

        with pikepdf.open(pdf_path) as pdf:
            assert "dc:date" not in pdf.open_metadata()


class TestWriteSidecar:
    """Tests for PikePdfAdapter.write_sidecar."""

    def test_sidecar_contents(
        self, pdf_path: Path, summary_line: LineFactory, detail_line: LineFactory
    ) -> None:
        store = parse_lines(
            [
                summary_line(title="TEST", accepted=1, rejected=1),
                detail_line(record_type="R", fiscal_code="01234567890"),
                detail_line(record_type="Q", denomination="BIANCHI SRL"),
            ]
        ).store

        sidecar = PikePdfAdapter().write_sidecar(pdf_path, store)

        assert sidecar == pdf_path.with_suffix(".yaml")
        data = yaml.safe_load(sidecar.read_text())
        assert data["source_file"] == "ricevuta.pdf"
        assert data["summaries"][0]["title"] == "TEST"
        assert data["summaries"][0]["received_on"] == "2024-01-15"
        assert [d["outcome"] for d in data["documents"]] == ["acquisito", "scartato"]
        assert data["documents"][0]["fiscal_code"] == "01234567890"
        assert data["documents"][1]["denomination"] == "BIANCHI SRL"
