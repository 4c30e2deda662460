"""Metadata adapter using pikepdf and YAML."""

import logging
from datetime import datetime
from pathlib import Path

import pikepdf
import yaml

from ...domain.models import ReceiptInfo, RecordStore
from ...ports.metadata import MetadataPort

logger = logging.getLogger(__name__)

SUBJECT = "Comunicazione di avvenuto ricevimento"
CREATOR = "Servizio telematico Entratel"


class PikePdfAdapter(MetadataPort):
    """Metadata implementation using pikepdf for PDF and YAML for sidecar."""

    def update_pdf(self, path: Path, info: ReceiptInfo) -> None:
        logger.info(f"Updating PDF metadata: {path.name}")

        with pikepdf.open(path, allow_overwriting_input=True) as pdf:
            with pdf.open_metadata() as meta:
                meta["dc:title"] = info.title or SUBJECT
                meta["dc:subject"] = SUBJECT
                meta["dc:creator"] = [CREATOR]
                meta["dc:description"] = (
                    f"Protocollo {info.protocol_id} - {info.file_name}"
                )
                if info.received_on:
                    meta["dc:date"] = info.received_on.isoformat()

            pdf.save(path)

        logger.info("PDF metadata updated")

    def write_sidecar(self, path: Path, store: RecordStore) -> Path:
        sidecar_path = path.with_suffix(".yaml")

        data = {
            "summaries": [
                {
                    "protocol_id": s.protocol_id,
                    "supply_code": s.supply_code,
                    "file_name": s.long_file_name,
                    "received_on": s.received_on.isoformat() if s.received_on else None,
                    "accepted": s.accepted_count,
                    "rejected": s.rejected_count,
                    "title": s.title,
                }
                for s in store.summaries()
            ],
            "documents": [
                {
                    "outcome": d.outcome,
                    "protocol_sequence_number": d.protocol_sequence_number,
                    "fiscal_code": d.fiscal_code,
                    "denomination": d.denomination,
                }
                for d in store.details()
            ],
            "processed_at": datetime.now().isoformat(),
            "source_file": path.name,
        }

        logger.info(f"Writing sidecar: {sidecar_path.name}")
        sidecar_path.write_text(
            yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        )

        return sidecar_path
