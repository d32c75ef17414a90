"""
export – Write a finished catalog to JSON or CSV.

Both writers go through a temporary file in the destination directory
and ``os.replace`` it into place, so a failed write leaves any previous
file untouched and no partial output behind.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from encounter_catalog.config import EXPORT_DIR, JSON_INDENT
from encounter_catalog.encounters import RECORD_FIELDS, Catalog
from encounter_catalog.merger import flatten

logger = logging.getLogger(__name__)

CSV_FIELDS = ["dex_key"] + RECORD_FIELDS


def catalog_to_dict(catalog: Catalog) -> Dict[str, List[Dict[str, Any]]]:
    return {key: [record.to_dict() for record in records]
            for key, records in catalog.items()}


def _default_path(stem: str, suffix: str) -> Path:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    return EXPORT_DIR / f"{stem}_{ts}.{suffix}"


def _write_atomic(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", newline="", dir=path.parent, delete=False
        ) as handle:
            temp_path = Path(handle.name)
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
        temp_path = None
    except OSError:
        logger.error("Failed to write %s", path)
        raise
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink()
            except FileNotFoundError:
                pass


def export_json(catalog: Catalog, filepath: Optional[Path] = None) -> Path:
    """Export the catalog as an indented JSON object keyed by dex key."""
    if filepath is None:
        filepath = _default_path("encounters", "json")
    filepath = Path(filepath)

    text = json.dumps(catalog_to_dict(catalog), indent=JSON_INDENT, ensure_ascii=False)
    _write_atomic(filepath, text)

    logger.info("Exported %d species/forms to %s", len(catalog), filepath)
    return filepath


def export_csv(catalog: Catalog, filepath: Optional[Path] = None) -> Path:
    """Export the catalog as one CSV row per record."""
    if filepath is None:
        filepath = _default_path("encounters", "csv")
    filepath = Path(filepath)

    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=CSV_FIELDS)
    writer.writeheader()
    records = flatten(catalog)
    for rec in records:
        row = rec.to_dict()
        row["dex_key"] = rec.dex_key
        row["fixed_ball"] = row["fixed_ball"] or ""
        row["size_type"] = row["size_type"] or ""
        writer.writerow(row)
    _write_atomic(filepath, buf.getvalue())

    logger.info("Exported %d encounters to %s", len(records), filepath)
    return filepath


EXPORTERS = {
    "json": export_json,
    "csv": export_csv,
}
