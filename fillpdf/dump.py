from __future__ import annotations
import html
import logging
import os
from typing import Dict, List

from .catalog import FieldCatalogSource
from .config import DEFAULT_PDFTK
from .errors import FieldDumpParseError
from .runner import run_command
from .schema import FieldCatalog, FieldKind, FormField, TEXT, BUTTON

logger = logging.getLogger(__name__)

RECORD_SEPARATOR = "---"
KEY_SEPARATOR = ": "

# pdftk FieldType tokens; Choice and Signature fields are not fillable here
PDFTK_TYPE_MAP: Dict[str, FieldKind] = {
    "Text": TEXT,
    "Button": BUTTON,
}


def _records(dump: str) -> List[Dict[str, str]]:
    records: List[Dict[str, str]] = []
    current: Dict[str, str] = {}
    for raw in dump.splitlines():
        line = raw.rstrip("\r")
        if line == RECORD_SEPARATOR:
            if current:
                records.append(current)
            current = {}
            continue
        if not line.strip():
            continue
        key, sep, value = line.partition(KEY_SEPARATOR)
        if not sep:
            raise FieldDumpParseError(line)
        # Repeated keys (FieldStateOption) keep the first occurrence
        current.setdefault(key, html.unescape(value))
    if current:
        records.append(current)
    return records


def parse_field_dump(dump: str) -> FieldCatalog:
    """Parse `dump_data_fields` output into a catalog.

    Records are separated by `---` lines and hold `Key: Value` lines. Only
    FieldType, FieldName and FieldValue are used.
    """
    catalog = FieldCatalog()
    for rec in _records(dump):
        name = rec.get("FieldName")
        kind = FieldCatalogSource.map_type(rec.get("FieldType", ""), PDFTK_TYPE_MAP)
        if not name or kind is None:
            logger.debug("Skipping field %r of type %r", name, rec.get("FieldType"))
            continue
        catalog.add(FormField(name=name, field_type=kind, current_value=rec.get("FieldValue", "")))
    return catalog


class PdftkDumpCatalogSource(FieldCatalogSource):
    name = "pdftk"

    def __init__(self, pdftk: str = DEFAULT_PDFTK):
        self.pdftk = pdftk

    def build(self, pdf_path: str) -> FieldCatalog:
        directory, filename = os.path.split(os.path.abspath(pdf_path))
        out = run_command(self.pdftk, filename, "dump_data_fields", cwd=directory)
        return parse_field_dump(out.decode("utf-8", errors="replace"))
