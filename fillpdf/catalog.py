from __future__ import annotations
"""Field catalog sources.

A source turns the session's working copy of a PDF into a FieldCatalog.
Two interchangeable sources exist:
  - AcroFormCatalogSource reads /Root /AcroForm /Fields with pypdf
  - PdftkDumpCatalogSource parses `pdftk input.pdf dump_data_fields`
"""
from typing import Dict, Optional

from .config import CATALOG_SOURCE_ACROFORM, CATALOG_SOURCE_PDFTK, CATALOG_SOURCES, DEFAULT_PDFTK
from .errors import ToolSetupError
from .schema import FieldCatalog, FieldKind


class FieldCatalogSource:
    """Builds a FieldCatalog for a PDF on disk."""
    name = "abstract"

    def build(self, pdf_path: str) -> FieldCatalog:
        raise NotImplementedError

    @staticmethod
    def map_type(token: str, type_map: Dict[str, FieldKind]) -> Optional[FieldKind]:
        """Translate a tool-specific type token; None means not fillable here."""
        return type_map.get(token)


def get_catalog_source(name: str, pdftk: str = DEFAULT_PDFTK) -> FieldCatalogSource:
    # Imported here: both modules depend on FieldCatalogSource above
    from .dump import PdftkDumpCatalogSource
    from .extract import AcroFormCatalogSource

    if name == CATALOG_SOURCE_ACROFORM:
        return AcroFormCatalogSource()
    if name == CATALOG_SOURCE_PDFTK:
        return PdftkDumpCatalogSource(pdftk)
    raise ToolSetupError(
        f"unknown catalog source {name!r}, expected one of {', '.join(CATALOG_SOURCES)}"
    )


__all__ = [
    "FieldCatalogSource",
    "get_catalog_source",
]
