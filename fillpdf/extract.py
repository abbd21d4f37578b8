from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from pypdf import PdfReader
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject

from .catalog import FieldCatalogSource
from .config import MAX_FIELDS
from .errors import NotAcroFormError
from .schema import FieldCatalog, FieldKind, FormField, TEXT, BUTTON

logger = logging.getLogger(__name__)

# Raw AcroForm /FT tokens; /Ch and /Sig fields are not fillable here
ACROFORM_TYPE_MAP: Dict[str, FieldKind] = {
    "/Tx": TEXT,
    "/Btn": BUTTON,
}


def _resolve(obj: Any) -> Any:
    return obj.get_object() if obj is not None and hasattr(obj, "get_object") else obj


def _raw_string(value: Any) -> str:
    """String form of /T or /V as stored in the file (no entity decoding).

    Name values such as /Yes lose the leading slash, which is how the pdftk
    dump reports button states.
    """
    value = _resolve(value)
    if value is None:
        return ""
    if isinstance(value, NameObject):
        return str(value)[1:]
    if isinstance(value, list):
        # multi-select values; not expected for Tx/Btn but keep them readable
        return ",".join(_raw_string(v) for v in value)
    return str(value)


def _is_terminal(field: Any) -> bool:
    kids = _resolve(field.get("/Kids"))
    if not kids:
        return True
    # Kids without /T are widget annotations of this field
    return not any("/T" in _resolve(k) for k in kids)


def _walk(fields: Any, parent_name: str, parent_type: Optional[str], out: List[FormField]):
    for ref in _resolve(fields) or []:
        if len(out) >= MAX_FIELDS:
            logger.warning("AcroForm field cap %d reached, ignoring remaining fields", MAX_FIELDS)
            return
        f = _resolve(ref)
        partial = _raw_string(f.get("/T"))
        name = f"{parent_name}.{partial}" if parent_name and partial else (partial or parent_name)
        ft = _resolve(f.get("/FT"))
        ft = str(ft) if ft is not None else parent_type
        if not _is_terminal(f):
            _walk(f.get("/Kids"), name, ft, out)
            continue
        kind = FieldCatalogSource.map_type(ft or "", ACROFORM_TYPE_MAP)
        if kind is None or not name:
            logger.debug("Skipping field %r of type %r", name, ft)
            continue
        out.append(FormField(name=name, field_type=kind, current_value=_raw_string(f.get("/V"))))


def extract_acroform(pdf_path: str) -> FieldCatalog:
    """Read the form field tree of a PDF on disk.

    Walks /Root /AcroForm /Fields, descending into non-terminal fields so
    nested names come out dot-qualified (parent.child) and inherit /FT from
    their ancestors. A document without /AcroForm gives an empty catalog.
    """
    try:
        reader = PdfReader(pdf_path)
        root = _resolve(reader.trailer.get("/Root"))
    except (PdfReadError, ValueError) as e:
        raise NotAcroFormError(f"Failed to read PDF {pdf_path}: {e}") from e
    if root is None:
        raise NotAcroFormError("PDF structure unreadable (no /Root)")

    acro = _resolve(root.get("/AcroForm"))
    if acro is None:
        logger.info("PDF %s has no /AcroForm", pdf_path)
        return FieldCatalog()

    collected: List[FormField] = []
    _walk(acro.get("/Fields"), "", None, collected)
    return FieldCatalog(collected)


class AcroFormCatalogSource(FieldCatalogSource):
    name = "acroform"

    def build(self, pdf_path: str) -> FieldCatalog:
        return extract_acroform(pdf_path)
