"""Fill interactive PDF forms with external tools.

Field discovery reads the AcroForm tree (pypdf) or pdftk's field dump;
filling pipes an XFDF document into the mcpdf jar.
"""
from .config import Config
from .errors import (
    FillPDFError,
    ToolSetupError,
    FormIOError,
    FieldDumpParseError,
    NotAcroFormError,
    FieldValidationError,
    CommandError,
    SessionClosedError,
)
from .schema import FormField, FormData, FieldCatalog
from .catalog import FieldCatalogSource, get_catalog_source
from .dump import PdftkDumpCatalogSource, parse_field_dump
from .extract import AcroFormCatalogSource, extract_acroform
from .xfdf import build_xfdf
from .runner import run_command
from .session import FormSession
from .executor import Executor

__all__ = [
    "Config",
    "Executor",
    "FormSession",
    "FormField",
    "FormData",
    "FieldCatalog",
    "FieldCatalogSource",
    "get_catalog_source",
    "PdftkDumpCatalogSource",
    "AcroFormCatalogSource",
    "parse_field_dump",
    "extract_acroform",
    "build_xfdf",
    "run_command",
    "FillPDFError",
    "ToolSetupError",
    "FormIOError",
    "FieldDumpParseError",
    "NotAcroFormError",
    "FieldValidationError",
    "CommandError",
    "SessionClosedError",
]
