"""
Configuration settings for fillpdf.
Consolidates all constants and tool configuration in one place.
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

# External tools
DEFAULT_JAVA = "java"
DEFAULT_PDFTK = "pdftk"

# Catalog sources
CATALOG_SOURCE_ACROFORM = "acroform"
CATALOG_SOURCE_PDFTK = "pdftk"
CATALOG_SOURCES = (CATALOG_SOURCE_ACROFORM, CATALOG_SOURCE_PDFTK)
DEFAULT_CATALOG_SOURCE = CATALOG_SOURCE_ACROFORM

# Session working directory
TEMP_DIR_PREFIX = "fillpdf-create"
INPUT_PDF_NAME = "input.pdf"

# Jar sniffing
SNIFF_LENGTH = 512  # bytes inspected when checking the mcpdf jar
ZIP_SIGNATURES = (
    b"PK\x03\x04",  # local file header
    b"PK\x05\x06",  # empty archive
    b"PK\x07\x08",  # spanned archive
)

MAX_FIELDS = 5000  # safety cap for the AcroForm walk

# Logging Configuration
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
COMMAND_LOG_FILE = os.getenv("FILLPDF_COMMAND_LOG")  # JSON lines, disabled when unset

# Error Messages
ERROR_MESSAGES = {
    'tool_setup': 'Required external tool is missing or invalid',
    'io_failed': 'File operation failed',
    'dump_parse': 'Cannot parse field dump',
    'not_acroform': 'PDF form structure unreadable',
    'invalid_field': 'Invalid field in fill request',
    'command_failed': 'External command failed',
    'session_closed': 'Form session already cleaned up',
    'internal_error': 'Internal error',
}


@dataclass
class Config:
    """Paths or executable names of the external tools.

    `java` and `pdftk` are looked up on PATH, `mcpdf` is the path to the
    mcpdf jar (jar-with-dependencies build).
    """
    mcpdf: str
    java: str = DEFAULT_JAVA
    pdftk: str = DEFAULT_PDFTK
    catalog_source: str = DEFAULT_CATALOG_SOURCE

    @classmethod
    def from_env(cls, mcpdf: Optional[str] = None) -> "Config":
        """Build a config from FILLPDF_* environment variables."""
        jar = mcpdf or os.getenv("FILLPDF_MCPDF")
        if not jar:
            raise ValueError("FILLPDF_MCPDF is not set and no mcpdf path was given")
        return cls(
            mcpdf=jar,
            java=os.getenv("FILLPDF_JAVA", DEFAULT_JAVA),
            pdftk=os.getenv("FILLPDF_PDFTK", DEFAULT_PDFTK),
            catalog_source=os.getenv("FILLPDF_CATALOG_SOURCE", DEFAULT_CATALOG_SOURCE),
        )
