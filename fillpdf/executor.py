from __future__ import annotations
import io
import logging
import os
import shutil
from typing import BinaryIO

from .catalog import FieldCatalogSource, get_catalog_source
from .config import Config, CATALOG_SOURCE_PDFTK, SNIFF_LENGTH, ZIP_SIGNATURES
from .errors import FormIOError, ToolSetupError
from .session import FormSession

logger = logging.getLogger(__name__)


def sniff_zip(path: str) -> bool:
    """Check the start of a file for a ZIP signature (jars are zip archives).

    Raises ToolSetupError when the file cannot be opened or read.
    """
    try:
        with open(path, "rb") as f:
            head = f.read(SNIFF_LENGTH)
    except OSError as e:
        raise ToolSetupError(f"mcpdf file cannot be read from {path}: {e}") from e
    if not head:
        raise ToolSetupError(f"mcpdf file cannot be read from {path}: file is empty")
    return head.startswith(ZIP_SIGNATURES)


def _require_tool(name: str, what: str):
    if shutil.which(name) is None:
        raise ToolSetupError(f"{what} is not installed at {name!r}")


class Executor:
    """Validated handle on the external tools; creates form sessions."""

    def __init__(self, config: Config):
        _require_tool(config.java, "java")
        if config.catalog_source == CATALOG_SOURCE_PDFTK:
            _require_tool(config.pdftk, "pdftk utility")

        if not sniff_zip(config.mcpdf):
            raise ToolSetupError(f"mcpdf file {config.mcpdf} does not seem to be 'application/zip'")

        self._config = config
        # the filler runs inside the session directory
        self._mcpdf = os.path.abspath(config.mcpdf)
        self._catalog_source: FieldCatalogSource = get_catalog_source(config.catalog_source, pdftk=config.pdftk)
        logger.debug("Executor ready (java=%s, mcpdf=%s, catalog=%s)",
                     config.java, config.mcpdf, self._catalog_source.name)

    @property
    def java(self) -> str:
        return self._config.java

    @property
    def mcpdf(self) -> str:
        return self._mcpdf

    @property
    def pdftk(self) -> str:
        return self._config.pdftk

    @property
    def catalog_source(self) -> FieldCatalogSource:
        return self._catalog_source

    def create(self, source: BinaryIO) -> FormSession:
        return FormSession.create(self, source, self._catalog_source)

    def create_from_file(self, path: str) -> FormSession:
        try:
            f = open(path, "rb")
        except OSError as e:
            raise FormIOError(f"cannot open file {path!r}: {e}") from e
        with f:
            return self.create(f)

    def create_from_bytes(self, data: bytes) -> FormSession:
        return self.create(io.BytesIO(data))
