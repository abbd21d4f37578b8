"""
Form sessions: one temporary working directory per input PDF.

A session owns a copy of the source document as input.pdf plus the field
catalog built from it. The directory is removed by cleanup(), which also runs
when the session is used as a context manager.
"""
from __future__ import annotations
import io
import logging
import os
import shutil
import tempfile
from typing import BinaryIO, Dict, List, Optional, TYPE_CHECKING

from .catalog import FieldCatalogSource
from .config import INPUT_PDF_NAME, TEMP_DIR_PREFIX
from .errors import FieldValidationError, FormIOError, SessionClosedError
from .runner import run_command
from .schema import FieldCatalog, FieldKind, FormData, FormField, TEXT, BUTTON
from .xfdf import build_xfdf

if TYPE_CHECKING:  # pragma: no cover
    from .executor import Executor

logger = logging.getLogger(__name__)


class FormSession:
    """A PDF form copied into a private temporary directory."""

    def __init__(self, executor: "Executor", directory: str, catalog: FieldCatalog):
        self._executor = executor
        self._dir = directory
        self._catalog = catalog
        self._closed = False

    @classmethod
    def create(cls, executor: "Executor", source: BinaryIO, catalog_source: FieldCatalogSource) -> "FormSession":
        try:
            new_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)
        except OSError as e:
            raise FormIOError(f"cannot create temporary directory for fillpdf: {e}") from e

        try:
            new_file = os.path.join(new_dir, INPUT_PDF_NAME)
            try:
                with open(new_file, "wb") as dest:
                    shutil.copyfileobj(source, dest)
            except OSError as e:
                raise FormIOError(f"cannot copy to file {new_file}: {e}") from e
            catalog = catalog_source.build(new_file)
        except BaseException:
            shutil.rmtree(new_dir, ignore_errors=True)
            raise

        logger.info("Created form session in %s with %d fields (%s)", new_dir, len(catalog), catalog_source.name)
        return cls(executor, new_dir, catalog)

    @property
    def directory(self) -> str:
        return self._dir

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def catalog(self) -> FieldCatalog:
        return self._catalog

    def cleanup(self):
        """Delete the working directory. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        shutil.rmtree(self._dir, ignore_errors=True)
        logger.debug("Removed form session directory %s", self._dir)

    def __enter__(self) -> "FormSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cleanup()

    def fields(self) -> List[FormField]:
        return self._catalog.fields()

    def default_text_values(self) -> Dict[str, str]:
        """Every text field mapped to its own name, a visible placeholder."""
        return {name: name for name in self._catalog.names_of_type(TEXT)}

    def all_buttons_true(self) -> Dict[str, bool]:
        return {name: True for name in self._catalog.names_of_type(BUTTON)}

    def _check(self, values: Dict, kind: FieldKind):
        for key in values:
            fi = self._catalog.get(key)
            if fi is None:
                raise FieldValidationError(key, f"field {key!r} is not in the form")
            if fi.field_type != kind:
                raise FieldValidationError(key, f"field {key!r} is not {kind}, is {fi.field_type!r}")

    def validate(self, data: FormData):
        self._check(data.text_values, TEXT)
        self._check(data.button_values, BUTTON)

    def fill_form_data(self, out: BinaryIO, data: FormData, flatten: bool = False):
        if self._closed:
            raise SessionClosedError()
        self.validate(data)

        xfdf = build_xfdf(data.text_values, data.button_values, self._catalog.ordered_field_names())
        args = ["-jar", self._executor.mcpdf, INPUT_PDF_NAME, "fill_form", "-", "output", "-"]
        if flatten:
            args.append("flatten")
        filled = run_command(self._executor.java, *args, cwd=self._dir, stdin=xfdf)
        logger.info("Filled %d text and %d button fields (flatten=%s)",
                    len(data.text_values), len(data.button_values), flatten)

        try:
            out.write(filled)
        except OSError as e:
            raise FormIOError(f"cannot copy file to result: {e}") from e

    def fill(self, out: BinaryIO, text_values: Optional[Dict[str, str]] = None,
             button_values: Optional[Dict[str, bool]] = None, flatten: bool = False):
        self.fill_form_data(out, FormData(dict(text_values or {}), dict(button_values or {})), flatten)

    def fill_to_file(self, path: str, text_values: Optional[Dict[str, str]] = None,
                     button_values: Optional[Dict[str, bool]] = None, flatten: bool = False):
        # Filled into memory first so a failed fill leaves no partial file
        data = self.fill_to_bytes(text_values, button_values, flatten)
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise FormIOError(f"cannot create file {path}: {e}") from e

    def fill_to_bytes(self, text_values: Optional[Dict[str, str]] = None,
                      button_values: Optional[Dict[str, bool]] = None, flatten: bool = False) -> bytes:
        buf = io.BytesIO()
        self.fill(buf, text_values, button_values, flatten)
        return buf.getvalue()
