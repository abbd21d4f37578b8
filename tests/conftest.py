import io
import os
import stat
import sys
import zipfile

import pytest
from pypdf import PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, FloatObject, NameObject, TextStringObject

from fillpdf import Config, Executor

# pdftk-style dump of the form built by build_form_pdf()
FORM_DUMP = """---
FieldType: Text
FieldName: Name
FieldFlags: 0
FieldValue: Alice
FieldJustification: Left
---
FieldType: Button
FieldName: Accept
FieldFlags: 0
FieldValue: Yes
FieldJustification: Left
FieldStateOption: Off
FieldStateOption: Yes
---
FieldType: Choice
FieldName: Country
FieldFlags: 131072
FieldValue: CZ
FieldJustification: Left
---
FieldType: Text
FieldName: Address.Street
FieldFlags: 0
FieldJustification: Left
---
FieldType: Text
FieldName: Notes
FieldFlags: 0
FieldValue: R&amp;D
FieldJustification: Left
"""


def _widget(writer, page_ref, name=None, ft=None, value=None, parent=None, y=700):
    d = DictionaryObject()
    d[NameObject("/Type")] = NameObject("/Annot")
    d[NameObject("/Subtype")] = NameObject("/Widget")
    d[NameObject("/Rect")] = ArrayObject([FloatObject(50), FloatObject(y), FloatObject(250), FloatObject(y + 20)])
    d[NameObject("/P")] = page_ref
    if name is not None:
        d[NameObject("/T")] = TextStringObject(name)
    if ft is not None:
        d[NameObject("/FT")] = NameObject(ft)
    if value is not None:
        d[NameObject("/V")] = value
    if parent is not None:
        d[NameObject("/Parent")] = parent
    return writer._add_object(d)


def build_form_pdf(nested=True) -> bytes:
    """One-page AcroForm with text, button, choice and (optionally) nested fields."""
    writer = PdfWriter()
    writer.add_blank_page(width=612, height=792)
    page_ref = writer.pages[0].indirect_reference

    fields = [
        _widget(writer, page_ref, "Name", "/Tx", TextStringObject("Alice"), y=700),
        _widget(writer, page_ref, "Accept", "/Btn", NameObject("/Yes"), y=660),
        _widget(writer, page_ref, "Country", "/Ch", TextStringObject("CZ"), y=620),
    ]
    annots = list(fields)

    if nested:
        parent = DictionaryObject()
        parent[NameObject("/T")] = TextStringObject("Address")
        parent[NameObject("/FT")] = NameObject("/Tx")
        parent_ref = writer._add_object(parent)
        street = _widget(writer, page_ref, "Street", parent=parent_ref, y=580)
        parent[NameObject("/Kids")] = ArrayObject([street])
        fields.append(parent_ref)
        annots.append(street)

    notes = _widget(writer, page_ref, "Notes", "/Tx", TextStringObject("R&amp;D"), y=540)
    fields.append(notes)
    annots.append(notes)

    writer.pages[0][NameObject("/Annots")] = ArrayObject(annots)
    writer._root_object[NameObject("/AcroForm")] = DictionaryObject({
        NameObject("/Fields"): ArrayObject(fields),
    })
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()


@pytest.fixture
def form_pdf_bytes():
    return build_form_pdf()


@pytest.fixture
def form_pdf_path(tmp_path, form_pdf_bytes):
    p = tmp_path / "form.pdf"
    p.write_bytes(form_pdf_bytes)
    return str(p)


@pytest.fixture
def mcpdf_jar(tmp_path):
    p = tmp_path / "mcpdf.jar"
    with zipfile.ZipFile(p, "w") as zf:
        zf.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\nMain-Class: aero.m_click.mcpdf.Main\n")
    return str(p)


@pytest.fixture
def executor(mcpdf_jar):
    # Any resolvable executable passes the java lookup; fills are stubbed in tests
    return Executor(Config(mcpdf=mcpdf_jar, java=sys.executable))


@pytest.fixture
def echo_java(tmp_path):
    """A fake java that writes its stdin (the XFDF document) to stdout."""
    if sys.platform == "win32":
        pytest.skip("needs a POSIX shell")
    p = tmp_path / "fake-java"
    p.write_text("#!/bin/sh\ncat\n")
    p.chmod(p.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(p)


@pytest.fixture
def fake_run(monkeypatch):
    """Replace the filler invocation; records calls and returns fixed bytes."""
    calls = []

    def run(name, *args, cwd=None, stdin=None):
        calls.append({"name": name, "args": list(args), "cwd": cwd, "stdin": stdin,
                      "input_exists": os.path.exists(os.path.join(cwd, "input.pdf"))})
        return b"%PDF-1.7 filled"

    monkeypatch.setattr("fillpdf.session.run_command", run)
    return calls
