"""Shared fixtures for the ingestion tests."""

from __future__ import annotations

import base64
from pathlib import Path

import pytest
from docx import Document

ONE_PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_file(tmp_path: Path) -> Path:
    path = tmp_path / "pixel.png"
    path.write_bytes(ONE_PIXEL_PNG)
    return path


def add_labelled(document, label: str, value: str = "") -> None:
    paragraph = document.add_paragraph()
    paragraph.add_run(label).bold = True
    if value:
        paragraph.add_run(value)


@pytest.fixture
def catalog_docx(tmp_path: Path, png_file: Path) -> Path:
    """Two projects: one with bold labels and a bullet list, one with colon paragraphs."""
    document = Document()
    document.add_paragraph("Project catalog export")

    document.add_heading("Acme Migration", level=1)
    add_labelled(document, "Client:", " Acme Corp")
    add_labelled(document, "Problem:")
    document.add_paragraph("Legacy ERP could not scale", style="List Bullet")
    document.add_paragraph("Reports took days to produce", style="List Bullet")
    add_labelled(document, "Tech Stack:", " Azure, Databricks")

    document.add_heading("Retail Forecasting", level=1)
    document.add_paragraph("Category:")
    document.add_paragraph("Analytics")
    document.add_picture(str(png_file))
    document.add_table(rows=1, cols=2)

    path = tmp_path / "projects.docx"
    document.save(str(path))
    return path
