"""Convert a DOCX file into the HTML subset the project parser understands.

Headings become ``<h1>``..``<h6>``, list paragraphs ``<li>`` inside ``<ul>`` or
``<ol>``, everything else ``<p>`` with bold runs wrapped in ``<strong>``. Table
cells are flattened into paragraphs in reading order.
Embedded images are written to disk and referenced by ``<img>`` tags.
"""

from __future__ import annotations

import hashlib
import html
import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.hyperlink import Hyperlink
from docx.text.paragraph import Paragraph
from docx.text.run import Run

from project_catalog.config import settings
from project_catalog.errors import DocumentConversionError
from project_catalog.models.document import RawDocument
from project_catalog.models.project import ProjectImage

logger = logging.getLogger(__name__)

HEADING_STYLE_PATTERN = re.compile(r"^Heading\s+(\d)$", re.IGNORECASE)
STRONG_STYLE_NAMES = {"Strong"}
EMPHASIS_STYLE_NAMES = {"Emphasis"}


class DocxConverter:
    """Walks a DOCX body and emits markup plus the images it saved."""

    def __init__(
        self,
        images_dir: Optional[Path] = None,
        url_prefix: Optional[str] = None,
        default_alt: Optional[str] = None,
    ):
        self.images_dir = Path(images_dir or settings.images_dir_path)
        if url_prefix is None:
            url_prefix = settings.images_url_prefix
        self.url_prefix = url_prefix.rstrip("/")
        self.default_alt = default_alt or settings.default_image_alt
        self.document = None
        self.images: List[ProjectImage] = []
        self.messages: List[str] = []
        self._parts: List[str] = []
        self._open_list: Optional[str] = None

    # ---------- Public API ----------

    def convert(self, docx_path: Path) -> RawDocument:
        path = Path(docx_path)
        if not path.exists():
            raise DocumentConversionError(f"Input file not found: {path}")
        try:
            self.document = Document(str(path))
        except (PackageNotFoundError, BadZipFile, KeyError, ValueError) as exc:
            raise DocumentConversionError(f"Unable to read {path}: {exc}") from exc

        for element in self.document.element.body:
            if element.tag == qn("w:p"):
                self._process_paragraph(Paragraph(element, self.document))
            elif element.tag == qn("w:tbl"):
                self._process_table(Table(element, self.document))
        self._close_list()

        logger.debug(
            "Converted %s: %s characters of markup, %s images",
            path,
            sum(len(part) for part in self._parts),
            len(self.images),
        )
        return RawDocument(markup="".join(self._parts), images=self.images, messages=self.messages)

    # ---------- Paragraphs ----------

    def _process_paragraph(self, paragraph: Paragraph) -> None:
        style_name = paragraph.style.name if paragraph.style is not None else ""
        level = self._heading_level(style_name)
        if level:
            self._close_list()
            text = html.escape(paragraph.text.strip(), quote=False)
            if text:
                self._parts.append(f"<h{level}>{text}</h{level}>")
            image_tags = [
                tag for run in self._iter_runs(paragraph) for tag in self._extract_images(run)
            ]
            if image_tags:
                self._parts.append(f"<p>{''.join(image_tags)}</p>")
            return

        content = self._render_runs(paragraph)
        if not content.strip():
            return

        list_tag = self._list_tag(paragraph, style_name)
        if list_tag:
            if self._open_list != list_tag:
                self._close_list()
                self._parts.append(f"<{list_tag}>")
                self._open_list = list_tag
            self._parts.append(f"<li>{content}</li>")
            return

        self._close_list()
        self._parts.append(f"<p>{content}</p>")

    def _process_table(self, table: Table) -> None:
        self._close_list()
        seen = []
        for row in table.rows:
            for cell in row.cells:
                # merged cells are returned once per grid column they span
                if cell._tc in seen:
                    continue
                seen.append(cell._tc)
                for item in cell.iter_inner_content():
                    if isinstance(item, Table):
                        self._process_table(item)
                    else:
                        self._process_paragraph(item)
        self._close_list()

    def _close_list(self) -> None:
        if self._open_list:
            self._parts.append(f"</{self._open_list}>")
            self._open_list = None

    @staticmethod
    def _heading_level(style_name: str) -> int:
        if style_name == "Title":
            return 1
        match = HEADING_STYLE_PATTERN.match(style_name)
        if match:
            return min(max(int(match.group(1)), 1), 6)
        return 0

    @staticmethod
    def _list_tag(paragraph: Paragraph, style_name: str) -> Optional[str]:
        p_pr = paragraph._p.pPr
        numbered = p_pr is not None and p_pr.numPr is not None
        if not numbered and not style_name.startswith("List"):
            return None
        return "ol" if "Number" in style_name else "ul"

    # ---------- Runs ----------

    def _iter_runs(self, paragraph: Paragraph):
        for item in paragraph.iter_inner_content():
            if isinstance(item, Hyperlink):
                yield from item.runs
            else:
                yield item

    def _render_runs(self, paragraph: Paragraph) -> str:
        """Render runs, merging neighbours with identical formatting."""
        out: List[str] = []
        pending: List[str] = []
        pending_style: Tuple[bool, bool] = (False, False)

        def flush() -> None:
            if pending:
                out.append(self._wrap("".join(pending), *pending_style))
                pending.clear()

        for run in self._iter_runs(paragraph):
            for image_tag in self._extract_images(run):
                flush()
                out.append(image_tag)
            if not run.text:
                continue
            style = (
                self._run_flag(run, "bold", STRONG_STYLE_NAMES),
                self._run_flag(run, "italic", EMPHASIS_STYLE_NAMES),
            )
            if style != pending_style:
                flush()
                pending_style = style
            pending.append(html.escape(run.text, quote=False))
        flush()
        return "".join(out)

    @staticmethod
    def _run_flag(run: Run, attribute: str, style_names: set) -> bool:
        """Resolve bold/italic from direct formatting, then the character style chain."""
        direct = getattr(run, attribute)
        if direct is not None:
            return bool(direct)
        style = run.style
        while style is not None:
            if style.name in style_names:
                return True
            inherited = getattr(style.font, attribute)
            if inherited is not None:
                return bool(inherited)
            style = style.base_style
        return False

    @staticmethod
    def _wrap(text: str, bold: bool, italic: bool) -> str:
        if italic:
            text = f"<em>{text}</em>"
        if bold:
            text = f"<strong>{text}</strong>"
        return text

    # ---------- Images ----------

    def _extract_images(self, run: Run) -> List[str]:
        tags: List[str] = []
        descriptions = [
            doc_pr.get("descr") for doc_pr in run._element.iter(qn("wp:docPr"))
        ]
        for position, blip in enumerate(run._element.iter(qn("a:blip"))):
            rel_id = blip.get(qn("r:embed"))
            if not rel_id or rel_id not in self.document.part.related_parts:
                self.messages.append("Skipped an image without embedded data")
                continue
            alt = descriptions[position] if position < len(descriptions) else None
            image = self._save_image(self.document.part.related_parts[rel_id], alt)
            tags.append(
                f'<img src="{html.escape(image.src)}" alt="{html.escape(image.alt)}" />'
            )
        return tags

    def _save_image(self, part, alt: Optional[str]) -> ProjectImage:
        extension = part.content_type.split("/")[-1] or "png"
        digest = hashlib.sha256(part.blob).hexdigest()[:16]
        filename = f"project-{digest}.{extension}"

        self.images_dir.mkdir(parents=True, exist_ok=True)
        target = self.images_dir / filename
        if not target.exists():
            target.write_bytes(part.blob)
            logger.info("Saved image: %s", filename)

        image = ProjectImage(
            src=f"{self.url_prefix}/{filename}",
            alt=(alt or "").strip() or self.default_alt,
        )
        if all(existing.src != image.src for existing in self.images):
            self.images.append(image)
        return image


def convert_docx(
    docx_path: Path,
    images_dir: Optional[Path] = None,
    url_prefix: Optional[str] = None,
) -> RawDocument:
    """Convert a DOCX file, saving embedded images under ``images_dir``."""
    return DocxConverter(images_dir=images_dir, url_prefix=url_prefix).convert(docx_path)
