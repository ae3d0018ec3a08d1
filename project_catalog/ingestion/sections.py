"""Locate the title and labelled sections inside one project chunk.

Authors label sections two ways, often within the same document: an inline
bold run (``<strong>Client:</strong> Acme``) or a short paragraph ending in a
colon followed by the content paragraph. Both are detected by separate passes
over the tokenized chunk. Bold-run labels are collected first and a label is
never replaced once set, so a bold ``Client:`` always beats a ``Client:``
paragraph.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterator, List, Optional, Tuple

from project_catalog.config import settings
from project_catalog.models.document import ExtractedSections
from project_catalog.utils.text import MarkupToken, clean_text, tokenize_markup

logger = logging.getLogger(__name__)

LABEL_RUN_TAGS = ("strong", "b")
PARAGRAPH_TAG = "p"
LEADING_TEXT_PATTERN = re.compile(r"^[^<]+")
LABEL_SEPARATOR_PATTERN = re.compile(r"^[:\s]+")


def extract_title(chunk: str) -> Optional[str]:
    """Return the cleaned text preceding the first tag, or None when empty."""
    match = LEADING_TEXT_PATTERN.match(chunk)
    if not match:
        return None
    return clean_text(match.group(0)) or None


def strip_title(chunk: str) -> str:
    return LEADING_TEXT_PATTERN.sub("", chunk, count=1)


def normalize_label(text: str) -> str:
    return clean_text(text).rstrip(":").strip()


def iter_label_runs(markup: str, tokens: List[MarkupToken]) -> Iterator[Tuple[str, str]]:
    """Yield (label, content) for bold runs of plain text.

    Content starts after the run and any colon or whitespace following it, and
    stops at the next bold opener or at the end of the chunk.
    """
    openers = [index for index, token in enumerate(tokens) if token.opens(*LABEL_RUN_TAGS)]
    for position, index in enumerate(openers):
        if index + 2 >= len(tokens):
            continue
        opener, body, closer = tokens[index], tokens[index + 1], tokens[index + 2]
        if body.is_tag or not closer.closes(opener.name):
            continue
        label = normalize_label(body.text)
        if not label:
            continue
        if position + 1 < len(openers):
            end = tokens[openers[position + 1]].start
        else:
            end = len(markup)
        content = LABEL_SEPARATOR_PATTERN.sub("", markup[closer.end : end])
        yield label, content


def split_paragraph_blocks(markup: str, tokens: List[MarkupToken]) -> List[str]:
    """Return the non-blank markup between paragraph open/close tags."""
    blocks: List[str] = []
    position = 0
    for token in tokens:
        if token.is_tag and token.name == PARAGRAPH_TAG:
            blocks.append(markup[position : token.start])
            position = token.end
    blocks.append(markup[position:])
    return [block for block in blocks if block.strip()]


def iter_label_paragraphs(
    markup: str, tokens: List[MarkupToken], max_label_chars: int
) -> Iterator[Tuple[str, str]]:
    """Yield (label, content) for short colon-terminated paragraphs and the block after them."""
    blocks = split_paragraph_blocks(markup, tokens)
    for current, following in zip(blocks, blocks[1:]):
        text = clean_text(current)
        if text.endswith(":") and len(text) < max_label_chars:
            label = normalize_label(text)
            if label:
                yield label, following


def extract_sections(
    chunk: str,
    max_label_chars: Optional[int] = None,
) -> ExtractedSections:
    """Split a project chunk into its title and a label -> raw markup mapping."""
    if max_label_chars is None:
        max_label_chars = settings.short_label_max_chars

    title = extract_title(chunk)
    content = strip_title(chunk)
    tokens = tokenize_markup(content)

    sections: Dict[str, str] = {}
    claimed: Dict[str, str] = {}

    def claim(label: str, section: str, source: str) -> None:
        key = label.casefold()
        if key in claimed:
            logger.debug(
                "Ignoring %s label %r; already taken by the %s pass", source, label, claimed[key]
            )
            return
        claimed[key] = source
        sections[label] = section

    for label, section in iter_label_runs(content, tokens):
        claim(label, section, "bold-run")
    for label, section in iter_label_paragraphs(content, tokens, max_label_chars):
        claim(label, section, "paragraph")

    return ExtractedSections(title=title, sections=sections)
