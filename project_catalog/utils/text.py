"""Markup tokenization and text cleanup helpers."""

from __future__ import annotations

import re
from typing import List, NamedTuple

TAG_PATTERN = re.compile(r"<(/?)([A-Za-z][A-Za-z0-9]*)\b[^>]*>")
ANY_TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

# &amp; goes last so an escaped "&amp;lt;" decodes to the literal "&lt;".
ENTITY_REPLACEMENTS = (
    ("&nbsp;", " "),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


class MarkupToken(NamedTuple):
    """A tag or a run of text, with its offsets in the source markup."""

    kind: str
    text: str
    start: int
    end: int
    name: str = ""
    closing: bool = False

    @property
    def is_tag(self) -> bool:
        return self.kind == "tag"

    def opens(self, *names: str) -> bool:
        return self.is_tag and not self.closing and self.name in names

    def closes(self, *names: str) -> bool:
        return self.is_tag and self.closing and self.name in names


def tokenize_markup(markup: str) -> List[MarkupToken]:
    """Split markup into alternating tag and text tokens, preserving offsets."""
    tokens: List[MarkupToken] = []
    position = 0
    for match in TAG_PATTERN.finditer(markup):
        if match.start() > position:
            tokens.append(
                MarkupToken("text", markup[position : match.start()], position, match.start())
            )
        tokens.append(
            MarkupToken(
                "tag",
                match.group(0),
                match.start(),
                match.end(),
                name=match.group(2).lower(),
                closing=bool(match.group(1)),
            )
        )
        position = match.end()
    if position < len(markup):
        tokens.append(MarkupToken("text", markup[position:], position, len(markup)))
    return tokens


def clean_text(markup: str) -> str:
    """Strip tags, decode basic entities and collapse whitespace."""
    text = ANY_TAG_PATTERN.sub("", markup)
    for entity, replacement in ENTITY_REPLACEMENTS:
        text = text.replace(entity, replacement)
    return WHITESPACE_PATTERN.sub(" ", text).strip()
