"""Map labelled sections onto project fields and fill in defaults."""

from __future__ import annotations

import logging
import re
from datetime import date
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from project_catalog.config import settings
from project_catalog.models.project import ProjectFields, ProjectImage
from project_catalog.utils.text import clean_text

logger = logging.getLogger(__name__)

BULLET_SPLIT_PATTERN = re.compile(r"[•\-*]\s*|\n")
COMMA_SPLIT_PATTERN = re.compile(r"[,;]\s*")


class Decoding(str, Enum):
    TEXT = "text"
    LIST = "list"
    COMMA = "comma"


# Lower-cased label -> (ProjectFields attribute, decoding). Add new synonyms here.
FIELD_ROUTES: Dict[str, Tuple[str, Decoding]] = {
    "client": ("client", Decoding.TEXT),
    "summary": ("summary", Decoding.TEXT),
    "category": ("category", Decoding.TEXT),
    "problem": ("problem", Decoding.LIST),
    "problems": ("problem", Decoding.LIST),
    "challenge": ("problem", Decoding.LIST),
    "challenges": ("problem", Decoding.LIST),
    "approach": ("approach", Decoding.LIST),
    "solution": ("approach", Decoding.LIST),
    "methodology": ("approach", Decoding.LIST),
    "outcomes": ("outcomes", Decoding.LIST),
    "results": ("outcomes", Decoding.LIST),
    "benefits": ("outcomes", Decoding.LIST),
    "tech stack": ("tech_stack", Decoding.COMMA),
    "technology": ("tech_stack", Decoding.COMMA),
    "technologies": ("tech_stack", Decoding.COMMA),
    "tags": ("tags", Decoding.COMMA),
    "keywords": ("tags", Decoding.COMMA),
}


def route_label(label: str) -> Optional[Tuple[str, Decoding]]:
    return FIELD_ROUTES.get(label.strip().rstrip(":").strip().lower())


def parse_list_items(
    markup: str,
    min_chars: Optional[int] = None,
    placeholder: Optional[str] = None,
) -> List[str]:
    """Decode a narrative section into list entries.

    ``<li>`` elements win; otherwise the cleaned text is split on bullet glyphs
    and only fragments longer than ``min_chars`` are kept. Never returns an
    empty list.
    """
    if min_chars is None:
        min_chars = settings.list_item_min_chars
    if placeholder is None:
        placeholder = settings.default_list_item

    soup = BeautifulSoup(markup, "html.parser")
    items = [clean_text(item.decode_contents()) for item in soup.find_all("li")]
    items = [item for item in items if item]

    if not items:
        fragments = BULLET_SPLIT_PATTERN.split(clean_text(markup))
        items = [
            fragment.strip() for fragment in fragments if len(fragment.strip()) > min_chars
        ]

    return items or [placeholder]


def parse_comma_separated(markup: str) -> List[str]:
    """Decode ``a, b; c`` style sections, trimming entries and dropping blanks."""
    parts = COMMA_SPLIT_PATTERN.split(clean_text(markup))
    return [part.strip() for part in parts if part.strip()]


DECODERS: Dict[Decoding, Callable[[str], object]] = {
    Decoding.TEXT: clean_text,
    Decoding.LIST: parse_list_items,
    Decoding.COMMA: parse_comma_separated,
}


def resolve_title(title: Optional[str], index: int) -> str:
    return title if title else f"Project {index + 1}"


def default_values(title: str, index: int) -> Dict[str, object]:
    subject = title.lower()
    return {
        "client": f"Leading technology company {index + 1}",
        "summary": f"Advanced {subject} solution delivering measurable business value.",
        "category": settings.default_category,
        "problem": [f"Complex data challenges requiring {subject} solutions"],
        "approach": [f"Implemented comprehensive {subject} methodology"],
        "outcomes": [settings.default_outcome],
        "tech_stack": list(settings.default_tech_stack),
        "tags": list(settings.default_tags),
    }


def normalize_project(
    title: str,
    sections: Mapping[str, str],
    index: int,
    images: Sequence[ProjectImage] = (),
    processing_date: Optional[date] = None,
) -> ProjectFields:
    """Build a fully populated project from its title and raw sections.

    Sections are applied in order, so a later label routed to the same field
    replaces an earlier one. Unknown labels are ignored and fields left empty
    get their defaults.
    """
    values: Dict[str, object] = {}
    for label, markup in sections.items():
        route = route_label(label)
        if route is None:
            logger.debug("Ignoring unrecognised section %r", label)
            continue
        field_name, decoding = route
        if field_name in values:
            logger.debug("Section %r replaces the earlier %s value", label, field_name)
        values[field_name] = DECODERS[decoding](markup)

    for field_name, fallback in default_values(title, index).items():
        if not values.get(field_name):
            values[field_name] = fallback

    return ProjectFields(
        title=title,
        images=list(images),
        date=(processing_date or date.today()).isoformat(),
        **values,
    )
