"""Assign identifiers to normalized projects."""

from __future__ import annotations

import logging
import re
from typing import Optional

from project_catalog.config import settings
from project_catalog.models.project import ProjectFields, ProjectRecord

logger = logging.getLogger(__name__)

NON_SLUG_PATTERN = re.compile(r"[^a-z0-9\s]")
WHITESPACE_PATTERN = re.compile(r"\s+")


def build_project_id(title: str, index: int, max_length: Optional[int] = None) -> str:
    """Generate a stable identifier from the title and document position."""
    if max_length is None:
        max_length = settings.id_max_length
    base = NON_SLUG_PATTERN.sub("", title.lower())
    base = WHITESPACE_PATTERN.sub("-", base)[:max_length]
    return f"{base}-{index + 1}"


def assemble_project(fields: ProjectFields, index: int) -> Optional[ProjectRecord]:
    """Attach an id to a normalized project; returns None when the title is blank."""
    if not fields.title.strip():
        logger.warning("Rejecting project section %s: empty title", index + 1)
        return None
    return ProjectRecord(
        **fields.model_dump(),
        id=build_project_id(fields.title, index),
    )
