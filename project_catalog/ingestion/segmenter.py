"""Split converted markup into one chunk per project."""

from __future__ import annotations

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

HEADING_PATTERN = re.compile(r"<h1\b[^>]*>", re.IGNORECASE)


def split_projects(markup: str) -> List[str]:
    """Return the markup following each level-1 heading opener, in document order.

    Anything before the first heading is a preamble and never becomes a project.
    """
    openers = list(HEADING_PATTERN.finditer(markup))
    chunks: List[str] = []
    for position, opener in enumerate(openers):
        end = openers[position + 1].start() if position + 1 < len(openers) else len(markup)
        chunks.append(markup[opener.end() : end])
    logger.debug("Found %s level-1 headings", len(chunks))
    return chunks
