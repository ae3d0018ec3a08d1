"""Intermediate document representations."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .project import ProjectImage


class RawDocument(BaseModel):
    """Markup produced by the DOCX converter, with the images it saved."""

    markup: str
    images: List[ProjectImage] = Field(default_factory=list)
    messages: List[str] = Field(default_factory=list)


class ExtractedSections(BaseModel):
    """Title and labelled sections found in one project chunk."""

    title: Optional[str] = None
    sections: Dict[str, str] = Field(default_factory=dict)
