"""Catalog document models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from .project import ProjectRecord


class CatalogMetadata(BaseModel):
    """Envelope describing a generated catalog."""

    generated_at: str
    source_file: str
    total_projects: int
    categories: List[str] = Field(default_factory=list)
    version: str = "1.0.0"


class ProjectCatalog(BaseModel):
    """The JSON document consumed by the catalog UI."""

    metadata: CatalogMetadata
    projects: List[ProjectRecord] = Field(default_factory=list)
