"""Typed models shared across the application."""

from .catalog import CatalogMetadata, ProjectCatalog
from .document import ExtractedSections, RawDocument
from .project import ProjectFields, ProjectImage, ProjectRecord

__all__ = [
    "CatalogMetadata",
    "ExtractedSections",
    "ProjectCatalog",
    "ProjectFields",
    "ProjectImage",
    "ProjectRecord",
    "RawDocument",
]
