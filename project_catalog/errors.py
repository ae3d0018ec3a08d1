"""Exceptions raised by the catalog ingestion pipeline."""


class CatalogError(Exception):
    """Base class for ingestion failures."""


class DocumentConversionError(CatalogError):
    """The source document is missing or cannot be converted. Aborts the run."""
