"""Convert the projects DOCX into the catalog JSON consumed by the UI."""

from __future__ import annotations

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from pydantic import ValidationError

from project_catalog.config import ImagePolicy, settings
from project_catalog.errors import CatalogError
from project_catalog.ingestion.assembler import assemble_project
from project_catalog.ingestion.convert_docx import convert_docx
from project_catalog.ingestion.normalizer import normalize_project, resolve_title
from project_catalog.ingestion.sections import extract_sections
from project_catalog.ingestion.segmenter import split_projects
from project_catalog.models.catalog import CatalogMetadata, ProjectCatalog
from project_catalog.models.project import ProjectImage, ProjectRecord

logger = logging.getLogger(__name__)

Anonymizer = Callable[[ProjectRecord], ProjectRecord]


def select_images(
    chunk: str, images: Sequence[ProjectImage], policy: ImagePolicy
) -> List[ProjectImage]:
    """Pick the images attached to one project according to the image policy."""
    if policy == "none":
        return []
    if policy == "per_record":
        return [image for image in images if image.src in chunk]
    return list(images)


def parse_project(
    chunk: str,
    index: int,
    images: Sequence[ProjectImage] = (),
    image_policy: Optional[ImagePolicy] = None,
    processing_date: Optional[date] = None,
) -> Optional[ProjectRecord]:
    extracted = extract_sections(chunk)
    title = resolve_title(extracted.title, index)
    fields = normalize_project(
        title,
        extracted.sections,
        index,
        images=select_images(chunk, images, image_policy or settings.image_policy),
        processing_date=processing_date,
    )
    return assemble_project(fields, index)


def parse_projects(
    markup: str,
    images: Sequence[ProjectImage] = (),
    image_policy: Optional[ImagePolicy] = None,
    processing_date: Optional[date] = None,
) -> List[ProjectRecord]:
    """Parse every project section in document order.

    A section that raises is logged and skipped; the rest are still returned.
    """
    chunks = split_projects(markup)
    logger.info("Found %s project sections", len(chunks))
    projects: List[ProjectRecord] = []
    for index, chunk in enumerate(chunks):
        try:
            project = parse_project(chunk, index, images, image_policy, processing_date)
        except Exception as exc:
            logger.warning("Failed to parse project section %s: %s", index + 1, exc)
            continue
        if project is not None:
            projects.append(project)
            logger.info("Parsed project: %s", project.title)
    return projects


def finalize_projects(
    projects: Iterable[ProjectRecord],
    anonymize: Optional[Anonymizer] = None,
) -> List[ProjectRecord]:
    """Apply the anonymizer and drop records that no longer match the catalog schema."""
    valid: List[ProjectRecord] = []
    for project in projects:
        try:
            candidate = anonymize(project) if anonymize else project
        except Exception as exc:
            logger.warning("Anonymization failed for project %s: %s", project.id, exc)
            continue
        try:
            valid.append(ProjectRecord.model_validate(candidate.model_dump()))
        except ValidationError as exc:
            logger.error(
                "Invalid project structure: %s (%s errors)",
                candidate.title or "Unknown",
                exc.error_count(),
            )
    return valid


def build_catalog(
    projects: List[ProjectRecord],
    source_file: str,
    generated_at: Optional[datetime] = None,
    version: Optional[str] = None,
) -> ProjectCatalog:
    categories = list(dict.fromkeys(project.category for project in projects))
    metadata = CatalogMetadata(
        generated_at=(generated_at or datetime.now(timezone.utc)).isoformat(),
        source_file=source_file,
        total_projects=len(projects),
        categories=categories,
        version=version or settings.catalog_version,
    )
    return ProjectCatalog(metadata=metadata, projects=projects)


def write_catalog(catalog: ProjectCatalog, output_path: Path) -> None:
    """Write the catalog as indented JSON, replacing any previous file atomically."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.write(json.dumps(catalog.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    tmp_path.replace(output_path)


def run_ingestion(
    input_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    images_dir: Optional[Path] = None,
    anonymize: Optional[Anonymizer] = None,
    image_policy: Optional[ImagePolicy] = None,
) -> ProjectCatalog:
    """Convert, parse, validate and write the catalog. Raises CatalogError on fatal input errors."""
    input_path = Path(input_path or settings.input_docx_path)
    output_path = Path(output_path or settings.output_json_path)

    logger.info("Converting %s to markup", input_path)
    document = convert_docx(input_path, images_dir=images_dir)
    for message in document.messages:
        logger.info("Conversion message: %s", message)

    projects = parse_projects(document.markup, document.images, image_policy=image_policy)
    logger.info("Parsed %s projects", len(projects))

    valid = finalize_projects(projects, anonymize)
    catalog = build_catalog(valid, source_file=str(input_path))
    write_catalog(catalog, output_path)

    logger.info("Wrote %s projects to %s", catalog.metadata.total_projects, output_path)
    logger.info("Categories: %s", ", ".join(catalog.metadata.categories))
    return catalog


def main() -> None:
    logging.basicConfig(level=settings.log_level)
    try:
        run_ingestion()
    except CatalogError as exc:
        logger.error("Ingestion failed: %s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
