from datetime import date

from project_catalog.ingestion.assembler import assemble_project, build_project_id
from project_catalog.ingestion.normalizer import normalize_project


def test_project_id_from_title_and_position():
    assert build_project_id("Acme Migration", 0) == "acme-migration-1"
    assert build_project_id("AI & ML: Forecasting (v2)", 4) == "ai-ml-forecasting-v2-5"


def test_project_id_truncates_slug():
    assert build_project_id("a" * 60, 0) == "a" * 50 + "-1"


def test_project_id_is_deterministic():
    title = "Customer 360 Platform  Rollout"
    assert build_project_id(title, 7) == build_project_id(title, 7)
    assert build_project_id(title, 7) != build_project_id(title, 8)


def test_assemble_project_adds_id():
    fields = normalize_project("Acme Migration", {}, 3, processing_date=date(2024, 5, 1))
    record = assemble_project(fields, 3)

    assert record is not None
    assert record.id == "acme-migration-4"
    assert record.title == "Acme Migration"
    assert record.tech_stack == fields.tech_stack


def test_blank_title_is_rejected():
    fields = normalize_project("   ", {}, 0, processing_date=date(2024, 5, 1))
    assert assemble_project(fields, 0) is None
