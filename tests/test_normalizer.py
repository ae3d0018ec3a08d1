from datetime import date

import pytest

from project_catalog.ingestion.normalizer import (
    Decoding,
    normalize_project,
    parse_comma_separated,
    parse_list_items,
    resolve_title,
    route_label,
)

PROCESSING_DATE = date(2024, 5, 1)


def test_comma_separated_trims_and_drops_empty_fragments():
    assert parse_comma_separated("Azure,  Power BI ; Python") == ["Azure", "Power BI", "Python"]
    assert parse_comma_separated("<p>etl, , bi;etl</p>") == ["etl", "bi", "etl"]
    assert parse_comma_separated("") == []


def test_list_items_from_markup():
    markup = "</p><ul><li>First item</li><li> </li><li>Second &amp; <em>third</em></li></ul><p>"
    assert parse_list_items(markup) == ["First item", "Second & third"]


def test_list_items_fall_back_to_bullet_glyphs():
    text = "• Migrated legacy warehouse • Short • Automated reporting pipelines"
    assert parse_list_items(text) == [
        "Migrated legacy warehouse",
        "Automated reporting pipelines",
    ]


def test_list_items_placeholder_when_nothing_usable():
    assert parse_list_items("too short") == ["Comprehensive solution implementation"]
    assert parse_list_items("") == ["Comprehensive solution implementation"]


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Client", ("client", Decoding.TEXT)),
        ("CHALLENGES", ("problem", Decoding.LIST)),
        ("Methodology:", ("approach", Decoding.LIST)),
        (" Benefits ", ("outcomes", Decoding.LIST)),
        ("Tech Stack", ("tech_stack", Decoding.COMMA)),
        ("keywords", ("tags", Decoding.COMMA)),
        ("Budget", None),
        ("Tech", None),
    ],
)
def test_route_label(label, expected):
    assert route_label(label) == expected


def test_resolve_title_fallback():
    assert resolve_title("Data Lake", 0) == "Data Lake"
    assert resolve_title(None, 2) == "Project 3"
    assert resolve_title("", 0) == "Project 1"


def test_defaults_fill_every_field():
    fields = normalize_project("Data Lake", {}, 2, processing_date=PROCESSING_DATE)

    assert fields.title == "Data Lake"
    assert fields.client == "Leading technology company 3"
    assert fields.summary == "Advanced data lake solution delivering measurable business value."
    assert fields.category == "Data & AI"
    assert fields.problem == ["Complex data challenges requiring data lake solutions"]
    assert fields.approach == ["Implemented comprehensive data lake methodology"]
    assert fields.outcomes == ["Delivered measurable improvements in operational efficiency"]
    assert fields.tech_stack == ["Azure", "Power BI", "Python", "Machine Learning"]
    assert fields.tags == ["Data Analytics", "AI", "Business Intelligence"]
    assert fields.images == []
    assert fields.date == "2024-05-01"


def test_synonyms_route_to_fields_and_unknown_labels_are_ignored():
    sections = {
        "Challenges": "<ul><li>Slow reports</li></ul>",
        "Results": "<li>Faster reporting by 40%</li>",
        "Keywords": "etl; bi",
        "Summary": " Unified   reporting&nbsp;platform ",
        "Budget": "$1m",
    }
    fields = normalize_project("Reporting", sections, 0, processing_date=PROCESSING_DATE)

    assert fields.problem == ["Slow reports"]
    assert fields.outcomes == ["Faster reporting by 40%"]
    assert fields.tags == ["etl", "bi"]
    assert fields.summary == "Unified reporting platform"
    assert fields.approach == ["Implemented comprehensive reporting methodology"]


def test_later_section_routed_to_a_field_replaces_earlier():
    sections = {
        "Problem": "<li>The first problem statement</li>",
        "Challenges": "<li>A later challenge statement</li>",
    }
    fields = normalize_project("X", sections, 0, processing_date=PROCESSING_DATE)
    assert fields.problem == ["A later challenge statement"]


def test_empty_sections_get_defaults():
    sections = {"Client": "   ", "Tech Stack": "<p></p>", "Approach": ""}
    fields = normalize_project("Ops", sections, 0, processing_date=PROCESSING_DATE)

    assert fields.client == "Leading technology company 1"
    assert fields.tech_stack == ["Azure", "Power BI", "Python", "Machine Learning"]
    assert fields.approach == ["Comprehensive solution implementation"]


def test_tech_stack_dumps_with_camel_case_alias():
    fields = normalize_project("X", {"Technologies": "Spark"}, 0, processing_date=PROCESSING_DATE)
    dumped = fields.model_dump(by_alias=True)

    assert dumped["techStack"] == ["Spark"]
    assert "tech_stack" not in dumped
