"""Project record models written to the catalog."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectImage(BaseModel):
    """An image extracted from the source document."""

    src: str
    alt: str


class ProjectFields(BaseModel):
    """Normalized project content, before an identifier is assigned."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    client: str
    category: str
    summary: str
    problem: List[str] = Field(..., min_length=1)
    approach: List[str] = Field(..., min_length=1)
    outcomes: List[str] = Field(..., min_length=1)
    tech_stack: List[str] = Field(..., min_length=1, alias="techStack")
    tags: List[str] = Field(..., min_length=1)
    images: List[ProjectImage] = Field(default_factory=list)
    date: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")


class ProjectRecord(ProjectFields):
    """A project as it appears in the published catalog."""

    id: str = Field(..., min_length=1)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be blank")
        return value
