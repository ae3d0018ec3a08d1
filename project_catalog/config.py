"""Application configuration loaded from environment variables."""

from pathlib import Path
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ImagePolicy = Literal["shared", "per_record", "none"]


class Settings(BaseSettings):
    """Global ingestion settings."""

    input_docx: str = "data/Data Projects Demo.docx"
    output_json: str = "public/projects.json"
    images_dir: str = "public/projects"
    images_url_prefix: str = "/projects"
    default_image_alt: str = "Project screenshot"

    short_label_max_chars: int = 50
    list_item_min_chars: int = 10
    id_max_length: int = 50

    default_category: str = "Data & AI"
    default_tech_stack: List[str] = Field(
        default_factory=lambda: ["Azure", "Power BI", "Python", "Machine Learning"]
    )
    default_tags: List[str] = Field(
        default_factory=lambda: ["Data Analytics", "AI", "Business Intelligence"]
    )
    default_outcome: str = "Delivered measurable improvements in operational efficiency"
    default_list_item: str = "Comprehensive solution implementation"

    image_policy: ImagePolicy = Field(
        default="shared",
        description="How document images are attached to records: shared, per_record or none.",
    )

    catalog_version: str = "1.0.0"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def input_docx_path(self) -> Path:
        return Path(self.input_docx)

    @property
    def output_json_path(self) -> Path:
        return Path(self.output_json)

    @property
    def images_dir_path(self) -> Path:
        return Path(self.images_dir)


settings = Settings()
