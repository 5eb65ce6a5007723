"""Pydantic models for configuration validation."""

from pydantic import BaseModel, Field


class RepositoryConfig(BaseModel):
    """Remote repository API configuration."""

    url: str | None = Field(None, description="API base URL")
    api_key: str | None = Field(None, description="API key for authentication")
    viewer_url_template: str | None = Field(
        None, description="Viewer link template, e.g. 'https://host/esploro/outputs/{record_id}'"
    )
    timeout: float | None = Field(None, description="Request timeout in seconds")


class ProcessingConfig(BaseModel):
    """Batch processing configuration."""

    pacing_delay: float | None = Field(None, ge=0, description="Delay between records in seconds")
    sample_rows: int | None = Field(None, ge=1, description="Rows sampled for mapping suggestions")
    max_file_size: int | None = Field(None, gt=0, description="Upload size ceiling in bytes")


class ProjectConfig(BaseModel):
    """Main project configuration."""

    name: str = Field(..., description="Project name")
    version: str = Field("1.0.0", description="Project version")
    description: str | None = Field(None, description="Project description")

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig, description="Repository API configuration")
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig, description="Processing configuration")
