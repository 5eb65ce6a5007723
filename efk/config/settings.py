from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Project-wide settings sourced from .env and environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EFK_",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_url: str = "https://api-na.hosted.exlibrisgroup.com"
    api_key: str | None = None
    viewer_url_template: str | None = None

    # seconds between two records of a batch run
    pacing_delay: float = 0.1
    request_timeout: float = 30.0

    max_file_size: int = 10 * 1024 * 1024
    sample_rows: int = 3


settings = Settings()
