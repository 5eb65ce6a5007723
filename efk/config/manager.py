"""Configuration manager for loading and validating project settings."""

import yaml
from pathlib import Path
from typing import Any

from .models import ProjectConfig
from .settings import Settings, settings as default_settings
from ..backend.api import ApiGateway
from ..backend.interface import RemoteAssetGateway
from ..processor.batch import BatchProcessor


class ConfigManager:
    """Manages project configuration loading and validation.

    Values missing from the project file fall back to the environment settings.
    """

    def __init__(self, config_path: str | None = None, settings: Settings | None = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to the project configuration file, or None to
                rely on environment settings only
            settings: Environment settings (defaults to the module settings)
        """
        self.config_path = Path(config_path) if config_path else None
        self.settings = settings or default_settings
        self._config: ProjectConfig | None = None

    def load_config(self) -> ProjectConfig:
        """Load and validate project configuration.

        Returns:
            Validated project configuration

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If config file is invalid YAML
            ValidationError: If config doesn't match schema
        """
        if self.config_path is None:
            self._config = ProjectConfig(name="esploro-file-kit")
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        with open(self.config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        self._config = ProjectConfig(**config_data)
        return self._config

    @property
    def config(self) -> ProjectConfig:
        """Get the loaded configuration.

        Returns:
            Project configuration (loads if not already loaded)
        """
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def get_api_url(self) -> str:
        """Get repository API base URL."""
        return self.config.repository.url or self.settings.api_url

    def get_api_key(self) -> str | None:
        return self.config.repository.api_key or self.settings.api_key

    def get_viewer_url_template(self) -> str | None:
        return self.config.repository.viewer_url_template or self.settings.viewer_url_template

    def get_timeout(self) -> float:
        return self._pick(self.config.repository.timeout, self.settings.request_timeout)

    def get_pacing_delay(self) -> float:
        return self._pick(self.config.processing.pacing_delay, self.settings.pacing_delay)

    def get_sample_rows(self) -> int:
        return self._pick(self.config.processing.sample_rows, self.settings.sample_rows)

    def get_max_file_size(self) -> int:
        return self._pick(self.config.processing.max_file_size, self.settings.max_file_size)

    def get_gateway(self) -> ApiGateway:
        """Get a configured API gateway.

        Returns:
            ApiGateway; use it as an async context manager to close the client
        """
        return ApiGateway(
            base_url=self.get_api_url(),
            api_key=self.get_api_key(),
            timeout=self.get_timeout(),
        )

    def get_processor(self, gateway: RemoteAssetGateway, pacing_delay: float | None = None) -> BatchProcessor:
        """Get a batch processor bound to the given gateway."""
        return BatchProcessor(
            gateway,
            pacing_delay=self.get_pacing_delay() if pacing_delay is None else pacing_delay,
            viewer_url_template=self.get_viewer_url_template(),
        )

    @staticmethod
    def _pick(value: Any, fallback: Any) -> Any:
        # 0 is a legitimate configured value
        return fallback if value is None else value
