"""Configuration management for Esploro File Kit."""

from .manager import ConfigManager
from .models import ProjectConfig, RepositoryConfig, ProcessingConfig
from .settings import Settings, settings

__all__ = ["ConfigManager", "ProjectConfig", "RepositoryConfig", "ProcessingConfig", "Settings", "settings"]
