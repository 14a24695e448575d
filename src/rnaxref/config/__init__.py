"""Application configuration helpers."""

from __future__ import annotations

from .download import DownloadConfig, RetryPolicy, get_download_config
from .env import optional_env_var, optional_int_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .pipeline import FeedLocation, PipelineConfig, get_pipeline_config
from .species import DEFAULT_SPECIES, get_species_config, select_species
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_SPECIES",
    "ConfigurationError",
    "DatabaseConfig",
    "DownloadConfig",
    "FeedLocation",
    "MissingConfigurationError",
    "PipelineConfig",
    "RetryPolicy",
    "StorageConfig",
    "configure_logging",
    "get_database_config",
    "get_download_config",
    "get_pipeline_config",
    "get_species_config",
    "get_storage_config",
    "optional_env_var",
    "optional_int_env_var",
    "require_env_vars",
]
