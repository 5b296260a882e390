"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    apply_overrides,
    default_configuration,
    load_configuration,
    merge_metadata,
    parse_metadata_entries,
)
from .runtime_settings import (
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_PARALLELISM,
    Configuration,
    GenerationSettings,
    OutputSettings,
    SchemaPageLayout,
)

__all__ = [
    "Configuration",
    "GenerationSettings",
    "OutputSettings",
    "SchemaPageLayout",
    "DEFAULT_OUTPUT_DIRECTORY",
    "DEFAULT_PARALLELISM",
    "ConfigurationError",
    "apply_overrides",
    "default_configuration",
    "load_configuration",
    "merge_metadata",
    "parse_metadata_entries",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
