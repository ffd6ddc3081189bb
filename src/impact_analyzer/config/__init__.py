"""Configuration management for the impact analyzer."""

from impact_analyzer.config.loader import DEFAULT_CONFIG_NAMES, find_config, load_config
from impact_analyzer.config.models import (
    AnalyzerType,
    Config,
    LoggingConfig,
    OutputConfig,
    RelationConfig,
    RepositoryConfig,
    RepoType,
)
from impact_analyzer.config.template import render_template, template_filename

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "AnalyzerType",
    "Config",
    "LoggingConfig",
    "OutputConfig",
    "RelationConfig",
    "RepoType",
    "RepositoryConfig",
    "find_config",
    "load_config",
    "render_template",
    "template_filename",
]
