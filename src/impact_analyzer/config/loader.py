"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from impact_analyzer.config.models import Config
from impact_analyzer.errors import ConfigurationError

DEFAULT_CONFIG_NAMES = (
    "impact.config.yaml",
    "impact.config.yml",
    "impact.config.json",
    ".impactrc.yaml",
    ".impactrc.json",
)


def load_config(config_path: Path) -> Config:
    """
    Load and validate an impact analyzer configuration file.

    YAML is used for ``.yaml``/``.yml`` files, JSON otherwise. Relative
    repository paths are resolved against the config file's directory.

    Args:
        config_path: Path to the config file.

    Returns:
        Validated Config object.

    Raises:
        FileNotFoundError: If config_path doesn't exist.
        ValueError: If the file cannot be parsed or its root is not a mapping.
        ConfigurationError: If the content fails validation.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    data = _parse_file(config_path)

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping, not {type(data).__name__}")

    if not data.get("repos"):
        raise ConfigurationError(
            f"Invalid config: {config_path}",
            errors=["repos: At least one repository is required"],
        )

    _resolve_repo_paths(data, config_path.parent)

    try:
        return Config(**data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc']) or 'config'}: {err['msg']}"
            for err in e.errors()
        ]
        raise ConfigurationError(f"Invalid config: {config_path}", errors=errors) from e


def find_config(base_dir: Path | None = None) -> Path | None:
    """
    Find a config file with one of the default names.

    Args:
        base_dir: Directory to search, defaults to the working directory.

    Returns:
        Path to the first config file found, or None.
    """
    base = base_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def _parse_file(config_path: Path) -> Any:
    is_yaml = config_path.suffix in (".yaml", ".yml")
    text = config_path.read_text()

    if is_yaml:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file: {e}") from e


def _resolve_repo_paths(data: dict[str, Any], base_dir: Path) -> None:
    repos = data.get("repos")
    if not isinstance(repos, list):
        return

    for repo in repos:
        if not isinstance(repo, dict) or not isinstance(repo.get("path"), str):
            continue
        path = Path(repo["path"]).expanduser()
        if repo["path"] and not path.is_absolute():
            repo["path"] = str((base_dir / path).resolve())
