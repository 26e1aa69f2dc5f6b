"""
Configuration loader — reads crudgen.yml into generation settings.

The config lists the modules of an API project and the defaults used
when generating them. It is optional for single-module commands that
receive ``--path`` explicitly.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from crudgen.core.models.request import ApiType, Framework, ModuleGenerationRequest
from crudgen.core.services.naming import to_kebab_case, validate_module_name

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "crudgen.yml"

DEFAULT_APIS_DIR = "src/apis"


class ConfigError(Exception):
    """Raised when crudgen configuration is invalid or missing."""


class ModuleEntry(BaseModel):
    """One module listed in crudgen.yml."""

    name: str
    path: str | None = None
    api_type: ApiType = Field(default_factory=ApiType)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        return validate_module_name(value)


class GeneratorConfig(BaseModel):
    """Top-level crudgen.yml contents."""

    version: int = 1
    framework: Framework = "express"
    apis_dir: str = DEFAULT_APIS_DIR
    append_mode: bool = False
    modules: list[ModuleEntry] = Field(default_factory=list)

    @field_validator("modules")
    @classmethod
    def _unique_modules(cls, value: list[ModuleEntry]) -> list[ModuleEntry]:
        names = [m.name for m in value]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            raise ValueError(f"duplicate module names: {', '.join(dupes)}")
        return value

    def get_module(self, name: str) -> ModuleEntry | None:
        for module in self.modules:
            if module.name == name:
                return module
        return None


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for crudgen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to crudgen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> GeneratorConfig:
    """Load and validate crudgen configuration.

    Args:
        path: Explicit path to crudgen.yml. If None, searches upward.

    Returns:
        Validated GeneratorConfig.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {CONFIG_FILE} found. Create one, or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading crudgen config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = GeneratorConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid crudgen configuration: {e}") from e

    logger.info("Loaded crudgen config with %d module(s)", len(config.modules))
    return config


def project_root(config_path: Path) -> Path:
    """Get the project root directory from a config file path."""
    return config_path.parent.resolve()


def module_path(config: GeneratorConfig, entry: ModuleEntry, root: Path) -> Path:
    """Directory of a configured module, relative paths anchored at ``root``."""
    if entry.path:
        return (root / entry.path).resolve()
    return (root / config.apis_dir / to_kebab_case(entry.name)).resolve()


def build_request(
    config: GeneratorConfig,
    entry: ModuleEntry,
    root: Path,
    **overrides: object,
) -> ModuleGenerationRequest:
    """Turn a configured module into a generation request.

    Keyword overrides (``append_mode``, ``framework``, ``dry_run``) win
    over the config's defaults; ``None`` values are ignored.
    """
    fields: dict[str, object] = {
        "module_name": entry.name,
        "module_path": module_path(config, entry, root),
        "api_type": entry.api_type,
        "append_mode": config.append_mode,
        "framework": config.framework,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    return ModuleGenerationRequest(**fields)
