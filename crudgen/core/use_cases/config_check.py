"""
Config check use case — validate crudgen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crudgen.core.config.loader import (
    CONFIG_FILE,
    ConfigError,
    GeneratorConfig,
    find_config_file,
    load_config,
    module_path,
    project_root,
)
from crudgen.core.services.naming import to_kebab_case


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: GeneratorConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "framework": self.config.framework if self.config else None,
            "module_count": len(self.config.modules) if self.config else 0,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate crudgen configuration and report issues.

    Args:
        config_path: Optional explicit path to crudgen.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    if config_path is None:
        result.errors.append(f"No {CONFIG_FILE} found.")
        return result
    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    if not config.modules:
        result.warnings.append("No modules defined. There is nothing to generate.")

    # Distinct names can map to the same kebab-case directory
    root = project_root(config_path)
    seen: dict[Path, str] = {}
    for entry in config.modules:
        path = module_path(config, entry, root)
        if path in seen:
            result.errors.append(
                f"Modules '{seen[path]}' and '{entry.name}' resolve to the same path: {path}"
            )
        seen[path] = entry.name

        if not path.is_dir():
            hint = entry.path or f"{config.apis_dir}/{to_kebab_case(entry.name)}"
            result.warnings.append(f"Module '{entry.name}' path does not exist: {hint}")

    result.valid = len(result.errors) == 0
    return result
