"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import EngineOptions, get_default_options
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Builds validated EngineOptions from defaults, a YAML file and overrides."""

    config_path: Optional[Path] = None

    @classmethod
    def create(cls, config_path: Optional[Union[str, Path]] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        return cls(config_path=Path(config_path) if config_path is not None else None)

    def load_file_config(self) -> dict[str, Any]:
        """Load the strategy section of the YAML file, empty when absent."""
        if self.config_path is None or not self.config_path.exists():
            return {}

        with open(self.config_path) as f:
            file_config = yaml.safe_load(f) or {}

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping, got {type(file_config).__name__}",
                context={"path": str(self.config_path)}
            )

        return file_config.get("strategy", file_config)  # type: ignore[no-any-return]

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. YAML file values
        3. Defaults (lowest priority)
        """
        config = get_default_options()
        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> EngineOptions:
        """Merge, validate and build EngineOptions."""
        config = self.merge_config(overrides)
        return build_options(config)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def build_options(params: Union[EngineOptions, dict[str, Any]]) -> EngineOptions:
    """
    Validate an options mapping and build EngineOptions.

    Raises:
        ConfigurationError: If any field is unknown or invalid
    """
    if isinstance(params, EngineOptions):
        params = params.to_dict()

    unknown = set(params) - EngineOptions.field_names()
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration fields: {sorted(unknown)}",
            context={"unknown": sorted(unknown)}
        )

    merged = {**get_default_options(), **params}
    errors = ConfigValidator.validate_options(merged)
    if errors:
        error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
        logger.error("Configuration validation failed", errors=error_msgs)
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(error_msgs),
            errors=errors
        )

    return EngineOptions(**merged)
