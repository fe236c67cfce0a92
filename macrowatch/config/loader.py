"""Configuration loader with 3-tier parameter precedence."""

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import structlog
import yaml

from ..errors import ConfigurationError
from .defaults import DefaultConfig, get_default_config
from .validation import ConfigValidator

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_series_config(self, series_id: str) -> dict[str, Any]:
        """Load series-specific configuration overrides."""
        sources_file = self.config_dir / "sources.yaml"

        if not sources_file.exists():
            return {}

        with open(sources_file) as f:
            sources_config = yaml.safe_load(f) or {}

        return sources_config.get("series", {}).get(series_id, {})  # type: ignore[no-any-return]

    def merge_config(
        self,
        series_id: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Series-specific overrides from sources.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        series_config = self.load_series_config(series_id)
        config = self._deep_merge(config, series_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(
        self,
        series_id: str = "default",
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge configuration for a series and rebuild the typed config tree.

        Raises:
            ConfigurationError: If the merged parameters fail validation
        """
        merged = self.merge_config(series_id, overrides)

        validation_errors = ConfigValidator.validate_config(merged)
        if validation_errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in validation_errors]
            logger.error("Configuration validation failed", series_id=series_id, errors=error_msgs)
            raise ConfigurationError(
                f"Invalid configuration for {series_id}: {'; '.join(error_msgs)}",
                setting=validation_errors[0].field,
                context={"series_id": series_id, "errors": error_msgs},
            )

        sections = {}
        for section in dataclasses.fields(self.defaults):
            section_default = getattr(self.defaults, section.name)
            known = {f.name for f in dataclasses.fields(section_default)}
            values = {k: v for k, v in merged.get(section.name, {}).items() if k in known}
            if "missing_markers" in values:
                values["missing_markers"] = tuple(values["missing_markers"])
            sections[section.name] = dataclasses.replace(section_default, **values)

        return DefaultConfig(**sections)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
