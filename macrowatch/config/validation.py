"""Configuration validation utilities."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_signal_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate signal derivation parameters."""
        errors = []

        if "min_run_length" in params:
            value = params["min_run_length"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="min_run_length",
                    message="Must be a positive integer",
                    value=value
                ))

        if "min_points" in params:
            value = params["min_points"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 2:
                errors.append(ValidationError(
                    field="min_points",
                    message="Must be an integer of at least 2",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_rolling_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate display smoothing parameters."""
        errors = []

        if "window" in params:
            value = params["window"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="window",
                    message="Must be a positive integer",
                    value=value
                ))

        if "round_digits" in params:
            value = params["round_digits"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(ValidationError(
                    field="round_digits",
                    message="Must be a non-negative integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_source_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate source endpoint parameters."""
        errors = []

        for key in ("fred_base_url", "swpc_base_url"):
            if key in params:
                value = params[key]
                parsed = urlparse(value) if isinstance(value, str) else None
                if not parsed or not parsed.scheme or not parsed.netloc:
                    errors.append(ValidationError(
                        field=key,
                        message="Must be an absolute URL",
                        value=value
                    ))

        if params.get("recessions_url"):
            value = params["recessions_url"]
            parsed = urlparse(value) if isinstance(value, str) else None
            if not parsed or not parsed.scheme or not parsed.netloc:
                errors.append(ValidationError(
                    field="recessions_url",
                    message="Must be empty or an absolute URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if not _is_positive_int(value):
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive integer",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "signals" in config:
            errors.extend(ConfigValidator.validate_signal_params(config["signals"]))

        if "rolling" in config:
            errors.extend(ConfigValidator.validate_rolling_params(config["rolling"]))

        if "sources" in config:
            errors.extend(ConfigValidator.validate_source_params(config["sources"]))

        return errors
