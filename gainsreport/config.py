"""
Configuration loading and validation for the gains-report application.

Configuration is optional: every field has a default matching the standard
brokerage realized gain/loss export, and a YAML file only needs to name the
values it overrides.
"""

import yaml
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Tuple, Type, cast

__all__ = ["load_config", "Config", "ParsingConfig", "ReportConfig"]


# §1. Nested Configuration Dataclasses
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsingConfig:
    expected_fields: int = 10
    date_format: str = "%m/%d/%Y"
    unknown_date: str = "Unknown"
    placeholders: Tuple[str, ...] = ("--",)


@dataclass(frozen=True)
class ReportConfig:
    currency: str = "USD"
    show_totals: bool = False


# §2. Top-Level Configuration
# --------------------------------------------------------------------------------------


@dataclass(frozen=True)
class Config:
    """The root configuration object, composing all nested sections."""
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    report: ReportConfig = field(default_factory=ReportConfig)


# §3. Validation and Loading
# --------------------------------------------------------------------------------------

# The classifier reads columns 0 through 8.
_MIN_FIELDS = 9


def _from_dict(data_class: Type[Any], data: Any) -> Any:
    """Recursively creates nested dataclasses from a dictionary."""
    if isinstance(data, dict) and hasattr(data_class, "__dataclass_fields__"):
        field_types = {f.name: f.type for f in fields(data_class)}

        kwargs = {}
        for k, v in data.items():
            field_type = field_types.get(k)
            # Unknown keys are passed through so the dataclass constructor
            # raises a TypeError, which load_config reports.
            kwargs[k] = _from_dict(field_type, v) if field_type else v
        return data_class(**kwargs)
    # YAML sequences become tuples so the frozen config stays hashable.
    if isinstance(data, list) and getattr(data_class, "__origin__", None) is tuple:
        return tuple(data)
    return data


def _validate_config(cfg: Any) -> None:
    """
    Performs simple, explicit validation checks on the raw config dictionary.
    Fail fast on any logical inconsistencies.
    """
    if not isinstance(cfg, dict):
        raise ValueError("Configuration must be a YAML object.")

    for section in ("parsing", "report"):
        if section in cfg and not isinstance(cfg[section], dict):
            raise ValueError(f"'{section}' must be a mapping.")

    parsing = cfg.get("parsing", {})
    expected_fields = parsing.get("expected_fields", _MIN_FIELDS)
    if not isinstance(expected_fields, int) or expected_fields < _MIN_FIELDS:
        raise ValueError(f"parsing.expected_fields must be an integer >= {_MIN_FIELDS}")

    for key in ("date_format", "unknown_date"):
        value = parsing.get(key, "default")
        if not isinstance(value, str) or not value:
            raise ValueError(f"parsing.{key} must be a non-empty string")

    placeholders = parsing.get("placeholders", [])
    if not isinstance(placeholders, list) or not all(isinstance(p, str) for p in placeholders):
        raise ValueError("parsing.placeholders must be a list of strings")

    report = cfg.get("report", {})
    currency = report.get("currency", "USD")
    if not isinstance(currency, str) or not currency:
        raise ValueError("report.currency must be a non-empty string")


# impure
def load_config(config_path: Path) -> Config:
    """
    Loads and validates a YAML configuration file into a Config object.
    #impure: Reads from the filesystem.
    """
    if not config_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax in {config_path}: {e}") from e

    # An empty file means "all defaults".
    if raw_config is None:
        return Config()

    _validate_config(raw_config)

    try:
        return cast(Config, _from_dict(Config, raw_config))
    except (TypeError, KeyError) as e:
        raise ValueError(f"Configuration validation failed: missing or invalid key. Details: {e}") from e
