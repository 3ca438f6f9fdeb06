"""Configuration loading utilities for Unit Compare."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

ROW_FIELDS = ("name", "quantity", "price")


@dataclass
class DisplayConfig:
    """Number formatting used when unit prices are shown to the user."""

    decimal_separator: str = ","
    group_separator: str = "."
    min_fraction_digits: int = 2
    max_fraction_digits: int = 4
    min_grouping_digits: int = 2
    unit_suffix: str = "per unit"


@dataclass
class MessagesConfig:
    """User facing texts attached to a calculation summary."""

    no_valid_rows: str = "Enter a quantity greater than 0 and a valid price to calculate."
    winner: str = "{label} has the best price per unit."


@dataclass
class OutputConfig:
    """Paths describing where exported reports should be written."""

    directory: Path = Path("output")
    summary_report: str = "unit_prices.csv"
    audit_log: str = "calculation_audit.json"

    def resolved(self, base_path: Path) -> "OutputConfig":
        return OutputConfig(
            directory=_resolve_path(self.directory, base_path),
            summary_report=self.summary_report,
            audit_log=self.audit_log,
        )


@dataclass
class AppConfig:
    """Container for everything the CLI and UI need to start a session."""

    rows: List[Dict[str, str]] = field(default_factory=list)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    messages: MessagesConfig = field(default_factory=MessagesConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def resolved(self, base_path: Path) -> "AppConfig":
        return AppConfig(
            rows=self.rows,
            display=self.display,
            messages=self.messages,
            output=self.output.resolved(base_path),
        )


def load_config(path: Path) -> AppConfig:
    """Load :class:`AppConfig` from a YAML file."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' does not exist")

    with config_path.open("r", encoding="utf-8") as stream:
        raw_config: Mapping[str, Any] = yaml.safe_load(stream) or {}

    if not isinstance(raw_config, Mapping):
        raise ValueError("Configuration root must be a mapping")

    rows = parse_row_entries(raw_config.get("rows") or [])
    display = DisplayConfig(**_section(raw_config, "display"))
    messages = MessagesConfig(**_section(raw_config, "messages"))
    output = OutputConfig(**_parse_output_section(_section(raw_config, "output")))

    _validate_display(display)
    _validate_messages(messages)

    config = AppConfig(rows=rows, display=display, messages=messages, output=output)
    return config.resolved(config_path.parent)


def parse_row_entries(entries: Any) -> List[Dict[str, str]]:
    """Normalise raw row descriptors into ``name``/``quantity``/``price`` strings."""

    if not isinstance(entries, list):
        raise ValueError("rows must be a list of row descriptors")

    parsed: List[Dict[str, str]] = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise ValueError(f"rows[{position}] must be a mapping")
        unknown = set(entry) - set(ROW_FIELDS)
        if unknown:
            raise ValueError(
                f"rows[{position}] has unknown keys: {', '.join(sorted(map(str, unknown)))}"
            )
        parsed.append({key: _normalise_row_value(entry.get(key)) for key in ROW_FIELDS})
    return parsed


def _normalise_row_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _section(raw_config: Mapping[str, Any], name: str) -> Dict[str, Any]:
    section = raw_config.get(name) or {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'{name}' section must be a mapping")
    return dict(section)


def _parse_output_section(section: Mapping[str, Any]) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    if "directory" in section:
        parsed["directory"] = Path(section["directory"])
    for key in ("summary_report", "audit_log"):
        if key in section:
            parsed[key] = section[key]
    return parsed


def _validate_display(display: DisplayConfig) -> None:
    if display.min_fraction_digits < 0 or display.max_fraction_digits < 0:
        raise ValueError("display fraction digits must be non-negative")
    if display.min_fraction_digits > display.max_fraction_digits:
        raise ValueError("display.min_fraction_digits cannot exceed display.max_fraction_digits")
    if display.min_grouping_digits < 1:
        raise ValueError("display.min_grouping_digits must be at least 1")


def _validate_messages(messages: MessagesConfig) -> None:
    if "{label}" not in messages.winner:
        raise ValueError("messages.winner must contain the '{label}' placeholder")
    try:
        messages.winner.format(label="A")
    except (KeyError, IndexError, ValueError) as exc:
        raise ValueError(f"messages.winner is not a valid template: {exc}") from exc


def _resolve_path(path: Path, base_path: Path) -> Path:
    expanded = Path(path).expanduser()
    if expanded.is_absolute():
        return expanded
    return (base_path / expanded).resolve()


__all__ = [
    "AppConfig",
    "DisplayConfig",
    "MessagesConfig",
    "OutputConfig",
    "load_config",
    "parse_row_entries",
]
