"""Run configuration: defaults, JSON config file loading and merging."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple
import json
import logging

from .errors import ConfigurationError

DEFAULT_ROOT = "images"
DEFAULT_EXTENSIONS: Tuple[str, ...] = (".jpeg", ".jpg", ".png", ".gif")
DEFAULT_CSV_NAME = "exif-data.csv"
DEFAULT_HTML_NAME = "exif-data.html"
DEFAULT_LOG_LEVEL = "INFO"

_FILE_KEYS = {
    "path": str,
    "extensions": list,
    "output_dir": str,
    "csv_name": str,
    "html_name": str,
    "log_level": str,
}


@dataclass(frozen=True)
class ScanConfig:
    """Everything a run needs, built once at startup and passed down."""
    root_path: Path = Path(DEFAULT_ROOT)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    output_dir: Path = field(default_factory=Path)
    csv_name: str = DEFAULT_CSV_NAME
    html_name: str = DEFAULT_HTML_NAME
    emit_csv: bool = True
    emit_html: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def csv_path(self) -> Path:
        return self.output_dir / self.csv_name

    @property
    def html_path(self) -> Path:
        return self.output_dir / self.html_name


def select_reports(html: bool, csv: bool) -> Tuple[bool, bool]:
    """Return (emit_csv, emit_html). Neither or both flags means both reports."""
    if html and not csv:
        return False, True
    if csv and not html:
        return True, False
    return True, True


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load and validate a JSON config file.

    Unknown keys are rejected so a typo does not silently fall back to a default.
    """
    try:
        raw = json.loads(Path(config_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in configuration file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read configuration file {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")

    for key, value in raw.items():
        expected = _FILE_KEYS.get(key)
        if expected is None:
            raise ConfigurationError(f"Unknown configuration key: {key}")
        if not isinstance(value, expected):
            raise ConfigurationError(f"Configuration key '{key}' must be of type {expected.__name__}")

    level = raw.get("log_level")
    if level is not None:
        _check_log_level(level)

    exts = raw.get("extensions")
    if exts is not None and not all(isinstance(e, str) and e for e in exts):
        raise ConfigurationError("Configuration key 'extensions' must be a list of non-empty strings")
    return raw


def _check_log_level(level: str) -> str:
    level = level.upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(f"Unknown log level: {level}")
    return level


def _normalize_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
    # suffix match is case-sensitive, so only a missing dot is fixed up
    exts = []
    for ext in extensions:
        ext = ext.strip()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in exts:
            exts.append(ext)
    if not exts:
        raise ConfigurationError("At least one file extension is required")
    return tuple(exts)


def build_config(
    path: Optional[str] = None,
    extensions: Optional[Iterable[str]] = None,
    output_dir: Optional[str] = None,
    html: bool = False,
    csv: bool = False,
    log_level: Optional[str] = None,
    file_values: Optional[Dict[str, Any]] = None,
) -> ScanConfig:
    """Merge defaults, config file values and command-line values (highest wins)."""
    file_values = file_values or {}

    # an empty --path falls back to the default like an absent one
    root = path or file_values.get("path") or DEFAULT_ROOT
    exts = extensions or file_values.get("extensions") or DEFAULT_EXTENSIONS
    out = output_dir or file_values.get("output_dir") or "."
    level = _check_log_level(log_level or file_values.get("log_level") or DEFAULT_LOG_LEVEL)
    emit_csv, emit_html = select_reports(html, csv)

    return ScanConfig(
        root_path=Path(root),
        extensions=_normalize_extensions(exts),
        output_dir=Path(out),
        csv_name=file_values.get("csv_name") or DEFAULT_CSV_NAME,
        html_name=file_values.get("html_name") or DEFAULT_HTML_NAME,
        emit_csv=emit_csv,
        emit_html=emit_html,
        log_level=level,
    )
