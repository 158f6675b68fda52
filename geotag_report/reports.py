"""Reports: write the collected records as CSV and as an HTML table."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Callable, List, Sequence
import csv
import logging

from jinja2 import Environment, PackageLoader, select_autoescape

from .config import ScanConfig
from .errors import ReportWriteError
from .extractor import NOT_AVAILABLE, ImageRecord

logger = logging.getLogger(__name__)

CSV_HEADERS = ["File Path", "Latitude", "Longitude"]
HTML_TEMPLATE = "exif_report.html"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("geotag_report", "templates"),
        autoescape=select_autoescape(["html"]),
    )


def write_csv(records: Sequence[ImageRecord], path: Path) -> Path:
    path = Path(path)
    try:
        with open(path, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_HEADERS)
            for record in records:
                writer.writerow([record.file_path, record.latitude, record.longitude])
    except OSError as e:
        raise ReportWriteError(f"Error creating CSV file {path}. Error: {e}") from e
    return path


def render_html(records: Sequence[ImageRecord], title: str = "EXIF GPS data") -> str:
    template = _environment().get_template(HTML_TEMPLATE)
    return template.render(records=records, placeholder=NOT_AVAILABLE, title=title)


def write_html(records: Sequence[ImageRecord], path: Path) -> Path:
    path = Path(path)
    page = render_html(records)
    try:
        path.write_text(page, encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(f"Error creating HTML file {path}. Error: {e}") from e
    return path


def write_reports(records: Sequence[ImageRecord], config: ScanConfig) -> List[Path]:
    """Write the reports selected in `config`; return the paths written.

    A report that fails is logged and skipped, the other one is still written.
    """
    jobs: List[tuple[Callable, Path]] = []
    if config.emit_csv:
        jobs.append((write_csv, config.csv_path))
    if config.emit_html:
        jobs.append((write_html, config.html_path))

    written: List[Path] = []
    for writer, target in jobs:
        try:
            written.append(writer(records, target))
        except ReportWriteError as e:
            logger.error("%s", e)
            continue
        logger.info("Wrote %d records to %s", len(records), target)
    return written
