"""geotag_report package - scan images, extract EXIF GPS positions and write CSV/HTML reports."""

from .config import ScanConfig, build_config
from .extractor import NOT_AVAILABLE, ImageRecord, build_record, extract_gps_tags
from .formatter import format_coordinate
from .reports import write_csv, write_html, write_reports
from .scanner import aggregate, scan_images

__all__ = [
    "NOT_AVAILABLE",
    "ImageRecord",
    "ScanConfig",
    "aggregate",
    "build_config",
    "build_record",
    "extract_gps_tags",
    "format_coordinate",
    "scan_images",
    "write_csv",
    "write_html",
    "write_reports",
]
