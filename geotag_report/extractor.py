"""Extractor: read the GPS position of an image file into an ImageRecord."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Iterable, Union
import logging

from .errors import FileReadError
from .formatter import format_coordinate
from .metadata import FlatTag, Rational, decode_container, flatten_tags

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "Not available"

GPS_LATITUDE_REF = "GPSLatitudeRef"
GPS_LATITUDE = "GPSLatitude"
GPS_LONGITUDE_REF = "GPSLongitudeRef"
GPS_LONGITUDE = "GPSLongitude"


@dataclass(frozen=True)
class ImageRecord:
    file_path: str
    latitude: str
    longitude: str


@dataclass
class GPSFields:
    lat_dir: str = ""
    lat_val: str = ""
    lon_dir: str = ""
    lon_val: str = ""


def _direction(value):
    return value if isinstance(value, str) else None


def _position(value):
    if (
        isinstance(value, tuple)
        and len(value) == 3
        and all(isinstance(v, Rational) for v in value)
    ):
        return format_coordinate(value)
    return None


# tag name -> (GPSFields attribute, converter returning None for unusable values)
_GPS_TAGS: Dict[str, tuple[str, Callable]] = {
    GPS_LATITUDE_REF: ("lat_dir", _direction),
    GPS_LATITUDE: ("lat_val", _position),
    GPS_LONGITUDE_REF: ("lon_dir", _direction),
    GPS_LONGITUDE: ("lon_val", _position),
}


def extract_gps_tags(flat_tags: Iterable[FlatTag]) -> GPSFields:
    """Pick the four GPS position tags out of a flat tag list.

    Values of the wrong shape are ignored; a repeated tag overwrites the
    earlier one.
    """
    fields = GPSFields()
    for tag in flat_tags:
        handler = _GPS_TAGS.get(tag.name)
        if handler is None:
            continue
        attr, convert = handler
        converted = convert(tag.value)
        if converted is not None:
            setattr(fields, attr, converted)
    return fields


def _compose(value: str, direction: str) -> str:
    combined = value + direction
    return combined or NOT_AVAILABLE


def build_record_from_bytes(data: bytes, file_path: Union[str, Path]) -> ImageRecord:
    """Decode `data` (the content of `file_path`) into an ImageRecord."""
    exif = decode_container(data, file_path)
    tags = flatten_tags(exif, file_path)
    fields = extract_gps_tags(tags)
    logger.debug("%s: %d tags, gps=%s", file_path, len(tags), fields)
    return ImageRecord(
        file_path=str(file_path),
        latitude=_compose(fields.lat_val, fields.lat_dir),
        longitude=_compose(fields.lon_val, fields.lon_dir),
    )


def build_record(file_path: Union[str, Path]) -> ImageRecord:
    """Read `file_path` and return its ImageRecord.

    Raises an ExtractionError subclass when the file can't be read or carries
    no usable EXIF block. Missing GPS tags are not an error; the affected
    coordinate is set to ``Not available``.
    """
    try:
        data = Path(file_path).read_bytes()
    except OSError as e:
        raise FileReadError(file_path, f"error reading from file: {file_path}, with error: {e}") from e
    return build_record_from_bytes(data, file_path)
