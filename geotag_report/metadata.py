"""Metadata: find the EXIF block in image bytes and flatten it into named tags.

Pillow locates the EXIF block in the container (JPEG APP1, PNG eXIf, WebP),
piexif decodes it into IFD dictionaries. Tag values are normalized here so the
rest of the package only ever sees three shapes:

* ``str`` for ASCII tags,
* ``tuple`` of :class:`Rational` for RATIONAL/SRATIONAL tags,
* whatever piexif returned for everything else.
"""
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List, NamedTuple, Tuple, Union
import logging

from PIL import Image, UnidentifiedImageError
import piexif

from .errors import MetadataDecodeError, NoMetadataError, TagFlattenError

logger = logging.getLogger(__name__)

# order in which IFDs are searched, and the piexif tag table naming each one
IFD_TABLES = (
    ("0th", "Image"),
    ("Exif", "Exif"),
    ("GPS", "GPS"),
    ("Interop", "Interop"),
    ("1st", "Image"),
)

_RATIONAL_TYPES = (piexif.TYPES.Rational, piexif.TYPES.SRational)


class Rational(NamedTuple):
    numerator: int
    denominator: int


# ASCII tags, RATIONAL/SRATIONAL tags, anything else as piexif returned it
TagValue = Union[str, Tuple[Rational, ...], object]


class FlatTag(NamedTuple):
    ifd: str
    name: str
    value: TagValue


def decode_container(data: bytes, path: Union[str, Path] = "<bytes>") -> Dict[str, Any]:
    """Return piexif's IFD dictionary for the EXIF block embedded in `data`.

    Raises NoMetadataError when the image has no EXIF block and
    MetadataDecodeError when the bytes are not an image or the block is broken.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            exif_bytes = img.info.get("exif")
            fmt = img.format
    except UnidentifiedImageError as e:
        raise MetadataDecodeError(path, f"error reading exif data from file: {path}, with error: not a recognised image") from e
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        # Pillow reports some malformed headers as SyntaxError
        raise MetadataDecodeError(path, f"error reading exif data from file: {path}, with error: {e}") from e

    if not exif_bytes:
        raise NoMetadataError(path, f"no EXIF data found in the file: {path} ({fmt})")

    try:
        exif = piexif.load(exif_bytes)
    except Exception as e:
        raise MetadataDecodeError(path, f"error reading exif data from file: {path}, with error: {e}") from e

    logger.debug("Decoded %s EXIF block of %d bytes from %s", fmt, len(exif_bytes), path)
    return exif


def _tag_info(table: str, tag: int) -> Dict[str, Any]:
    return piexif.TAGS.get(table, {}).get(tag, {})


def _as_rationals(value) -> tuple:
    # piexif returns a single rational as (num, den) and several as ((num, den), ...)
    if len(value) == 2 and all(isinstance(v, int) for v in value):
        value = (value,)
    return tuple(Rational(int(num), int(den)) for num, den in value)


def _normalize_value(value, tag_type):
    if tag_type == piexif.TYPES.Ascii and isinstance(value, bytes):
        try:
            return value.rstrip(b"\x00").decode("ascii")
        except UnicodeDecodeError:
            return value
    if tag_type in _RATIONAL_TYPES and isinstance(value, tuple):
        return _as_rationals(value)
    return value


def flatten_tags(exif: Dict[str, Any], path: Union[str, Path] = "<bytes>") -> List[FlatTag]:
    """Return every tag of every IFD as one flat list.

    The search is non-strict: an IFD that is missing is skipped, and a tag the
    tables don't know keeps a ``Tag0xNNNN`` name.
    """
    tags: List[FlatTag] = []
    try:
        for ifd, table in IFD_TABLES:
            entries = exif.get(ifd) or {}
            for tag, value in entries.items():
                info = _tag_info(table, tag)
                name = info.get("name") or f"Tag0x{tag:04X}"
                tags.append(FlatTag(ifd, name, _normalize_value(value, info.get("type"))))
    except Exception as e:
        raise TagFlattenError(path, f"error fetching flat exif data from file: {path}, with error: {e}") from e
    return tags
