from pathlib import Path
import struct
import zlib

import piexif
import pytest
from PIL import Image

NORTH_LAT = ((34, 1), (5, 1), (1200, 100))
WEST_LON = ((118, 1), (14, 1), (3075, 100))


def gps_ifd(lat=None, lat_ref=None, lon=None, lon_ref=None):
    ifd = {}
    if lat_ref is not None:
        ifd[piexif.GPSIFD.GPSLatitudeRef] = lat_ref
    if lat is not None:
        ifd[piexif.GPSIFD.GPSLatitude] = lat
    if lon_ref is not None:
        ifd[piexif.GPSIFD.GPSLongitudeRef] = lon_ref
    if lon is not None:
        ifd[piexif.GPSIFD.GPSLongitude] = lon
    return ifd


def write_jpeg(path: Path, gps=None) -> Path:
    """Write a tiny JPEG carrying an EXIF block with the given GPS IFD."""
    exif_dict = {
        "0th": {piexif.ImageIFD.Make: b"Acme", piexif.ImageIFD.Model: b"Tester"},
        "Exif": {},
        "GPS": gps or {},
        "1st": {},
        "thumbnail": None,
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (8, 8), "white").save(path, "JPEG", exif=piexif.dump(exif_dict))
    return path


def write_plain(path: Path, fmt: str) -> Path:
    """Write an image without any EXIF block."""
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGB", (8, 8), "white").save(path, fmt)
    return path


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", zlib.crc32(kind + data))


def write_oversized_png(path: Path, width: int = 40000, height: int = 40000) -> Path:
    """Write a PNG header claiming more pixels than Pillow agrees to open."""
    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", ihdr)
        + _png_chunk(b"IDAT", b"")
        + _png_chunk(b"IEND", b"")
    )
    return path


@pytest.fixture
def located_jpeg(tmp_path):
    return write_jpeg(tmp_path / "located.jpg", gps_ifd(NORTH_LAT, "N", WEST_LON, "W"))


@pytest.fixture
def photo_tree(tmp_path):
    """images/ with two valid photos, one corrupt file and some non-images."""
    root = tmp_path / "images"
    write_jpeg(root / "a.jpg", gps_ifd(NORTH_LAT, "N", WEST_LON, "W"))
    write_jpeg(root / "trip" / "b.jpeg", gps_ifd())
    (root / "trip" / "broken.jpg").write_bytes(b"this is not a jpeg")
    (root / "notes.txt").write_text("not an image")
    write_jpeg(root / "upper.JPG", gps_ifd(NORTH_LAT, "N", WEST_LON, "W"))
    return root
