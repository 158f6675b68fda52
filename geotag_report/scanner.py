"""Scanner: walk a source directory and collect a GPS record per image file."""
from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union
import logging

from .config import DEFAULT_EXTENSIONS
from .errors import ExtractionError, TraversalError
from .extractor import ImageRecord, build_record

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, Path], None]


def has_valid_extension(name: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    """Case-sensitive suffix match: ``photo.jpg`` matches ``.jpg``, ``photo.JPG`` does not."""
    return any(name.endswith(ext) for ext in extensions)


def _children(directory: Path) -> List[Path]:
    try:
        return sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise TraversalError(f"error while walking directory: {directory}, with error: {e}") from e


def walk_files(root: Union[str, Path]) -> Iterator[Path]:
    """Yield every file under `root`, depth first, entries in name order.

    Symlinked directories are not followed. Raises TraversalError when the
    root or any directory below it cannot be listed.
    """
    root = Path(root)
    if not root.exists():
        raise TraversalError(f"Source path not found: {root}")
    if not root.is_dir():
        raise TraversalError(f"Source path is not a directory: {root}")

    stack = [iter(_children(root))]
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue
        if entry.is_dir() and not entry.is_symlink():
            stack.append(iter(_children(entry)))
        elif entry.is_file():
            yield entry


def scan_images(source: Union[str, Path], extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> Iterator[Path]:
    """Yield the files under `source` whose name ends with one of `extensions`."""
    exts = tuple(extensions)
    for path in walk_files(source):
        if has_valid_extension(path.name, exts):
            yield path


def aggregate(
    root_path: Union[str, Path],
    allowed_extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    progress_cb: Optional[ProgressCallback] = None,
) -> List[ImageRecord]:
    """Build one ImageRecord per image under `root_path`, in walk order.

    Files that fail extraction are logged and skipped. TraversalError
    propagates to the caller.
    """
    records: List[ImageRecord] = []
    done = skipped = 0

    for path in scan_images(root_path, allowed_extensions):
        try:
            records.append(build_record(path))
        except ExtractionError as e:
            skipped += 1
            logger.warning("Skipping %s: %s", e.path, e)
        done += 1
        if progress_cb:
            try:
                progress_cb(done, path)
            except Exception:
                logger.debug("progress callback failed for %s", path, exc_info=True)

    logger.info("Scanned %d image files under %s: %d records, %d skipped", done, root_path, len(records), skipped)
    return records
