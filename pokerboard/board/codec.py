"""Pillow-backed image codec with future-based operations.

Every operation is submitted to a thread pool and returns a
`concurrent.futures.Future` that resolves exactly once, either with the
result or with one of the errors from `pokerboard.board.errors`.
"""

import io
import logging
import os
import tempfile
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from pokerboard.board.errors import ImageOpenError, PasteError, WriteError

logger = logging.getLogger(__name__)

DEFAULT_QUALITY = 100

# Mode for written images; mkstemp alone leaves them 0600.
_UMASK = os.umask(0)
os.umask(_UMASK)
FILE_MODE = 0o666 & ~_UMASK


class ImageCodec:
    """Open, create, paste and encode images off the calling thread."""

    def __init__(self, max_workers: int = 2):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="pokerboard-codec",
        )

    def __enter__(self) -> "ImageCodec":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def open_image(self, path, stage=None) -> Future:
        """Decode an image file into an RGB bitmap."""
        return self._executor.submit(_open_image, Path(path), stage)

    def create_canvas(self, width: int, height: int, color="white", stage=None) -> Future:
        """Allocate a blank RGB canvas filled with `color`."""
        return self._executor.submit(_create_canvas, width, height, color, stage)

    def paste(self, src: Image.Image, dest: Image.Image, x: int, y: int, stage=None) -> Future:
        """Paste `src` onto `dest` at (x, y); resolves with `dest`."""
        return self._executor.submit(_paste, src, dest, x, y, stage)

    def write_file(self, img: Image.Image, path, quality: int = DEFAULT_QUALITY, stage=None) -> Future:
        """Encode `img` as JPEG at `path`, replacing any existing file."""
        return self._executor.submit(_write_file, img, Path(path), quality, stage)

    def to_buffer(self, img: Image.Image, quality: int = DEFAULT_QUALITY, stage=None) -> Future:
        """Encode `img` as JPEG bytes."""
        return self._executor.submit(_to_buffer, img, quality, stage)


def _open_image(path: Path, stage) -> Image.Image:
    logger.debug(f"Opening {path}")
    try:
        with Image.open(path) as img:
            return img.convert("RGB")
    except FileNotFoundError as e:
        raise ImageOpenError(path, "file not found", stage=stage) from e
    except UnidentifiedImageError as e:
        raise ImageOpenError(path, "not a decodable image", stage=stage) from e
    except Image.DecompressionBombError as e:
        raise ImageOpenError(path, str(e), stage=stage) from e
    except OSError as e:
        raise ImageOpenError(path, str(e), stage=stage) from e


def _create_canvas(width: int, height: int, color, stage) -> Image.Image:
    logger.debug(f"Creating {width}x{height} canvas")
    try:
        return Image.new("RGB", (width, height), color)
    except (ValueError, TypeError) as e:
        raise PasteError(f"Cannot create {width}x{height} canvas: {e}", stage=stage) from e


def _paste(src: Image.Image, dest: Image.Image, x: int, y: int, stage) -> Image.Image:
    if x < 0 or y < 0 or x + src.width > dest.width or y + src.height > dest.height:
        raise PasteError(
            f"{src.width}x{src.height} image at ({x}, {y}) does not fit "
            f"{dest.width}x{dest.height} canvas",
            stage=stage,
        )
    logger.debug(f"Pasting {src.width}x{src.height} at ({x}, {y})")
    try:
        dest.paste(src, (x, y))
    except ValueError as e:
        raise PasteError(str(e), stage=stage) from e
    return dest


def _write_file(img: Image.Image, path: Path, quality: int, stage) -> Path:
    # Encode next to the destination, then swap it in, so a failed write
    # never leaves a truncated file at `path`.
    tmp_path = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}-", suffix=".jpeg", dir=path.parent)
        tmp_path = Path(tmp_name)
        with os.fdopen(fd, "wb") as f:
            img.save(f, "JPEG", quality=quality)
        os.chmod(tmp_path, FILE_MODE)
        os.replace(tmp_path, path)
    except (OSError, ValueError) as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise WriteError(path, str(e), stage=stage) from e

    logger.debug(f"Wrote {path}")
    return path


def _to_buffer(img: Image.Image, quality: int, stage) -> bytes:
    buffer = io.BytesIO()
    try:
        img.save(buffer, format="JPEG", quality=quality)
    except (OSError, ValueError) as e:
        raise WriteError("<buffer>", str(e), stage=stage) from e
    return buffer.getvalue()
