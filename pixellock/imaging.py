"""Loading, saving and in-memory PNG conversion of images."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from PIL import Image

PathLike = Union[str, Path]

JPEG_QUALITY = 90
SUPPORTED_FORMATS = frozenset({"jpeg", "jpg", "png", "gif", "bmp", "tiff"})

_PNG_MODES = frozenset({"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"})
_JPEG_MODES = frozenset({"1", "L", "RGB", "CMYK"})
_DECODE_ERRORS = (OSError, ValueError, SyntaxError, EOFError)


class ImageError(Exception):
    """Raised when an image cannot be read, decoded or written."""


def _has_alpha(img: Image.Image) -> bool:
    return "A" in img.getbands() or "transparency" in img.info


def _png_compatible(img: Image.Image) -> Image.Image:
    if img.mode in _PNG_MODES:
        return img
    return img.convert("RGBA" if _has_alpha(img) else "RGB")


def _jpeg_compatible(img: Image.Image) -> Image.Image:
    if img.mode in _JPEG_MODES:
        return img
    if img.mode in ("LA", "I", "I;16"):
        return img.convert("L")
    return img.convert("RGB")


def _decode(data: bytes, formats: list[str] | None = None) -> Image.Image:
    img = Image.open(io.BytesIO(data), formats=formats)
    img.load()
    return img


def load_image(filename: PathLike) -> Image.Image:
    """Read and decode the image stored in *filename*."""
    try:
        data = Path(filename).read_bytes()
    except OSError as exc:
        raise ImageError(f"failed to open image: {exc}") from exc
    try:
        return _decode(data)
    except _DECODE_ERRORS as exc:
        raise ImageError(f"failed to decode image: {exc}") from exc


def save_image(filename: PathLike, img: Image.Image, output_format: str = "png") -> None:
    """Write *img* to *filename* as JPEG ("jpg"/"jpeg") or, otherwise, as PNG."""
    fmt = output_format.lower()
    buffer = io.BytesIO()
    if fmt in ("jpg", "jpeg"):
        try:
            _jpeg_compatible(img).save(buffer, format="JPEG", quality=JPEG_QUALITY)
        except (OSError, ValueError) as exc:
            raise ImageError(f"failed to encode image to JPEG: {exc}") from exc
    else:
        try:
            _png_compatible(img).save(buffer, format="PNG")
        except (OSError, ValueError) as exc:
            raise ImageError(f"failed to encode image to PNG: {exc}") from exc
    try:
        Path(filename).write_bytes(buffer.getvalue())
    except OSError as exc:
        raise ImageError(f"failed to create image file: {exc}") from exc


def image_to_bytes(img: Image.Image) -> bytes:
    """Encode *img* as PNG and return the encoded bytes."""
    buffer = io.BytesIO()
    try:
        _png_compatible(img).save(buffer, format="PNG")
    except (OSError, ValueError) as exc:
        raise ImageError(f"failed to encode image to bytes: {exc}") from exc
    return buffer.getvalue()


def bytes_to_image(data: bytes) -> Image.Image:
    """Decode PNG-encoded *data* into an image."""
    try:
        return _decode(bytes(data), formats=["PNG"])
    except _DECODE_ERRORS as exc:
        raise ImageError(f"failed to decode bytes to image: {exc}") from exc


def is_image_file(filename: PathLike) -> bool:
    """Tell whether *filename* holds an image in one of the supported formats."""
    try:
        with Image.open(filename) as img:
            fmt = (img.format or "").lower()
    except _DECODE_ERRORS:
        return False
    return fmt in SUPPORTED_FORMATS