"""Least-significant-bit steganography on RGBA images.

Each byte of the message occupies one pixel: its four high bits go into
the lowest bit of the red, green, blue and alpha channels, in that order.
The low four bits of each byte are not stored. The message ends at a zero
byte, and a message longer than the image has pixels is cut short.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union

from PIL import Image

from pixellock.imaging import ImageError, load_image, save_image

PathLike = Union[str, Path]

STEGO_MESSAGE_LIMIT = 1000
_TERMINATOR = b"\x00"
_CHANNELS = 4


class MessageTooLongError(ValueError):
    """Raised when a message exceeds the steganography length limit."""


def _check_length(data: bytes) -> None:
    if len(data) > STEGO_MESSAGE_LIMIT:
        raise MessageTooLongError(
            f"message too long. Max message length is {STEGO_MESSAGE_LIMIT} characters"
        )


def embed_message(img: Image.Image, message: str) -> Image.Image:
    """Return an RGBA copy of *img* with *message* hidden in its pixels."""
    data = message.encode("utf-8")
    _check_length(data)
    rgba = img.convert("RGBA")
    width, height = rgba.size
    payload = (data + _TERMINATOR)[: width * height]

    raw = bytearray(rgba.tobytes())
    for index, byte in enumerate(payload):
        base = index * _CHANNELS
        for channel, shift in enumerate((7, 6, 5, 4)):
            position = base + channel
            raw[position] = (raw[position] & 0xFE) | ((byte >> shift) & 1)
    return Image.frombytes("RGBA", rgba.size, bytes(raw))


def extract_message(img: Image.Image) -> str:
    """Read the message hidden in *img*, up to the first zero byte."""
    raw = img.convert("RGBA").tobytes()
    data = bytes(
        ((r & 1) << 7) | ((g & 1) << 6) | ((b & 1) << 5) | ((a & 1) << 4)
        for r, g, b, a in zip(raw[0::4], raw[1::4], raw[2::4], raw[3::4])
    )
    return data.split(_TERMINATOR, 1)[0].decode("latin-1")


def hide_message(
    input_filename: PathLike,
    output_filename: PathLike,
    message: str,
    output_format: str = "png",
) -> Path:
    """Hide *message* in the image at *input_filename* and save the result."""
    data = message.encode("utf-8")
    _check_length(data)
    stego = embed_message(load_image(input_filename), message)
    output = Path(output_filename)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImageError(f"failed to create output directory: {exc}") from exc
    save_image(output, stego, output_format)
    return output


def reveal_message(input_filename: PathLike) -> str:
    """Return the message hidden in the image at *input_filename*."""
    return extract_message(load_image(input_filename))