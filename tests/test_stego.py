from pathlib import Path

import pytest
from PIL import Image

from pixellock.imaging import ImageError
from pixellock.stego import (
    STEGO_MESSAGE_LIMIT,
    MessageTooLongError,
    embed_message,
    extract_message,
    hide_message,
    reveal_message,
)

# Characters whose low four bits are zero survive the encoding unchanged.
NIBBLE_SAFE = "@P p`0"


def _red_image(width=10, height=10):
    return Image.new("RGBA", (width, height), (255, 0, 0, 255))


def _write_png(path: Path, img: Image.Image) -> Path:
    img.save(path, format="PNG")
    return path


def test_round_trip_in_memory():
    stego = embed_message(_red_image(), NIBBLE_SAFE)
    assert extract_message(stego) == NIBBLE_SAFE


def test_low_bits_of_each_byte_are_dropped():
    stego = embed_message(_red_image(), "A")
    assert extract_message(stego) == "@"


def test_empty_message_reveals_empty_string():
    stego = embed_message(_red_image(), "")
    assert extract_message(stego) == ""


def test_only_least_significant_bits_change():
    original = _red_image()
    stego = embed_message(original, NIBBLE_SAFE)
    assert stego.size == original.size
    assert stego.mode == "RGBA"
    for before, after in zip(original.tobytes(), stego.tobytes()):
        assert before & 0xFE == after & 0xFE


def test_pixels_past_the_message_are_untouched():
    original = _red_image()
    stego = embed_message(original, "pp")
    used = (len("pp") + 1) * 4
    assert stego.tobytes()[used:] == original.tobytes()[used:]


def test_embed_does_not_modify_input():
    original = _red_image()
    snapshot = original.tobytes()
    embed_message(original, NIBBLE_SAFE)
    assert original.tobytes() == snapshot


def test_message_is_cut_to_pixel_count():
    small = _red_image(2, 2)
    stego = embed_message(small, "@@@@@@@@")
    assert extract_message(stego) == "@@@@"


def test_embed_accepts_rgb_input():
    rgb = Image.new("RGB", (5, 5), (10, 20, 30))
    stego = embed_message(rgb, NIBBLE_SAFE)
    assert stego.mode == "RGBA"
    assert extract_message(stego) == NIBBLE_SAFE


def test_message_at_limit_is_accepted():
    message = "@" * STEGO_MESSAGE_LIMIT
    stego = embed_message(_red_image(40, 30), message)
    assert extract_message(stego) == message


def test_message_over_limit_raises():
    with pytest.raises(MessageTooLongError):
        embed_message(_red_image(), "@" * (STEGO_MESSAGE_LIMIT + 1))


def test_hide_and_reveal_through_files(tmp_path):
    source = _write_png(tmp_path / "in.png", _red_image())
    output = tmp_path / "nested" / "dir" / "out.png"
    result = hide_message(source, output, NIBBLE_SAFE, "png")
    assert Path(result) == output
    assert output.is_file()
    assert reveal_message(output) == NIBBLE_SAFE


def test_hide_writes_jpeg_when_asked(tmp_path):
    source = _write_png(tmp_path / "in.png", _red_image())
    output = tmp_path / "out.jpg"
    hide_message(source, output, NIBBLE_SAFE, "jpeg")
    with Image.open(output) as img:
        assert img.format == "JPEG"


def test_hide_rejects_long_message_before_writing(tmp_path):
    source = _write_png(tmp_path / "in.png", _red_image())
    output = tmp_path / "out.png"
    with pytest.raises(MessageTooLongError):
        hide_message(source, output, "@" * (STEGO_MESSAGE_LIMIT + 1), "png")
    assert not output.exists()


def test_hide_missing_input_raises(tmp_path):
    with pytest.raises(ImageError):
        hide_message(tmp_path / "missing.png", tmp_path / "out.png", "@", "png")


def test_reveal_non_image_raises(tmp_path):
    bogus = tmp_path / "note.txt"
    bogus.write_text("not an image")
    with pytest.raises(ImageError):
        reveal_message(bogus)