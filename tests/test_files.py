from pathlib import Path

import pytest
from PIL import Image

from pixellock.crypto import DecryptionError, decrypt, generate_random_key
from pixellock.files import (
    decrypt_directory,
    decrypt_file,
    encrypt_directory,
    encrypt_file,
)
from pixellock.imaging import ImageError, bytes_to_image

RED = (255, 0, 0, 255)


def _make_png(path: Path, color=RED, size=(10, 10)) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


def _pixels(img: Image.Image) -> list:
    return list(img.convert("RGBA").getdata())


@pytest.fixture
def key() -> bytes:
    return generate_random_key()


def test_encrypt_then_decrypt_file_round_trip(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    encrypted = encrypt_file(source, tmp_path / "out" / "in.png.enc", key, False)
    assert encrypted == tmp_path / "out" / "in.png.enc"
    restored = decrypt_file(encrypted, tmp_path / "back" / "in.png", key, False, "png")
    assert restored == tmp_path / "back" / "in.png"
    with Image.open(restored) as img:
        assert img.size == (10, 10)
        assert _pixels(img) == [RED] * 100


def test_encrypted_file_holds_png_payload(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    encrypted = encrypt_file(source, tmp_path / "in.png.enc", key, False)
    img = bytes_to_image(decrypt(key, encrypted.read_bytes()))
    assert _pixels(img) == [RED] * 100


def test_encrypt_file_skips_existing_output(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    output = tmp_path / "in.png.enc"
    output.write_bytes(b"existing")
    assert encrypt_file(source, output, key, False) is None
    assert output.read_bytes() == b"existing"


def test_encrypt_file_overwrites_when_asked(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    output = tmp_path / "in.png.enc"
    output.write_bytes(b"existing")
    assert encrypt_file(source, output, key, True) == output
    img = bytes_to_image(decrypt(key, output.read_bytes()))
    assert _pixels(img) == [RED] * 100


def test_encrypt_file_rejects_non_image(tmp_path, key):
    source = tmp_path / "notes.txt"
    source.write_text("not an image")
    with pytest.raises(ImageError):
        encrypt_file(source, tmp_path / "notes.enc", key, False)
    assert not (tmp_path / "notes.enc").exists()


def test_decrypt_file_with_wrong_key_fails(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    encrypted = encrypt_file(source, tmp_path / "in.png.enc", key, False)
    with pytest.raises(DecryptionError):
        decrypt_file(encrypted, tmp_path / "out.png", generate_random_key(), False, "png")
    assert not (tmp_path / "out.png").exists()


def test_decrypt_file_skips_existing_output(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    encrypted = encrypt_file(source, tmp_path / "in.png.enc", key, False)
    output = tmp_path / "out.png"
    output.write_bytes(b"existing")
    assert decrypt_file(encrypted, output, key, False, "png") is None
    assert output.read_bytes() == b"existing"


def test_decrypt_file_as_jpeg(tmp_path, key):
    source = _make_png(tmp_path / "in.png")
    encrypted = encrypt_file(source, tmp_path / "in.png.enc", key, False)
    output = decrypt_file(encrypted, tmp_path / "out.jpg", key, False, "jpg")
    with Image.open(output) as img:
        assert img.format == "JPEG"
        assert img.size == (10, 10)


def test_encrypt_directory_non_recursive_skips_subdirectories(tmp_path, key):
    src = tmp_path / "src"
    _make_png(src / "a.png")
    _make_png(src / "sub" / "b.png")
    (src / "notes.txt").write_text("not an image")
    out = tmp_path / "out"
    written = encrypt_directory(src, out, key, False, False)
    assert written == [out / "a.png.enc"]
    assert not (out / "sub").exists()
    assert not (out / "notes.txt.enc").exists()


def test_encrypt_directory_recursive(tmp_path, key):
    src = tmp_path / "src"
    _make_png(src / "a.png")
    _make_png(src / "sub" / "b.png")
    out = tmp_path / "out"
    written = encrypt_directory(src, out, key, True, False)
    assert sorted(written) == [out / "a.png.enc", out / "sub" / "b.png.enc"]
    assert all(path.is_file() for path in written)


def test_directory_round_trip(tmp_path, key):
    src = tmp_path / "src"
    _make_png(src / "a.png", color=RED)
    _make_png(src / "sub" / "b.png", color=(0, 0, 255, 255))
    enc = tmp_path / "enc"
    dec = tmp_path / "dec"
    encrypt_directory(src, enc, key, True, False)
    written = decrypt_directory(enc, dec, key, True, ".enc", False, "png")
    assert sorted(written) == [dec / "a.png", dec / "sub" / "b.png"]
    for name in ("a.png", "sub/b.png"):
        with Image.open(src / name) as original, Image.open(dec / name) as restored:
            assert _pixels(restored) == _pixels(original)


def test_decrypt_directory_uses_custom_extension(tmp_path, key):
    _make_png(tmp_path / "x.png")
    enc = tmp_path / "enc"
    encrypt_file(tmp_path / "x.png", enc / "x.png.xyz", key, False)
    encrypt_file(tmp_path / "x.png", enc / "y.png.enc", key, False)
    dec = tmp_path / "dec"
    written = decrypt_directory(enc, dec, key, False, ".xyz", False, "png")
    assert written == [dec / "x.png"]
    assert not (dec / "y.png").exists()


def test_decrypt_directory_continues_past_bad_file(tmp_path, key):
    _make_png(tmp_path / "x.png")
    enc = tmp_path / "enc"
    encrypt_file(tmp_path / "x.png", enc / "good.png.enc", key, False)
    (enc / "bad.png.enc").write_bytes(b"garbage that is not ciphertext")
    dec = tmp_path / "dec"
    written = decrypt_directory(enc, dec, key, False, ".enc", False, "png")
    assert written == [dec / "good.png"]
    assert not (dec / "bad.png").exists()


def test_encrypt_directory_missing_input(tmp_path, key):
    with pytest.raises(FileNotFoundError):
        encrypt_directory(tmp_path / "missing", tmp_path / "out", key, False, False)


def test_decrypt_directory_missing_input(tmp_path, key):
    with pytest.raises(FileNotFoundError):
        decrypt_directory(tmp_path / "missing", tmp_path / "out", key, False, ".enc", False, "png")