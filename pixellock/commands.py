"""Command actions: key handling, encryption, decryption and steganography."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from pixellock.crypto import decode_key, encode_key, generate_random_key
from pixellock.files import (
    ENCRYPTED_EXTENSION,
    decrypt_directory,
    decrypt_file,
    encrypt_directory,
    encrypt_file,
)
from pixellock.stego import hide_message, reveal_message

PathLike = Union[str, Path]

KEY_ENV_VAR = "IMAGE_ENCRYPTION_KEY"
_GENERATED_LABEL = "Generated Key (base64 encoded):"
_KEEP_WARNING = (
    "IMPORTANT: This key is only displayed once. Do NOT lose it! "
    "Save it somewhere secure."
)


def _write_key_file(path: PathLike, text: str) -> None:
    """Write *text* to *path*, creating the file readable by its owner only."""
    fd = os.open(os.fspath(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="ascii") as handle:
        handle.write(text)


def _as_list(result: Optional[Path]) -> list[Path]:
    return [result] if result is not None else []


def resolve_encryption_key(
    key_text: str = "",
    keyfile: PathLike = "",
    print_key: bool = False,
) -> bytes:
    """Return the key to encrypt with.

    The key comes from *key_text*, else from the IMAGE_ENCRYPTION_KEY
    environment variable; failing both, a new key is generated, shown once
    and, when *keyfile* is given, saved there.
    """
    if not key_text:
        key_text = os.environ.get(KEY_ENV_VAR, "")
        if key_text:
            print(f"Using key from environment variable {KEY_ENV_VAR}")

    if key_text:
        key = decode_key(key_text)
        if print_key:
            print("Using provided Key (base64 encoded):", encode_key(key))
        return key

    key = generate_random_key()
    encoded = encode_key(key)
    if keyfile:
        _write_key_file(keyfile, encoded)
        print(_GENERATED_LABEL, encoded)
        print("Key saved to file:", keyfile)
    else:
        print(_GENERATED_LABEL, encoded)
        if not print_key:
            print(_KEEP_WARNING)
    return key


def run_encrypt(
    input_path: PathLike,
    output_path: PathLike = "encrypted_output",
    key_text: str = "",
    keyfile: PathLike = "",
    print_key: bool = False,
    recursive: bool = False,
    overwrite: bool = False,
) -> list[Path]:
    """Encrypt an image or a directory of images; return the files written."""
    key = resolve_encryption_key(key_text, keyfile, print_key)
    source = Path(input_path)
    if source.stat() and source.is_dir():
        written = encrypt_directory(source, output_path, key, recursive, overwrite)
    else:
        written = _as_list(encrypt_file(source, output_path, key, overwrite))
    for path in written:
        print("Image encrypted and saved to:", path)
    return written


def run_decrypt(
    input_path: PathLike,
    output_path: PathLike = "decrypted_output",
    key_text: str = "",
    recursive: bool = False,
    encrypted_ext: str = ENCRYPTED_EXTENSION,
    overwrite: bool = False,
    output_format: str = "png",
) -> list[Path]:
    """Decrypt an encrypted image or a directory of them; return the files written."""
    key = decode_key(key_text)
    source = Path(input_path)
    if source.stat() and source.is_dir():
        written = decrypt_directory(
            source, output_path, key, recursive, encrypted_ext, overwrite, output_format
        )
    else:
        written = _as_list(
            decrypt_file(source, output_path, key, overwrite, output_format)
        )
    for path in written:
        print("Image decrypted and saved to:", path)
    return written


def run_keygen(output: PathLike = "") -> str:
    """Generate a key, optionally save it to *output*, and return its base64 text."""
    encoded = encode_key(generate_random_key())
    if output:
        _write_key_file(output, encoded)
        print(_GENERATED_LABEL, encoded)
        print("Key saved to file:", output)
    else:
        print(_GENERATED_LABEL, encoded)
    return encoded


def run_hide(
    input_path: PathLike,
    output_path: PathLike = "stego_output.png",
    message: str = "",
    output_format: str = "png",
) -> Path:
    """Hide *message* in an image and return the path of the result."""
    written = hide_message(input_path, output_path, message, output_format)
    print("Message hidden and saved to:", written)
    return written


def run_reveal(input_path: PathLike) -> str:
    """Print and return the message hidden in an image."""
    message = reveal_message(input_path)
    print("Hidden Message:", message)
    return message