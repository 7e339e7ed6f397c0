"""Encryption and decryption of image files and directories of images."""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Tuple, Union

from pixellock.crypto import decrypt, encrypt
from pixellock.imaging import (
    ImageError,
    bytes_to_image,
    image_to_bytes,
    is_image_file,
    load_image,
    save_image,
)

PathLike = Union[str, Path]

ENCRYPTED_EXTENSION = ".enc"

logger = logging.getLogger(__name__)

_TASK_ERRORS = (OSError, ValueError, ImageError)


def _iter_files(root: Path, recursive: bool) -> Iterator[Path]:
    """Yield files under *root* in lexical order, descending only if *recursive*."""
    with os.scandir(root) as entries:
        ordered = sorted(entries, key=lambda entry: entry.name)
    for entry in ordered:
        path = root / entry.name
        if entry.is_dir(follow_symlinks=False):
            if recursive:
                yield from _iter_files(path, recursive)
        else:
            yield path


def _already_exists(output: Path) -> bool:
    if output.exists():
        logger.warning(
            "Output file %s already exists.  Overwrite with --overwrite flag.", output
        )
        return True
    return False


def _run_all(
    tasks: Iterable[Tuple[Path, Path]],
    action: Callable[[Path, Path], Optional[Path]],
    verb: str,
) -> list[Path]:
    """Run *action* on every (source, destination) pair concurrently.

    Failures of single files are logged and skipped; an error while listing
    the directory is raised once the started work has finished.
    """
    with ThreadPoolExecutor() as pool:
        futures = [(src, pool.submit(action, src, dst)) for src, dst in tasks]
    written: list[Path] = []
    for src, future in futures:
        try:
            result = future.result()
        except _TASK_ERRORS as exc:
            logger.error("Error %s %s: %s", verb, src, exc)
            continue
        if result is not None:
            written.append(result)
    return written


def encrypt_file(
    input_filename: PathLike,
    output_filename: PathLike,
    key: bytes,
    overwrite: bool = False,
) -> Optional[Path]:
    """Encrypt one image into *output_filename*.

    Returns the output path, or None when the output already exists and
    *overwrite* is false.
    """
    output = Path(output_filename)
    if not overwrite and _already_exists(output):
        return None
    img = load_image(input_filename)
    ciphertext = encrypt(key, image_to_bytes(img))
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(ciphertext)
    logger.info("Image encrypted and saved to: %s", output)
    return output


def encrypt_directory(
    input_dir: PathLike,
    output_dir: PathLike,
    key: bytes,
    recursive: bool = False,
    overwrite: bool = False,
) -> list[Path]:
    """Encrypt every image in *input_dir*; return the paths written."""
    root = Path(input_dir)
    target = Path(output_dir)

    def tasks() -> Iterator[Tuple[Path, Path]]:
        for path in _iter_files(root, recursive):
            if is_image_file(path):
                relative = path.relative_to(root)
                yield path, target / f"{relative}{ENCRYPTED_EXTENSION}"

    return _run_all(
        tasks(),
        lambda src, dst: encrypt_file(src, dst, key, overwrite),
        "encrypting",
    )


def decrypt_file(
    input_filename: PathLike,
    output_filename: PathLike,
    key: bytes,
    overwrite: bool = False,
    output_format: str = "png",
) -> Optional[Path]:
    """Decrypt one encrypted image into *output_filename*.

    Returns the output path, or None when the output already exists and
    *overwrite* is false.
    """
    output = Path(output_filename)
    if not overwrite and _already_exists(output):
        return None
    ciphertext = Path(input_filename).read_bytes()
    img = bytes_to_image(decrypt(key, ciphertext))
    output.parent.mkdir(parents=True, exist_ok=True)
    save_image(output, img, output_format)
    logger.info("Image decrypted and saved to: %s", output)
    return output


def decrypt_directory(
    input_dir: PathLike,
    output_dir: PathLike,
    key: bytes,
    recursive: bool = False,
    encrypted_ext: str = ENCRYPTED_EXTENSION,
    overwrite: bool = False,
    output_format: str = "png",
) -> list[Path]:
    """Decrypt every file ending in *encrypted_ext*; return the paths written."""
    root = Path(input_dir)
    target = Path(output_dir)

    def tasks() -> Iterator[Tuple[Path, Path]]:
        for path in _iter_files(root, recursive):
            if path.name.endswith(encrypted_ext):
                relative = str(path.relative_to(root))
                yield path, target / relative.removesuffix(encrypted_ext)

    return _run_all(
        tasks(),
        lambda src, dst: decrypt_file(src, dst, key, overwrite, output_format),
        "decrypting",
    )