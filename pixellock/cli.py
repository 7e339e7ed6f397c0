"""Command-line interface for encrypting images and hiding messages in them."""

from __future__ import annotations

import argparse
import logging
import platform
import sys
from typing import Optional, Sequence

from pixellock.commands import (
    run_decrypt,
    run_encrypt,
    run_hide,
    run_keygen,
    run_reveal,
)
from pixellock.files import ENCRYPTED_EXTENSION
from pixellock.imaging import ImageError

VERSION = "v1.0.0"

ASCII_ART = r"""
       _          _ _            _    
 _ __ (_)_  _____| | | ___   ___| | __
| '_ \| \ \/ / _ \ | |/ _ \ / __| |/ /
| |_) | |>  <  __/ | | (_) | (__|   < 
| .__/|_/_/\_\___|_|_|\___/ \___|_|\_\
|_|   
 Image Encryption Tool
"""


def _encrypt(args: argparse.Namespace) -> None:
    run_encrypt(
        args.input,
        args.output,
        args.key,
        args.keyfile,
        args.print_key,
        args.recursive,
        args.overwrite,
    )


def _decrypt(args: argparse.Namespace) -> None:
    run_decrypt(
        args.input,
        args.output,
        args.key,
        args.recursive,
        args.encrypted_ext,
        args.overwrite,
        args.output_format,
    )


def _keygen(args: argparse.Namespace) -> None:
    run_keygen(args.output)


def _add_encrypt(subparsers) -> None:
    parser = subparsers.add_parser(
        "encrypt", aliases=["e"], help="Encrypt an image or a directory of images"
    )
    parser.add_argument("-i", "--input", required=True,
                        help="Input image file or directory")
    parser.add_argument("-o", "--output", default="encrypted_output",
                        help="Output encrypted image file or directory")
    parser.add_argument("-k", "--key", default="",
                        help="Encryption key (base64 encoded); generated if omitted")
    parser.add_argument("--keyfile", default="",
                        help="File to save a generated key to")
    parser.add_argument("--print-key", action="store_true",
                        help="Print the key, even when one is provided")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Recursively search subdirectories for images to encrypt")
    parser.add_argument("--overwrite", action="store_true",
                        help="Overwrite existing output files")
    parser.set_defaults(command="encrypt", handler=_encrypt)


def _add_decrypt(subparsers) -> None:
    parser = subparsers.add_parser(
        "decrypt", aliases=["d"], help="Decrypt an image or a directory of images"
    )
    parser.add_argument("-i", "--input", required=True,
                        help="Input encrypted image file or directory")
    parser.add_argument("-o", "--output", default="decrypted_output",
                        help="Output decrypted image file or directory")
    parser.add_argument("-k", "--key", required=True,
                        help="Encryption key (base64 encoded)")
    parser.add_argument("-r", "--recursive", action="store_true",
                        help="Recursively search subdirectories for encrypted images")
    parser.add_argument("--encrypted-ext", default=ENCRYPTED_EXTENSION,
                        help="The extension of encrypted files (e.g. .enc, .xyz)")
    parser.add_argument("--overwrite", action="store_true",
                        help="Overwrite existing output files")
    parser.add_argument("--output-format", default="png",
                        help="Output image format (png, jpg, jpeg)")
    parser.set_defaults(command="decrypt", handler=_decrypt)


def _add_keygen(subparsers) -> None:
    parser = subparsers.add_parser("keygen", help="Generate a new encryption key")
    parser.add_argument("--output", default="",
                        help="File to save the generated key to")
    parser.set_defaults(command="keygen", handler=_keygen)


def _add_stego(subparsers) -> None:
    parser = subparsers.add_parser(
        "stego", help="Hide or reveal a message within an image using steganography"
    )
    actions = parser.add_subparsers(dest="stego_action", metavar="ACTION")

    hide = actions.add_parser("hide", help="Hide a message within an image")
    hide.add_argument("-i", "--input", required=True, help="Input image file")
    hide.add_argument("-o", "--output", required=True, help="Output stego image file")
    hide.add_argument("-m", "--message", required=True, help="Message to hide")
    hide.add_argument("--output-format", default="png",
                      help="Output image format (png, jpg, jpeg)")

    reveal = actions.add_parser("reveal", help="Reveal a hidden message from an image")
    reveal.add_argument("-i", "--input", required=True, help="Input stego image file")

    def handle(args: argparse.Namespace) -> None:
        if args.stego_action == "hide":
            run_hide(args.input, args.output, args.message, args.output_format)
        elif args.stego_action == "reveal":
            run_reveal(args.input)
        else:
            parser.print_help()

    parser.set_defaults(command="stego", handler=handle)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all commands."""
    parser = argparse.ArgumentParser(
        prog="pixellock",
        description=(
            "Encrypt, decrypt, and hide messages within images "
            "using AES-256 GCM and steganography"
        ),
    )
    parser.add_argument("-v", "--version", action="version",
                        version=f"pixellock version {VERSION}",
                        help="Print the version")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable verbose logging")
    parser.add_argument("-a", "--about", action="store_true",
                        help="About this tool")
    parser.set_defaults(command=None, handler=None)
    subparsers = parser.add_subparsers(metavar="COMMAND")
    _add_encrypt(subparsers)
    _add_decrypt(subparsers)
    _add_keygen(subparsers)
    _add_stego(subparsers)
    return parser


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(filename)s:%(lineno)d: %(message)s",
        )
        logging.getLogger(__name__).debug("Verbose mode enabled")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(message)s")


def _about_text() -> str:
    """Return the description of the tool and the platform it runs on."""
    lines = [
        "Image Encryption Tool",
        f"Version: {VERSION}",
        f"Python Version: {platform.python_version()}",
        f"Operating System: {sys.platform} {platform.machine()}",
    ]
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    print(ASCII_ART)
    _configure_logging(args.verbose)

    if args.about:
        print(_about_text())
        return 0
    if args.handler is None:
        parser.print_help()
        return 0
    try:
        args.handler(args)
    except (OSError, ValueError, ImageError) as exc:
        print(f"pixellock: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())