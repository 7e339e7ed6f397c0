# pixellock

Encrypt and decrypt images with AES-256 GCM, and hide short text in images
using least-significant-bit steganography.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The `pixellock` command prints a banner and then runs one of four
subcommands. Without a subcommand it prints its help.

Global options:

- `-v/--version`: print the version.
- `--verbose`: log in more detail, with file and line numbers.
- `-a/--about`: print the version, the Python version and the platform, then exit.

If a subcommand fails because of a bad key, a file that cannot be read or
written, or an image that cannot be decoded, the error is printed to standard
error as `pixellock: <message>` and the exit status is 1.

### Generate a key

```
pixellock keygen
pixellock keygen --output my.key
```

The key is 32 random bytes, printed as standard base64. With `--output`, it is
also written to that file; a file created this way is readable and writable
by its owner only.

### Encrypt

```
pixellock encrypt -i photo.png -o photo.png.enc -k <base64 key>
pixellock encrypt -i photos/ -o encrypted/ -r
```

- `-i/--input` (required): an image file or a directory of images.
- `-o/--output`: output file or directory (default `encrypted_output`).
- `-k/--key`: base64 key that decodes to 32 bytes. Without it, the key is
  taken from the `IMAGE_ENCRYPTION_KEY` environment variable; if that is
  unset too, a new key is generated and printed, with a warning to keep it
  unless `--print-key` is given.
- `--keyfile`: file in which to save a newly generated key.
- `--print-key`: also print a key that was supplied.
- `-r/--recursive`: include subdirectories.
- `--overwrite`: replace output files that already exist. Without it, an
  existing output is left alone and a warning is logged.

Each image is decoded, re-encoded as PNG and encrypted; the output file holds
the 12-byte nonce followed by the ciphertext and tag. From a directory, every
file that opens as a JPEG, PNG, GIF, BMP or TIFF image is written as
`<relative path>.enc` under the output directory. Files are processed
concurrently; a file that fails is logged and skipped.

### Decrypt

```
pixellock decrypt -i photo.png.enc -o photo.png -k <base64 key>
pixellock decrypt -i encrypted/ -o restored/ -k <base64 key> -r --output-format jpg
```

- `-i/--input` (required): an encrypted file or a directory of them.
- `-o/--output`: output file or directory (default `decrypted_output`).
- `-k/--key` (required): the base64 key used for encryption.
- `--encrypted-ext`: extension of encrypted files in a directory (default
  `.enc`). Only files ending in it are decrypted, and it is removed from
  their names.
- `--output-format`: `jpg` or `jpeg` writes JPEG at quality 90; any other
  value writes PNG (the default is `png`).
- `-r/--recursive` and `--overwrite` behave as for `encrypt`.

### Steganography

```
pixellock stego hide -i cover.png -o secret.png -m "meet at noon"
pixellock stego reveal -i secret.png
```

`hide` takes `-i/--input`, `-o/--output` and `-m/--message` (all required)
and `--output-format` (`png` by default, or `jpg`/`jpeg`). `reveal` takes
`-i/--input` and prints the hidden text.

The message, as UTF-8, may be at most 1000 bytes. Each byte goes into one
pixel, followed by a zero byte, and the message is cut short if the image
has too few pixels.

Limits of this scheme: only the **high four bits** of each byte are stored,
in the lowest bit of the red, green, blue and alpha channels. The low four
bits are lost, so the revealed text matches the original only for characters
whose low four bits are zero (such as space, `0`, `@`, `P`, `` ` `` and `p`).
`reveal` reads bytes up to the first zero byte and shows them as Latin-1
text. JPEG output is lossy and destroys the hidden bits; save stego images as
PNG.

## Library use

```python
from pixellock.crypto import generate_random_key, encrypt, decrypt, encode_key, decode_key
from pixellock.imaging import load_image, save_image, image_to_bytes, bytes_to_image, is_image_file
from pixellock.stego import embed_message, extract_message

key = generate_random_key()
sealed = encrypt(key, b"data")
assert decrypt(key, sealed) == b"data"
assert decode_key(encode_key(key)) == key

img = load_image("cover.png")
stego = embed_message(img, "pP@ ")
assert extract_message(stego) == "pP@ "
```

Other modules:

- `pixellock.stego`: `hide_message` and `reveal_message` work on files.
- `pixellock.files`: `encrypt_file`, `decrypt_file`, `encrypt_directory` and
  `decrypt_directory`; each returns the path or paths written, and the file
  functions return `None` when an existing output is left alone.
- `pixellock.commands`: `resolve_encryption_key`, `run_encrypt`,
  `run_decrypt`, `run_keygen`, `run_hide` and `run_reveal`, the actions
  behind the subcommands.
- `pixellock.cli`: `build_parser` and `main`.

Errors are raised as exceptions:

- `InvalidKeyError` (a `ValueError`): a key that is not valid base64 or not
  32 bytes, or a raw key of a length AES does not accept.
- `DecryptionError` (a `ValueError`): ciphertext that is too short or fails
  authentication.
- `ImageError`: a file that cannot be read, decoded or written as an image.
- `MessageTooLongError` (a `ValueError`): a message over 1000 bytes.