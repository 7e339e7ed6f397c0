"""Image encryption with AES-256 GCM and LSB steganography."""

__version__ = "1.0.0"