[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixellock"
version = "1.0.0"
description = "Encrypt and decrypt images with AES-256 GCM and hide messages in them with LSB steganography"
requires-python = ">=3.10"
keywords = ["image", "encryption", "aes", "gcm", "steganography", "lsb"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "cryptography",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
pixellock = "pixellock.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pixellock"]

[tool.pytest.ini_options]
addopts = "-ra"
