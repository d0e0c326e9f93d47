"""Compiler constants shared across modules."""

from __future__ import annotations

# Layer naming convention: "<name>:<tag>"
TAG_DELIMITER = ":"
DEFAULT_LOCAL_NAME = "default"
NAMESPACE_SEPARATOR = "."

# Bit packing
HITMAP_COMPRESSION = 4
WALKMAP_SCALE = 8

# Content hash width in bytes (rendered as hex)
CONTENT_HASH_SIZE = 8

IMAGE_EXTENSION = ".png"
DOCUMENT_EXTENSIONS = (".psd", ".psb")
