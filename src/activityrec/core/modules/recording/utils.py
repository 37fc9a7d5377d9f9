"""Utility functions for recording uploads."""

import re
import secrets
import time
from pathlib import Path

STORAGE_KEY_PREFIX = "recording"

# Fallback extensions for blobs uploaded without one
MIME_EXTENSIONS = {
    "video/webm": ".webm",
    "video/mp4": ".mp4",
    "audio/webm": ".webm",
    "audio/wav": ".wav",
    "audio/ogg": ".ogg",
    "audio/mpeg": ".mp3",
}

EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


def normalize_mime_type(mime_type: str | None) -> str:
    """Strip parameters and case from a content type.

    Browsers send e.g. "video/webm;codecs=vp8,opus" for MediaRecorder output.
    """
    if not mime_type:
        return ""
    return mime_type.split(";", 1)[0].strip().lower()


def get_extension(filename: str | None, mime_type: str) -> str:
    """Pick the storage extension: sanitized original one, else derived from mime type."""
    if filename:
        suffix = Path(sanitize_filename(filename)).suffix.lower()
        if EXTENSION_RE.fullmatch(suffix):
            return suffix
    return MIME_EXTENSIONS.get(mime_type, "")


def generate_storage_key(extension: str) -> str:
    """Generate a collision-resistant storage key from current time plus a random component."""
    millis = time.time_ns() // 1_000_000
    return f"{STORAGE_KEY_PREFIX}-{millis}-{secrets.randbelow(1_000_000_000)}{extension}"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe filesystem use on Unix-like systems.

    Removes dangerous characters, prevents path traversal, and handles edge cases
    while preserving readability and file extensions.

    Args:
        filename: Original filename from user

    Returns:
        Sanitized filename
    """
    # Remove path components to prevent traversal attacks
    filename = Path(filename.replace("\\", "/")).name

    # Remove leading dots to prevent hidden files
    filename = filename.lstrip(".")

    # Allow only word characters, spaces, dots, and hyphens
    sanitized = re.sub(r"[^\w\s.-]", "_", filename)
    sanitized = re.sub(r"_+", "_", sanitized)
    sanitized = re.sub(r"\s+", " ", sanitized)

    # Limit length to 100 characters while preserving extension
    if len(sanitized) > 100:
        parts = sanitized.rsplit(".", 1)
        if len(parts) == 2:
            name, ext = parts
            max_name_len = 96 - len(ext)
            sanitized = f"{name[:max_name_len]}.{ext}" if max_name_len > 0 else f"file.{ext}"
        else:
            sanitized = sanitized[:100]

    if not sanitized or not re.sub(r"[\s._-]", "", sanitized):
        sanitized = "unnamed_file"

    return sanitized
