"""
Shared validators for input sanitization.

Slug derivation, name checks and image URL validation used by the
catalog services.
"""

import re
from urllib.parse import urlparse
from typing import Optional

# Minimum length of a display name once stripped
MIN_NAME_LENGTH = 2

_WHITESPACE_RUN = re.compile(r"\s+")

# Internal hosts that must never appear in stored image URLs (SSRF prevention)
BLOCKED_HOSTS = [
    "localhost",
    "127.0.0.1",
    "0.0.0.0",
    "10.",
    "192.168.",
    "169.254.",  # Link-local and cloud metadata
    "[::1]",
    "metadata.google",
]

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg"}

BLOCKED_SCHEMES = {"javascript", "data", "file", "ftp", "mailto", "tel"}

# Local paths produced by the upload storage
LOCAL_IMAGE_PREFIX = "/static/"


def slugify(name: str) -> str:
    """
    Derive a slug from a display name.

    Lowercases the name and replaces every run of whitespace with a single
    hyphen. Accents and punctuation are kept: "Pharmacie Koné" becomes
    "pharmacie-koné".
    """
    return _WHITESPACE_RUN.sub("-", name.lower())


def validate_name(name: Optional[str], field: str = "name") -> str:
    """
    Return the stripped name, or raise ValueError if it is too short.
    """
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValueError("Le nom est requis")
    if len(cleaned) < MIN_NAME_LENGTH:
        raise ValueError(f"Le nom doit contenir au moins {MIN_NAME_LENGTH} caractères")
    return cleaned


def validate_quantity(quantity: int, min_val: int = 1, max_val: int = 999) -> int:
    """
    Validate a cart or order quantity.

    Raises:
        ValueError: If quantity is out of range
    """
    if quantity < min_val:
        raise ValueError(f"La quantité doit être au moins {min_val}")
    if quantity > max_val:
        raise ValueError(f"La quantité ne peut pas dépasser {max_val}")
    return quantity


def validate_image_url(url: Optional[str]) -> Optional[str]:
    """
    Validate and sanitize an image URL.

    Accepts http(s) URLs that do not point at internal hosts, and local
    ``/static/...`` paths returned by the upload storage.

    Returns:
        The validated URL or None if empty

    Raises:
        ValueError: If the URL is invalid or potentially malicious
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return None

    if len(url) > 2048:
        raise ValueError("URL trop longue (2048 caractères maximum)")

    if url.startswith(LOCAL_IMAGE_PREFIX):
        if ".." in url:
            raise ValueError("Chemin d'image invalide")
        return url

    parsed = urlparse(url)

    scheme = parsed.scheme.lower()
    if scheme in BLOCKED_SCHEMES:
        raise ValueError(f"Schéma d'URL non autorisé : {scheme}")

    if scheme not in ("http", "https"):
        raise ValueError("Seules les URL HTTP/HTTPS sont autorisées")

    host = parsed.netloc.lower()
    if not host:
        raise ValueError("URL sans hôte valide")

    for blocked in BLOCKED_HOSTS:
        if host.startswith(blocked) or blocked in host:
            raise ValueError("URL interne non autorisée")

    return url


def image_extension(filename: str) -> str:
    """
    Return the lowercase extension of an uploaded image file name.

    Raises:
        ValueError: If the extension is not an accepted image type
    """
    match = re.search(r"(\.[A-Za-z0-9]+)$", filename or "")
    extension = match.group(1).lower() if match else ""
    if extension not in ALLOWED_IMAGE_EXTENSIONS:
        allowed = ", ".join(sorted(ALLOWED_IMAGE_EXTENSIONS))
        raise ValueError(f"Type de fichier non autorisé (attendu : {allowed})")
    return extension
