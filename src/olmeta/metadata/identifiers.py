# ABOUTME: Canonicalization of ISBNs, Open Library keys, slugs, and relation keys.
# ABOUTME: Pure string functions; every one returns None (or a sentinel) instead of raising.

import re

_UNKNOWN = "unknown"

_NON_DIGIT_RE = re.compile(r"[^0-9]")
_ISBN_QUERY_STRIP_RE = re.compile(r"[\s-]")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_RELATION_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")
_YEAR_RE = re.compile(r"(?=([0-9]{4}))")

_MIN_YEAR = 1000
_MAX_YEAR = 2999


def normalize_catalog_id(value: str, kind: str) -> str | None:
    """Reduce an Open Library key to its bare id.

    Accepts bare ids ("OL45804W"), paths ("/works/OL45804W") and
    namespaced fragments ("works/OL45804W"). ``kind`` is the namespace
    ("books" or "works") stripped when present.
    """
    trimmed = value.strip().strip("/")
    if not trimmed:
        return None

    if "/" not in trimmed:
        return trimmed

    prefix = f"{kind}/"
    if trimmed.startswith(prefix):
        candidate = trimmed[len(prefix) :]
    else:
        candidate = trimmed.rsplit("/", 1)[-1]

    candidate = candidate.strip("/")
    return candidate or None


def normalize_isbn13(value: str) -> str | None:
    """Strip every non-digit and return the digits if exactly 13 remain."""
    digits = _NON_DIGIT_RE.sub("", value)
    if len(digits) == 13:
        return digits
    return None


def normalize_exact_isbn_query(value: str) -> str | None:
    """Recognize a free-text query that is nothing but an ISBN.

    Only hyphens and whitespace are removed, so a title that merely
    contains an ISBN ("The Hobbit 9780140328721") is rejected. ISBN-10
    check characters are upper-cased.
    """
    cleaned = _ISBN_QUERY_STRIP_RE.sub("", value)
    if not cleaned.isascii():
        return None

    if len(cleaned) == 13 and cleaned.isdigit():
        return cleaned

    if len(cleaned) == 10 and cleaned[:9].isdigit():
        check = cleaned[9]
        if check.isdigit() or check in "xX":
            return cleaned[:9] + check.upper()

    return None


def first_isbn13(values: list[str]) -> str | None:
    """Return the first value that normalizes to an ISBN-13."""
    for value in values:
        if not isinstance(value, str):
            continue
        isbn = normalize_isbn13(value)
        if isbn:
            return isbn
    return None


def derive_slug(value: str) -> str:
    """Lower-case ASCII slug with runs of other characters collapsed to "-".

    >>> derive_slug("J.R.R. Tolkien")
    'j-r-r-tolkien'
    """
    lowered = "".join(c.lower() if c.isascii() else " " for c in value)
    slug = _NON_ALNUM_RE.sub("-", lowered).strip("-")
    return slug or _UNKNOWN


def derive_relation_key(value: str) -> str:
    """Stable key for a related entity (author key, subject name).

    Keys that are already path-like ("/authors/OL26320A") keep their
    final segment, lower-cased; anything else is slugified.
    """
    trimmed = value.strip().strip("/")
    if not trimmed:
        return _UNKNOWN

    candidate = trimmed.rsplit("/", 1)[-1].strip()
    if candidate.isascii() and _RELATION_KEY_RE.fullmatch(candidate):
        return candidate.lower()
    return derive_slug(candidate)


def extract_year_from_text(value: str) -> int | None:
    """Find the first plausible year in a free-text date like "September 21, 1937"."""
    for match in _YEAR_RE.finditer(value):
        year = int(match.group(1))
        if _MIN_YEAR <= year <= _MAX_YEAR:
            return year
    return None


def valid_year(value: object) -> int | None:
    """Accept an integer year within the supported range."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if _MIN_YEAR <= value <= _MAX_YEAR:
        return value
    return None


def language_from_key(value: str) -> str | None:
    """Final path segment of a language key ("/languages/eng" -> "eng")."""
    last = value.strip().strip("/").rsplit("/", 1)[-1]
    return last or None
