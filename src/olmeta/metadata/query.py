# ABOUTME: Lookup query types and free-text handling before resolution.
# ABOUTME: Normalizes raw identifiers and splits mangled titles like "TheHobbit" with wordninja.

import re
from dataclasses import dataclass, field

import wordninja

from olmeta.metadata.identifiers import (
    normalize_catalog_id,
    normalize_exact_isbn_query,
    normalize_isbn13,
)

# Minimum length for a spaceless string to be considered "concatenated" and worth splitting.
# Shorter strings (e.g. "Dune", "1984") are left alone.
_MIN_CONCAT_LENGTH = 8

_CAMEL_CASE_RE = re.compile(r"[a-z][A-Z]")
_CAMEL_LOWER_UPPER_RE = re.compile(r"([a-z\d])([A-Z])")
_CAMEL_UPPER_SEQUENCE_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LETTER_DIGIT_RE = re.compile(r"([a-zA-Z])(\d)")
_DIGIT_LETTER_RE = re.compile(r"(\d)([a-zA-Z])")
_SEPARATOR_RE = re.compile(r"[-_]")


@dataclass
class BookIds:
    """Identifiers supplied with a query, as given (possibly unnormalized)."""

    isbn13: str | None = None
    edition_id: str | None = None
    work_id: str | None = None

    def normalized(self) -> "BookIds":
        """Canonical copy; identifiers that do not normalize become None."""
        return BookIds(
            isbn13=normalize_isbn13(self.isbn13) if self.isbn13 else None,
            edition_id=normalize_catalog_id(self.edition_id, "books") if self.edition_id else None,
            work_id=normalize_catalog_id(self.work_id, "works") if self.work_id else None,
        )


@dataclass
class LookupQuery:
    """A book lookup request: free-text name, identifiers, or both."""

    name: str | None = None
    ids: BookIds = field(default_factory=BookIds)

    def search_text(self) -> str | None:
        """The trimmed name, or None when there is nothing to search for."""
        if self.name is None:
            return None
        return self.name.strip() or None

    def exact_isbn(self) -> str | None:
        """ISBN-10/13 when the whole name is an ISBN, e.g. "0-8044-2957-x"."""
        text = self.search_text()
        return normalize_exact_isbn_query(text) if text else None


def needs_splitting(text: str) -> bool:
    """Check whether a title looks mangled (CamelCase, underscores, run-together words)."""
    text = text.strip()
    if not text:
        return False

    if "_" in text:
        return True

    if _CAMEL_CASE_RE.search(text):
        return True

    segments = text.split("-") if "-" in text else [text]
    return any(
        " " not in seg and len(seg) >= _MIN_CONCAT_LENGTH and not seg.isdigit()
        for seg in segments
    )


def _split_camel_case(text: str) -> list[str]:
    """Split "HTMLParser451" style boundaries into ["HTML", "Parser", "451"]."""
    result = _CAMEL_LOWER_UPPER_RE.sub(r"\1 \2", text)
    result = _CAMEL_UPPER_SEQUENCE_RE.sub(r"\1 \2", result)
    result = _LETTER_DIGIT_RE.sub(r"\1 \2", result)
    result = _DIGIT_LETTER_RE.sub(r"\1 \2", result)
    return result.split() or [text]


def split_concatenated(text: str) -> str:
    """Turn a mangled title into space-separated words for searching.

    Hyphens and underscores separate segments, CamelCase boundaries split
    each segment, and long all-lowercase leftovers go through wordninja.
    Titles that do not look mangled are returned unchanged.
    """
    if not needs_splitting(text):
        return text

    words: list[str] = []
    for segment in _SEPARATOR_RE.split(text):
        segment = segment.strip()
        if not segment:
            continue
        for part in _split_camel_case(segment):
            if part.islower() and len(part) >= _MIN_CONCAT_LENGTH:
                words.extend(wordninja.split(part) or [part])
            else:
                words.append(part)

    return " ".join(words)
