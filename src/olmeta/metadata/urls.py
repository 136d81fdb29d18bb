# ABOUTME: URL builders for Open Library API endpoints and cover images.
# ABOUTME: Owns the query percent-encoding used by the search endpoint.

_OL_BASE = "https://openlibrary.org"
_COVERS_BASE = "https://covers.openlibrary.org/b"
_SEARCH_LIMIT = 25
_COVER_SIZE = "L"

_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_.~"
)


def encode_query_component(value: str) -> str:
    """Percent-encode a query value byte by byte.

    Unreserved ASCII passes through, space becomes %20 (never "+"), and
    every other UTF-8 byte becomes an uppercase %XX escape.
    """
    parts: list[str] = []
    for byte in value.encode("utf-8"):
        if byte in _UNRESERVED:
            parts.append(chr(byte))
        elif byte == 0x20:
            parts.append("%20")
        else:
            parts.append(f"%{byte:02X}")
    return "".join(parts)


def build_search_url(search: str) -> str:
    return f"{_OL_BASE}/search.json?q={encode_query_component(search)}&limit={_SEARCH_LIMIT}"


def build_isbn_url(isbn: str) -> str:
    return f"{_OL_BASE}/isbn/{isbn}.json"


def build_edition_url(edition_id: str) -> str:
    return f"{_OL_BASE}/books/{edition_id}.json"


def build_work_url(work_id: str) -> str:
    return f"{_OL_BASE}/works/{work_id}.json"


def build_work_editions_url(work_id: str) -> str:
    """Editions listing for a work, limited to the first entry."""
    return f"{_OL_BASE}/works/{work_id}/editions.json?limit=1"


def build_cover_url_from_id(cover_id: int) -> str:
    return f"{_COVERS_BASE}/id/{cover_id}-{_COVER_SIZE}.jpg"


def build_cover_url_from_olid(olid: str) -> str:
    """Cover URL addressed by an edition or work id rather than a cover id."""
    return f"{_COVERS_BASE}/olid/{olid}-{_COVER_SIZE}.jpg"
