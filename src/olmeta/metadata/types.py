# ABOUTME: Core data structures: the canonical BookRecord and the published output shapes.
# ABOUTME: BookRecord is the interchange format between extraction, merging, dedup, and mapping.

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class BookRecord:
    """Source-agnostic metadata for one book.

    Built once per Open Library response by the parser and never mutated
    afterwards; merging produces a fresh instance. Identifier fields are
    bare ("OL45804W", never "/works/OL45804W") and ``isbn13`` is always
    exactly 13 ASCII digits. ``cover_ids`` holds positive ids in first-seen
    order, and ``cover_id`` is the primary one.
    """

    title: str
    edition_id: str | None = None
    work_id: str | None = None
    isbn13: str | None = None
    cover_ids: list[int] = field(default_factory=list)
    cover_id: int | None = None
    publish_year: int | None = None
    description: str | None = None
    pages: int | None = None
    language: str | None = None
    authors: list[str] = field(default_factory=list)
    author_keys: list[str] = field(default_factory=list)
    subjects: list[str] = field(default_factory=list)
    publishers: list[str] = field(default_factory=list)


class ParamKey(str, Enum):
    """Keys of the open parameter bag, in serialization order."""

    AUTHORS = "authors"
    SUBJECTS = "subjects"
    PUBLISHERS = "publishers"
    EDITION_ID = "openlibraryEditionId"
    WORK_ID = "openlibraryWorkId"


@dataclass
class ExternalImage:
    """A cover image reachable by URL."""

    url: str
    kind: str = "poster"


@dataclass
class GeneratedPerson:
    """Synthetic author entity derived from a record's author names."""

    id: str
    name: str
    kind: str = "author"
    params: dict[str, str] | None = None
    generated: bool = True
    other_ids: list[str] = field(default_factory=list)


@dataclass
class GeneratedTag:
    """Synthetic subject entity derived from a record's subjects."""

    id: str
    name: str
    kind: str = "subject"
    params: dict[str, str] | None = None
    generated: bool = True
    path: str = "/"
    other_ids: list[str] = field(default_factory=list)


@dataclass
class Relations:
    """Entities attached to a metadata record in the relations output variant."""

    images: list[ExternalImage] = field(default_factory=list)
    people: list[GeneratedPerson] = field(default_factory=list)
    tags: list[GeneratedTag] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.images or self.people or self.tags)


@dataclass
class BookOutput:
    """Published book metadata.

    ``id`` is always non-empty and deterministic for a given record.
    ``params`` holds catalog-specific fields keyed by ParamKey values.
    """

    id: str
    name: str
    kind: str = "book"
    year: int | None = None
    overview: str | None = None
    pages: int | None = None
    lang: str | None = None
    isbn13: str | None = None
    openlibrary_edition_id: str | None = None
    openlibrary_work_id: str | None = None
    params: dict[str, str | list[str]] = field(default_factory=dict)


@dataclass
class LookupResult:
    """One lookup hit: the metadata plus its images or relations bundle.

    The relations variant fills ``relations`` (None when it would be empty);
    the flat variant fills ``images`` instead.
    """

    metadata: BookOutput
    relations: Relations | None = None
    images: list[ExternalImage] = field(default_factory=list)
