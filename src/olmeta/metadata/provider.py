# ABOUTME: LookupProvider protocol defining the contract for metadata sources.
# ABOUTME: Also defines UnsupportedQueryError for queries with nothing to look up.

from typing import Protocol, runtime_checkable

from olmeta.metadata.query import LookupQuery
from olmeta.metadata.types import BookRecord, ExternalImage, LookupResult


class UnsupportedQueryError(Exception):
    """Raised when a query has neither a usable identifier nor a search name."""


@runtime_checkable
class LookupProvider(Protocol):
    """Protocol for book metadata lookup services.

    Implementations resolve a query to deduplicated canonical records and
    expose them mapped to the published output shape.
    """

    @property
    def name(self) -> str: ...

    def resolve_records(self, query: LookupQuery) -> list[BookRecord]: ...

    def lookup_metadata(self, query: LookupQuery) -> list[LookupResult]: ...

    def lookup_images(self, query: LookupQuery) -> list[ExternalImage]: ...
