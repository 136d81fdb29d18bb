# ABOUTME: Metadata package: identifier normalization, record extraction, merge, dedup, mapping.
# ABOUTME: Exports the core types and the Open Library provider used throughout olmeta.

from olmeta.metadata.openlibrary import OpenLibraryProvider
from olmeta.metadata.output import FlatOutputMapper, RelationsOutputMapper, get_output_mapper
from olmeta.metadata.provider import LookupProvider, UnsupportedQueryError
from olmeta.metadata.query import BookIds, LookupQuery
from olmeta.metadata.types import BookOutput, BookRecord, ExternalImage, LookupResult

__all__ = [
    "BookIds",
    "BookOutput",
    "BookRecord",
    "ExternalImage",
    "FlatOutputMapper",
    "LookupProvider",
    "LookupQuery",
    "LookupResult",
    "OpenLibraryProvider",
    "RelationsOutputMapper",
    "UnsupportedQueryError",
    "get_output_mapper",
]
