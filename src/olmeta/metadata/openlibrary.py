# ABOUTME: Open Library metadata provider implementation.
# ABOUTME: Picks a fetch strategy (ISBN, edition, work, search) and assembles deduplicated records.

import logging

from olmeta.metadata.dedup import deduplicate_images, deduplicate_records
from olmeta.metadata.http import HttpClient
from olmeta.metadata.merge import merge_work_with_edition
from olmeta.metadata.openlibrary_parser import (
    first_record_from_work_editions,
    record_from_edition_response,
    record_from_search_doc,
    record_from_work_response,
)
from olmeta.metadata.output import OutputMapper, RelationsOutputMapper
from olmeta.metadata.provider import UnsupportedQueryError
from olmeta.metadata.query import LookupQuery, split_concatenated
from olmeta.metadata.types import BookRecord, ExternalImage, LookupResult
from olmeta.metadata.urls import (
    build_edition_url,
    build_isbn_url,
    build_search_url,
    build_work_editions_url,
    build_work_url,
)

logger = logging.getLogger(__name__)


class OpenLibraryProvider:
    """Metadata provider backed by the Open Library API.

    Identifiers win over free text, in the order ISBN-13, edition id,
    work id. A work lookup also fetches the work's first edition and merges
    the two. Fetch errors (MetadataFetchError) propagate to the caller.
    Uses dependency-injected HttpClient for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        mapper: OutputMapper | None = None,
        *,
        split_titles: bool = False,
    ) -> None:
        self._http = http_client
        self._mapper = mapper or RelationsOutputMapper()
        self._split_titles = split_titles

    @property
    def name(self) -> str:
        return "openlibrary"

    def resolve_records(self, query: LookupQuery) -> list[BookRecord]:
        """Resolve a query into deduplicated BookRecords.

        Raises:
            UnsupportedQueryError: If the query has no usable identifier and
                no non-blank name.
            MetadataFetchError: If a request to Open Library fails.
        """
        ids = query.ids.normalized()

        if ids.isbn13:
            records = self._fetch_by_isbn(ids.isbn13)
        elif ids.edition_id:
            records = self._fetch_by_edition(ids.edition_id)
        elif ids.work_id:
            records = self._fetch_by_work(ids.work_id)
        else:
            search = query.search_text()
            if search is None:
                raise UnsupportedQueryError("Not supported")
            isbn = query.exact_isbn()
            if isbn:
                records = self._fetch_by_isbn(isbn)
            else:
                records = self._fetch_by_search(search)

        return deduplicate_records(records)

    def lookup_metadata(self, query: LookupQuery) -> list[LookupResult]:
        return [self._mapper.map_to_output(record) for record in self.resolve_records(query)]

    def lookup_images(self, query: LookupQuery) -> list[ExternalImage]:
        """Cover images of every resolved record, first occurrence of each URL kept."""
        images: list[ExternalImage] = []
        for record in self.resolve_records(query):
            images.extend(self._mapper.map_to_images(record))
        return deduplicate_images(images)

    def _fetch_by_isbn(self, isbn: str) -> list[BookRecord]:
        logger.debug("Looking up ISBN %s", isbn)
        data = self._http.get(build_isbn_url(isbn))
        return [record_from_edition_response(data)]

    def _fetch_by_edition(self, edition_id: str) -> list[BookRecord]:
        logger.debug("Looking up edition %s", edition_id)
        data = self._http.get(build_edition_url(edition_id))
        return [record_from_edition_response(data)]

    def _fetch_by_work(self, work_id: str) -> list[BookRecord]:
        """Fetch a work and its first edition, then merge them."""
        logger.debug("Looking up work %s", work_id)
        work_data = self._http.get(build_work_url(work_id))
        editions_data = self._http.get(build_work_editions_url(work_id))
        merged = merge_work_with_edition(
            record_from_work_response(work_data),
            first_record_from_work_editions(editions_data),
        )
        return [merged]

    def _fetch_by_search(self, search: str) -> list[BookRecord]:
        if self._split_titles:
            search = split_concatenated(search)
        logger.debug("Searching for %r", search)
        data = self._http.get(build_search_url(search))

        docs = data.get("docs", [])
        if not isinstance(docs, list):
            return []

        records: list[BookRecord] = []
        for doc in docs:
            if not isinstance(doc, dict):
                continue
            record = record_from_search_doc(doc)
            if record is not None:
                records.append(record)
        return records
