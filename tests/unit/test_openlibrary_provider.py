# ABOUTME: Unit tests for OpenLibraryProvider.
# ABOUTME: Uses a FakeHttpClient to test strategy selection, merging, dedup, and error handling.

from typing import Any

import pytest

from olmeta.metadata.http import MetadataFetchError
from olmeta.metadata.openlibrary import OpenLibraryProvider
from olmeta.metadata.output import FlatOutputMapper
from olmeta.metadata.provider import LookupProvider, UnsupportedQueryError
from olmeta.metadata.query import BookIds, LookupQuery
from tests.fixtures.openlibrary_responses import (
    EDITION_RESPONSE,
    SEARCH_RESPONSE,
    SEARCH_RESPONSE_BLANK_TITLE,
    SEARCH_RESPONSE_EMPTY,
    WORK_EDITIONS_RESPONSE,
    WORK_EDITIONS_RESPONSE_EMPTY,
    WORK_RESPONSE,
    WORK_RESPONSE_NO_COVERS,
)


class FakeHttpClient:
    """Fake HTTP client that returns canned responses based on URL patterns."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self._responses = responses or {}
        self.request_log: list[str] = []

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        self.request_log.append(url)
        for pattern, response in self._responses.items():
            if pattern in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return {}


class TestOpenLibraryProviderProtocol:
    """Tests that OpenLibraryProvider satisfies LookupProvider."""

    def test_satisfies_protocol(self) -> None:
        provider = OpenLibraryProvider(http_client=FakeHttpClient())
        assert isinstance(provider, LookupProvider)

    def test_name_property(self) -> None:
        provider = OpenLibraryProvider(http_client=FakeHttpClient())
        assert provider.name == "openlibrary"


class TestResolveByIsbn:
    """ISBN identifiers go to the ISBN endpoint."""

    def test_isbn_lookup(self) -> None:
        client = FakeHttpClient({"/isbn/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(LookupQuery(ids=BookIds(isbn13="978-0-14-032872-1")))
        assert len(records) == 1
        assert records[0].isbn13 == "9780140328721"
        assert client.request_log == ["https://openlibrary.org/isbn/9780140328721.json"]

    def test_isbn_wins_over_other_ids(self) -> None:
        client = FakeHttpClient({"/isbn/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        query = LookupQuery(
            name="The Hobbit",
            ids=BookIds(
                isbn13="9780140328721",
                edition_id="/books/OL7353617M",
                work_id="works/OL45804W",
            ),
        )
        provider.resolve_records(query)
        assert client.request_log == ["https://openlibrary.org/isbn/9780140328721.json"]

    def test_invalid_isbn_falls_through_to_edition(self) -> None:
        client = FakeHttpClient({"/books/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        query = LookupQuery(ids=BookIds(isbn13="0140328726", edition_id="OL7353617M"))
        provider.resolve_records(query)
        assert client.request_log == ["https://openlibrary.org/books/OL7353617M.json"]


class TestResolveByEdition:
    """Edition ids go to the books endpoint."""

    def test_edition_lookup(self) -> None:
        client = FakeHttpClient({"/books/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(
            LookupQuery(ids=BookIds(edition_id="/books/OL7353617M"))
        )
        assert len(records) == 1
        assert records[0].edition_id == "OL7353617M"
        assert records[0].cover_ids == [12345, 67890]


class TestResolveByWork:
    """Work ids fetch the work and its first edition, then merge."""

    def test_work_merged_with_first_edition(self) -> None:
        client = FakeHttpClient(
            {
                "/editions.json": WORK_EDITIONS_RESPONSE,
                "/works/": WORK_RESPONSE,
            }
        )
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(LookupQuery(ids=BookIds(work_id="OL45804W")))

        assert client.request_log == [
            "https://openlibrary.org/works/OL45804W.json",
            "https://openlibrary.org/works/OL45804W/editions.json?limit=1",
        ]
        assert len(records) == 1
        record = records[0]
        assert record.title == "The Hobbit"
        assert record.work_id == "OL45804W"
        assert record.edition_id == "OL7353617M"
        assert record.isbn13 == "9780140328721"
        assert record.cover_ids == [2701529, 2701530, 6307679, 9999999]
        assert record.publish_year == 1987
        assert record.description == "A hobbit is swept into a quest for dragon-guarded treasure."

    def test_work_without_editions(self) -> None:
        client = FakeHttpClient(
            {
                "/editions.json": WORK_EDITIONS_RESPONSE_EMPTY,
                "/works/": WORK_RESPONSE_NO_COVERS,
            }
        )
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(LookupQuery(ids=BookIds(work_id="OL11967339W")))
        assert len(records) == 1
        assert records[0].edition_id is None
        assert records[0].cover_ids == []

    def test_editions_failure_propagates(self) -> None:
        client = FakeHttpClient(
            {
                "/editions.json": MetadataFetchError("HTTP 500"),
                "/works/": WORK_RESPONSE,
            }
        )
        provider = OpenLibraryProvider(http_client=client)
        with pytest.raises(MetadataFetchError):
            provider.resolve_records(LookupQuery(ids=BookIds(work_id="OL45804W")))


class TestResolveBySearch:
    """Free-text names go to the search endpoint."""

    def test_search_results_deduplicated(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(LookupQuery(name="The Hobbit"))

        assert client.request_log == [
            "https://openlibrary.org/search.json?q=The%20Hobbit&limit=25"
        ]
        assert [r.title for r in records] == ["The Hobbit", "The Annotated Hobbit"]

    def test_blank_title_docs_skipped(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE_BLANK_TITLE})
        provider = OpenLibraryProvider(http_client=client)
        records = provider.resolve_records(LookupQuery(name="Real Book"))
        assert [r.title for r in records] == ["Real Book"]

    def test_empty_search(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE_EMPTY})
        provider = OpenLibraryProvider(http_client=client)
        assert provider.resolve_records(LookupQuery(name="Nothing Matches")) == []

    def test_exact_isbn_name_uses_isbn_endpoint(self) -> None:
        client = FakeHttpClient({"/isbn/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        provider.resolve_records(LookupQuery(name="0-8044-2957-x"))
        assert client.request_log == ["https://openlibrary.org/isbn/080442957X.json"]

    def test_title_with_isbn_still_searches(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE_EMPTY})
        provider = OpenLibraryProvider(http_client=client)
        provider.resolve_records(LookupQuery(name="The Hobbit 9780140328721"))
        assert client.request_log[0].startswith("https://openlibrary.org/search.json?q=")

    def test_split_titles(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE_EMPTY})
        provider = OpenLibraryProvider(http_client=client, split_titles=True)
        provider.resolve_records(LookupQuery(name="TheHobbit"))
        assert client.request_log == [
            "https://openlibrary.org/search.json?q=The%20Hobbit&limit=25"
        ]

    def test_split_titles_off_by_default(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE_EMPTY})
        provider = OpenLibraryProvider(http_client=client)
        provider.resolve_records(LookupQuery(name="TheHobbit"))
        assert client.request_log == ["https://openlibrary.org/search.json?q=TheHobbit&limit=25"]

    def test_search_failure_propagates(self) -> None:
        client = FakeHttpClient({"/search.json": MetadataFetchError("connection refused")})
        provider = OpenLibraryProvider(http_client=client)
        with pytest.raises(MetadataFetchError, match="connection refused"):
            provider.resolve_records(LookupQuery(name="The Hobbit"))


class TestUnsupportedQuery:
    """Queries with nothing to look up."""

    @pytest.mark.parametrize(
        "query",
        [
            LookupQuery(),
            LookupQuery(name=""),
            LookupQuery(name="   "),
            LookupQuery(ids=BookIds(isbn13="123", edition_id="//")),
        ],
    )
    def test_raises_not_supported(self, query: LookupQuery) -> None:
        client = FakeHttpClient()
        provider = OpenLibraryProvider(http_client=client)
        with pytest.raises(UnsupportedQueryError, match="Not supported"):
            provider.resolve_records(query)
        assert client.request_log == []


class TestLookupMetadata:
    """Tests for lookup_metadata and lookup_images."""

    def test_relations_variant_by_default(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        results = provider.lookup_metadata(LookupQuery(name="The Hobbit"))

        assert [r.metadata.id for r in results] == ["isbn13:9780140328721", "olwid:OL27516W"]
        relations = results[0].relations
        assert relations is not None
        assert [p.id for p in relations.people] == ["openlib-person:j-r-r-tolkien-ol26320a"]

    def test_flat_variant(self) -> None:
        client = FakeHttpClient({"/books/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client, mapper=FlatOutputMapper())
        results = provider.lookup_metadata(LookupQuery(ids=BookIds(edition_id="OL7353617M")))
        assert results[0].relations is None
        assert len(results[0].images) == 2

    def test_lookup_images(self) -> None:
        client = FakeHttpClient({"/books/": EDITION_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        images = provider.lookup_images(LookupQuery(ids=BookIds(edition_id="OL7353617M")))
        assert [image.url for image in images] == [
            "https://covers.openlibrary.org/b/id/12345-L.jpg",
            "https://covers.openlibrary.org/b/id/67890-L.jpg",
        ]

    def test_lookup_images_across_search_results(self) -> None:
        client = FakeHttpClient({"/search.json": SEARCH_RESPONSE})
        provider = OpenLibraryProvider(http_client=client)
        images = provider.lookup_images(LookupQuery(name="The Hobbit"))
        assert [image.url for image in images] == [
            "https://covers.openlibrary.org/b/id/14627509-L.jpg",
            "https://covers.openlibrary.org/b/olid/OL27516W-L.jpg",
        ]
