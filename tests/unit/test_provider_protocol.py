# ABOUTME: Unit tests for the LookupProvider protocol.
# ABOUTME: Validates the protocol contract and runtime_checkable behavior.

from olmeta.metadata import BookRecord, LookupQuery
from olmeta.metadata.output import RelationsOutputMapper
from olmeta.metadata.provider import LookupProvider
from olmeta.metadata.types import ExternalImage, LookupResult


class FakeProvider:
    """Minimal implementation of LookupProvider for testing."""

    @property
    def name(self) -> str:
        return "fake"

    def resolve_records(self, query: LookupQuery) -> list[BookRecord]:
        return [BookRecord(title=query.name or "Untitled")]

    def lookup_metadata(self, query: LookupQuery) -> list[LookupResult]:
        mapper = RelationsOutputMapper()
        return [mapper.map_to_output(record) for record in self.resolve_records(query)]

    def lookup_images(self, query: LookupQuery) -> list[ExternalImage]:
        return []


class NotAProvider:
    """Missing required methods, so it does not satisfy the protocol."""

    @property
    def name(self) -> str:
        return "broken"


class TestLookupProvider:
    """Tests for LookupProvider protocol."""

    def test_valid_implementation_is_instance(self) -> None:
        assert isinstance(FakeProvider(), LookupProvider)

    def test_invalid_implementation_is_not_instance(self) -> None:
        assert not isinstance(NotAProvider(), LookupProvider)

    def test_lookup_metadata_returns_results(self) -> None:
        results = FakeProvider().lookup_metadata(LookupQuery(name="The Hobbit"))
        assert len(results) == 1
        assert results[0].metadata.id == "openlibrary-title-the-hobbit"
