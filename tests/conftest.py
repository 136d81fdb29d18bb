# ABOUTME: Shared pytest fixtures for olmeta tests.
# ABOUTME: Provides sample EPUB files (valid, minimal, and corrupt) used as lookup query sources.

from pathlib import Path

import pytest
from ebooklib import epub


def _write_epub(book: epub.EpubBook, path: Path) -> Path:
    """Add a single chapter and navigation so the EPUB is structurally valid."""
    chapter = epub.EpubHtml(title="Chapter 1", file_name="chap01.xhtml", lang="en")
    chapter.content = b"<html><body><h1>Chapter 1</h1><p>Content.</p></body></html>"
    book.add_item(chapter)

    book.toc = [epub.Link("chap01.xhtml", "Chapter 1", "chap01")]
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]

    epub.write_epub(str(path), book)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """An EPUB whose only identifier is a hyphenated ISBN-13."""
    book = epub.EpubBook()
    book.set_identifier("978-0-14-032872-1")
    book.set_title("The Hobbit")
    book.set_language("en")
    book.add_author("J.R.R. Tolkien")
    return _write_epub(book, tmp_path / "the_hobbit.epub")


@pytest.fixture
def openlibrary_epub(tmp_path: Path) -> Path:
    """An EPUB carrying Open Library edition and work identifiers by scheme."""
    book = epub.EpubBook()
    book.set_identifier("urn:uuid:1b4e28ba-2fa1-11d2-883f-0016d3cca427")
    book.set_title("The Hobbit")
    book.set_language("en")
    book.add_metadata("DC", "identifier", "/books/OL7353617M", {"scheme": "openlibrary"})
    book.add_metadata("DC", "identifier", "OL45804W", {"scheme": "openlibrary_work"})
    return _write_epub(book, tmp_path / "openlibrary.epub")


@pytest.fixture
def minimal_epub(tmp_path: Path) -> Path:
    """Create an EPUB with minimal metadata (only title)."""
    book = epub.EpubBook()
    book.set_identifier("minimal-id")
    book.set_title("Untitled Book")
    book.set_language("en")
    return _write_epub(book, tmp_path / "minimal.epub")


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """Create a corrupt file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath
