# ABOUTME: Order-preserving deduplication of BookRecords and cover images.
# ABOUTME: The first occurrence of each key wins; later duplicates are dropped.

from olmeta.metadata.types import BookRecord, ExternalImage


def dedup_key(record: BookRecord) -> str:
    """Identity of a record: work id, else edition id, else ISBN, else title."""
    if record.work_id:
        return f"work:{record.work_id}"
    if record.edition_id:
        return f"edition:{record.edition_id}"
    if record.isbn13:
        return f"isbn13:{record.isbn13}"
    return f"title:{record.title.lower()}"


def deduplicate_records(records: list[BookRecord]) -> list[BookRecord]:
    seen: set[str] = set()
    deduped: list[BookRecord] = []
    for record in records:
        key = dedup_key(record)
        if key in seen:
            continue
        seen.add(key)
        deduped.append(record)
    return deduped


def deduplicate_images(images: list[ExternalImage]) -> list[ExternalImage]:
    """Drop images whose URL has already been seen."""
    seen: set[str] = set()
    deduped: list[ExternalImage] = []
    for image in images:
        if image.url in seen:
            continue
        seen.add(image.url)
        deduped.append(image)
    return deduped
