"""Helpers for reading whole collections through Protean query sets."""

BATCH_SIZE = 500


def fetch_all(query, batch_size: int = BATCH_SIZE) -> list:
    """Return every record matched by ``query``, paging past the default limit."""
    records = []
    offset = 0
    while True:
        page = query.offset(offset).limit(batch_size).all().items
        records.extend(page)
        if len(page) < batch_size:
            return records
        offset += batch_size
