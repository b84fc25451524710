"""
Strip persistence-only fields from records before they are saved back.

Fetched records carry database bookkeeping (document ids, timestamps,
version markers) that the save functions reject or duplicate. Only exact
key names are removed, so domain keys such as "carId" survive.
"""
from typing import Any

PERSISTENCE_FIELDS = frozenset({
    "_id",
    "id",
    "__v",
    "_v",
    "_rev",
    "_version",
    "__version",
    "createdAt",
    "updatedAt",
    "created_at",
    "updated_at",
})


def sanitize(record: Any) -> Any:
    """Return a copy of `record` without persistence fields, at any depth."""
    if isinstance(record, dict):
        return {
            key: sanitize(value)
            for key, value in record.items()
            if key not in PERSISTENCE_FIELDS
        }
    if isinstance(record, list):
        return [sanitize(item) for item in record]
    return record
