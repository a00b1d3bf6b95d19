from typing import Any, Callable, Dict, Iterable

from chemistry.utils.pagination import CursorMeta

Normalizer = Callable[[Any], Dict[str, Any]]


def normalize_cursor_page(items: Iterable[Any], normalize_fn: Normalizer, meta: CursorMeta) -> Dict[str, Any]:
    """Keyset page: items plus the cursor to continue from."""
    return {
        "items": [normalize_fn(item) for item in items],
        "pagination": dict(meta),
    }


def normalize_page_of(pagination, normalize_fn: Normalizer) -> Dict[str, Any]:
    """Offset page straight from a Flask-SQLAlchemy ``Pagination``."""
    return {
        "items": [normalize_fn(item) for item in pagination.items],
        "pagination": {
            "page": pagination.page,
            "per_page": pagination.per_page,
            "total": pagination.total,
            "total_pages": pagination.pages,
        },
    }
