"""
Keyset pagination for append-only tables read newest first.

The cursor is the sort key of the last row handed out, ``<iso created_at>|<id>``;
the next page starts strictly after it.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, NamedTuple, Optional, Tuple, TypedDict

from sqlalchemy import Select, and_, or_
from werkzeug.exceptions import BadRequest

from chemistry.extensions import db
from chemistry.utils.timestamps import normalize_ts


class CursorMeta(TypedDict):
    has_more: bool
    next_cursor: Optional[str]
    prev_cursor: Optional[str]


class Cursor(NamedTuple):
    created_at: datetime
    row_id: str

    def encode(self) -> str:
        return f"{normalize_ts(self.created_at).isoformat()}|{self.row_id}"

    @classmethod
    def decode(cls, raw: str) -> "Cursor":
        stamp, sep, row_id = (raw or "").partition("|")
        if not sep or not row_id:
            raise BadRequest("Invalid cursor format")
        try:
            return cls(normalize_ts(datetime.fromisoformat(stamp)), row_id)
        except ValueError as exc:
            raise BadRequest("Invalid cursor format") from exc


def paginate_cursor(
    statement: Select,
    *,
    model,
    limit: int,
    cursor: Optional[str] = None,
) -> Tuple[List[Any], CursorMeta]:
    """
    Run ``statement`` ordered by (created_at, id) descending, one page at a
    time. One extra row is read to tell whether another page follows.
    """
    if limit <= 0:
        raise BadRequest("Limit must be greater than zero")

    if cursor:
        after = Cursor.decode(cursor)
        statement = statement.where(
            or_(
                model.created_at < after.created_at,
                and_(model.created_at == after.created_at, model.id < after.row_id),
            )
        )

    rows = db.session.execute(
        statement.order_by(model.created_at.desc(), model.id.desc()).limit(limit + 1)
    ).scalars().all()

    items = rows[:limit]
    has_more = len(rows) > limit
    next_cursor = Cursor(items[-1].created_at, items[-1].id).encode() if has_more else None

    return items, {
        "has_more": has_more,
        "next_cursor": next_cursor,
        "prev_cursor": cursor,
    }
