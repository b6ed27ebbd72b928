"""Visitor analytics: recording visits and aggregating them for charts.

Day and month boundaries, and weekdays, follow the server's local calendar.
Timestamps are stored in UTC and converted on the way in and out.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TypedDict

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from portfolio_cms.config import get_settings
from portfolio_cms.data.crud.repository import Repository
from portfolio_cms.data.db import get_session
from portfolio_cms.data.models import Visitor
from portfolio_cms.errors import PersistenceError
from portfolio_cms.services.lifecycle import clean_text

logger = logging.getLogger(__name__)

__all__ = [
    "WEEKDAY_LABELS",
    "ChartData",
    "VisitCounts",
    "by_country",
    "by_day_of_week",
    "counts_as_of",
    "record_visit",
]

WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

visitors = Repository(Visitor, "Visitor")


class VisitCounts(TypedDict):
    total: int
    today: int
    month: int


class ChartData(TypedDict):
    labels: list[str]
    values: list[int]


@contextmanager
def _query_errors() -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("Visitor aggregation failed")
        raise PersistenceError("Failed to load visitor statistics") from exc


def _to_local(moment: datetime) -> datetime:
    """Return ``moment`` in server-local time; naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone()


def _local_now(now: datetime | None) -> datetime:
    # naive ``now`` is server-local wall time
    return (now or datetime.now()).astimezone()


def record_visit(ip: str, country: str | None, now: datetime | None = None) -> VisitCounts:
    """Append a visit and return the updated counters.

    Args:
        ip: Client address.
        country: Resolved country name; None or blank when the lookup failed,
            in which case ``Settings.fallback_country`` is stored.
        now: Visit time (defaults to the current time).
    """
    moment = _local_now(now)
    visitors.insert(
        Visitor(
            ip=ip,
            country=clean_text(country) or get_settings().fallback_country,
            visited_at=moment.astimezone(UTC),
        )
    )
    return counts_as_of(moment)


def counts_as_of(now: datetime | None = None) -> VisitCounts:
    """Return total visits and visits since the start of today and of this month."""
    local_now = _local_now(now)
    # midnight gets its own UTC offset, which differs from now's across a DST change
    start_of_day = datetime(local_now.year, local_now.month, local_now.day).astimezone()
    start_of_month = datetime(local_now.year, local_now.month, 1).astimezone()

    with _query_errors(), get_session() as session:

        def _since(start: datetime) -> int:
            query = session.query(func.count(Visitor.id)).filter(
                Visitor.visited_at >= start.astimezone(UTC)
            )
            return int(query.scalar() or 0)

        total = int(session.query(func.count(Visitor.id)).scalar() or 0)
        return {"total": total, "today": _since(start_of_day), "month": _since(start_of_month)}


def by_country() -> ChartData:
    """Visit counts per country, largest first.

    Missing countries, empty strings and the fallback label all count towards
    the fallback label's bucket.
    """
    fallback = get_settings().fallback_country
    with _query_errors(), get_session() as session:
        rows = (
            session.query(Visitor.country, func.count(Visitor.id))
            .group_by(Visitor.country)
            .all()
        )

    totals: Counter[str] = Counter()
    for country, count in rows:
        totals[clean_text(country) or fallback] += int(count)

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return {
        "labels": [label for label, _ in ordered],
        "values": [count for _, count in ordered],
    }


def by_day_of_week() -> ChartData:
    """Visit counts per weekday, always seven buckets from Sunday to Saturday."""
    counts = [0] * len(WEEKDAY_LABELS)
    with _query_errors(), get_session() as session:
        for (visited_at,) in session.query(Visitor.visited_at):
            # isoweekday: Monday=1 .. Sunday=7, so % 7 puts Sunday first
            counts[_to_local(visited_at).isoweekday() % 7] += 1
    return {"labels": list(WEEKDAY_LABELS), "values": counts}
