"""Generic record repository over a single ORM model.

Every method runs in its own transactional session (see ``get_session``) and
returns detached instances; sessions are created with
``expire_on_commit=False`` so loaded attributes stay readable.

Filters are plain field-equality mappings. ``order_by`` takes field names,
with a leading ``-`` for descending order (``["-date", "-id"]``).
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import asc, desc, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from portfolio_cms.data.db import Base, get_session
from portfolio_cms.errors import ConflictError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# largest value an INTEGER primary key can hold (signed 64-bit)
MAX_RECORD_ID = 2**63 - 1


class Repository(Generic[ModelT]):
    """CRUD access to one table.

    Args:
        model: ORM model class managed by this repository.
        label: Human-readable name used in error messages (e.g. ``"Album"``).
    """

    def __init__(self, model: type[ModelT], label: str | None = None) -> None:
        self.model = model
        self.label = label or model.__name__

    @contextmanager
    def _translate_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            logger.warning(
                "Integrity error while trying to %s %s: %s", action, self.label, exc.orig
            )
            raise ConflictError(f"{self.label} already exists") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to %s %s", action, self.label)
            raise PersistenceError(f"Failed to {action} {self.label.lower()}") from exc

    def _column(self, field: str) -> Any:
        try:
            return getattr(self.model, field)
        except AttributeError:
            raise ValueError(f"{self.model.__name__} has no field {field!r}") from None

    def _apply(
        self,
        query: Query,
        filters: Mapping[str, Any] | None,
        order_by: Sequence[str] | None = None,
    ) -> Query:
        for field, value in (filters or {}).items():
            query = query.filter(self._column(field) == value)
        for key in order_by or ():
            if key.startswith("-"):
                query = query.order_by(desc(self._column(key[1:])))
            else:
                query = query.order_by(asc(self._column(key)))
        return query

    def _get(self, session: Session, record_id: int) -> ModelT | None:
        # ids outside the INTEGER range cannot exist and would overflow the driver
        if not -MAX_RECORD_ID - 1 <= record_id <= MAX_RECORD_ID:
            return None
        return session.get(self.model, record_id)

    def insert(self, record: ModelT) -> ModelT:
        """Persist a new record and return it with its generated id."""
        with self._translate_errors("create"), get_session() as session:
            session.add(record)
            session.flush()
            return record

    def insert_many(self, records: Iterable[ModelT]) -> list[ModelT]:
        """Persist several records in one transaction."""
        items = list(records)
        with self._translate_errors("create"), get_session() as session:
            session.add_all(items)
            session.flush()
            return items

    def find_by_id(self, record_id: int) -> ModelT:
        """Return the record with ``record_id``.

        Raises:
            NotFoundError: If no such record exists.
        """
        with self._translate_errors("load"), get_session() as session:
            record = self._get(session, record_id)
        if record is None:
            raise NotFoundError(f"{self.label} not found")
        return record

    def find(
        self,
        filters: Mapping[str, Any] | None = None,
        order_by: Sequence[str] | None = None,
    ) -> list[ModelT]:
        """Return all records matching ``filters`` in ``order_by`` order."""
        with self._translate_errors("list"), get_session() as session:
            return self._apply(session.query(self.model), filters, order_by).all()

    def find_one(self, filters: Mapping[str, Any]) -> ModelT | None:
        """Return the first record matching ``filters``, or None."""
        with self._translate_errors("load"), get_session() as session:
            return self._apply(session.query(self.model), filters, ["id"]).first()

    def count(self, filters: Mapping[str, Any] | None = None) -> int:
        """Return the number of records matching ``filters``."""
        with self._translate_errors("count"), get_session() as session:
            query = session.query(func.count(self.model.id))
            return int(self._apply(query, filters).scalar() or 0)

    def count_grouped(self, field: str) -> dict[Any, int]:
        """Return ``{value: count}`` for every distinct value of ``field``."""
        column = self._column(field)
        with self._translate_errors("count"), get_session() as session:
            rows = session.query(column, func.count(self.model.id)).group_by(column).all()
        return {value: int(count) for value, count in rows}

    def update_by_id(self, record_id: int, mutate: Callable[[ModelT], None]) -> ModelT:
        """Load a record, apply ``mutate`` to it and commit, in one transaction.

        Raises:
            NotFoundError: If no such record exists.
        """
        with self._translate_errors("update"), get_session() as session:
            record = self._get(session, record_id)
            if record is None:
                raise NotFoundError(f"{self.label} not found")
            mutate(record)
            session.flush()
            return record

    def delete_by_id(self, record_id: int) -> bool:
        """Delete one record. Returns True if it existed."""
        with self._translate_errors("delete"), get_session() as session:
            record = self._get(session, record_id)
            if record is None:
                return False
            session.delete(record)
            return True

    def delete_many(self, filters: Mapping[str, Any]) -> int:
        """Delete every record matching ``filters`` and return how many went."""
        with self._translate_errors("delete"), get_session() as session:
            query = self._apply(session.query(self.model), filters)
            return int(query.delete(synchronize_session=False))
