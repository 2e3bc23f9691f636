"""Paginated queries, common filter shortcuts and a filtering repository base."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from aiiobackend.query import FilterField, Operator, QueryBuilder
from aiiobackend.repositories import RecordNotFoundError

T = TypeVar("T")


@dataclass
class PaginatedResult(Generic[T]):
    """One page of rows together with the totals needed to page through them."""

    data: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 0
    page_size: int = 0
    total_pages: int = 0


def _count(session: Session, statement: Select) -> int:
    counted = select(func.count()).select_from(statement.order_by(None).subquery())
    return session.scalar(counted) or 0


def find_with_pagination(
    session: Session,
    model,
    page: int,
    page_size: int,
    statement: Optional[Select] = None,
) -> PaginatedResult:
    """Count the rows of ``statement`` and return the requested 1-based page.

    Without a statement every row of ``model`` is paged through.
    """
    if statement is None:
        statement = select(model)

    total = _count(session, statement)
    offset = (page - 1) * page_size
    total_pages = (total + page_size - 1) // page_size

    rows = list(session.scalars(statement.offset(offset).limit(page_size)).all())
    return PaginatedResult(
        data=rows,
        total=total,
        page=page,
        page_size=page_size,
        total_pages=total_pages,
    )


class CommonFilters:
    """Shortcuts for filters that many queries share."""

    def search_by_name(self, name: str) -> FilterField:
        """Match rows whose name contains ``name``."""
        return FilterField("name", Operator.CONTAINS, name)

    def filter_by_status(self, status: str) -> FilterField:
        """Match rows with exactly this status."""
        return FilterField("status", Operator.EQUALS, status)

    def filter_by_active(self, active: bool) -> FilterField:
        """Match rows whose active flag equals ``active``."""
        return FilterField("active", Operator.EQUALS, active)

    def filter_by_ids(self, ids) -> FilterField:
        """Match rows whose id is one of ``ids``."""
        return FilterField("id", Operator.IN, ids)

    def filter_by_date_range(self, column_name: str, start: Any, end: Any) -> list[FilterField]:
        """Bound a column from below and above; a ``None`` bound is left out."""
        filters = []
        if start is not None:
            filters.append(FilterField(column_name, Operator.GREATER_OR_EQUAL, start))
        if end is not None:
            filters.append(FilterField(column_name, Operator.LESS_OR_EQUAL, end))
        return filters

    def filter_by_user_id(self, user_id: int) -> FilterField:
        """Match rows belonging to this user."""
        return FilterField("user_id", Operator.EQUALS, user_id)

    def filter_by_product_id(self, product_id: int) -> FilterField:
        """Match rows for this product."""
        return FilterField("product_id", Operator.EQUALS, product_id)


class BaseRepository:
    """Query helpers over a session, meant to be shared by repositories."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def query_builder(self, model) -> QueryBuilder:
        """Return a fresh query builder for ``model``."""
        return QueryBuilder(model)

    def _statement(self, model, filters) -> Select:
        return QueryBuilder(model).apply_filters(filters).build()

    def find_with_filters(self, model, filters) -> list:
        """Return every row of ``model`` matching the filter object."""
        return list(self._session.scalars(self._statement(model, filters)).all())

    def find_one_with_filters(self, model, filters):
        """Return the first matching row by primary key, raising if there is none."""
        statement = self._statement(model, filters)
        statement = statement.order_by(*model.__table__.primary_key.columns).limit(1)
        row = self._session.scalars(statement).first()
        if row is None:
            raise RecordNotFoundError()
        return row

    def count_with_filters(self, model, filters) -> int:
        """Count the rows of ``model`` matching the filter object."""
        return _count(self._session, self._statement(model, filters))