"""Fluent construction of filtered, sorted and paginated SELECT statements."""

from __future__ import annotations

import dataclasses
import enum
import operator as _op
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from sqlalchemy import Select, inspect, select, text
from sqlalchemy.orm import selectinload

_FILTER_KEY = "filter"


class Operator(str, enum.Enum):
    """Comparison applied by a filter."""

    EQUALS = "="
    NOT_EQUALS = "!="
    CONTAINS = "CONTAINS"
    GREATER_THAN = ">"
    LESS_THAN = "<"
    GREATER_OR_EQUAL = ">="
    LESS_OR_EQUAL = "<="
    IN = "IN"
    NOT_IN = "NOT IN"
    IS_NULL = "IS NULL"
    IS_NOT_NULL = "IS NOT NULL"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"


class SortOrder(str, enum.Enum):
    """Direction of a sort."""

    ASC = "ASC"
    DESC = "DESC"


@dataclass
class FilterField:
    """One condition: a column, an operator and the value to compare with."""

    column_name: str
    operator: Operator
    value: Any


@dataclass
class PreloadConfig:
    """A relationship to load eagerly, with optional criteria or a custom loader."""

    relationship: str
    conditions: tuple = ()
    custom_preload: Optional[Callable[[Select], Select]] = None


@dataclass
class SortConfig:
    """A column to sort by and its direction."""

    field: str
    order: SortOrder


@dataclass
class PaginationConfig:
    """A 1-based page number and the number of rows per page."""

    page: int
    page_size: int


@dataclass(frozen=True)
class _FilterSpec:
    column: Optional[str] = None
    operator: Operator = Operator.EQUALS


def _as_operator(value: Any) -> Operator:
    if isinstance(value, Operator):
        return value
    return Operator(str(value).strip())


def filter_field(column=None, operator=Operator.EQUALS):
    """Declare a dataclass field of a filter object, defaulting to None.

    ``column`` defaults to the snake_case field name.
    """
    spec = _FilterSpec(column, _as_operator(operator))
    return field(default=None, metadata={_FILTER_KEY: spec})


def to_snake_case(text: str) -> str:
    """Convert CamelCase to snake_case, splitting before every capital."""
    pieces = [
        f"_{char}" if position > 0 and "A" <= char <= "Z" else char
        for position, char in enumerate(text)
    ]
    return "".join(pieces).lower()


def is_zero_value(value: Any) -> bool:
    """Tell whether ``value`` counts as unset: None, zero, false or empty."""
    if value is None:
        return True
    if isinstance(value, bool):
        return not value
    if isinstance(value, (int, float, complex)):
        return value == 0
    try:
        return len(value) == 0
    except TypeError:
        return False


def _is_unset_filter_value(value: Any) -> bool:
    # An explicit boolean is always a real choice; only None leaves it out.
    if isinstance(value, bool):
        return False
    return is_zero_value(value)


_LIKE_PATTERNS = {
    Operator.CONTAINS: "%{}%",
    Operator.STARTS_WITH: "{}%",
    Operator.ENDS_WITH: "%{}",
}

_COMPARISONS = {
    Operator.EQUALS: _op.eq,
    Operator.NOT_EQUALS: _op.ne,
    Operator.GREATER_THAN: _op.gt,
    Operator.LESS_THAN: _op.lt,
    Operator.GREATER_OR_EQUAL: _op.ge,
    Operator.LESS_OR_EQUAL: _op.le,
}


def _criterion(column, flt: FilterField):
    op = flt.operator
    if op in _LIKE_PATTERNS:
        if not isinstance(flt.value, str):
            raise TypeError(f"{op.value} filter on {flt.column_name!r} needs a string value")
        return column.like(_LIKE_PATTERNS[op].format(flt.value))
    if op is Operator.IN:
        return column.in_(flt.value)
    if op is Operator.NOT_IN:
        return column.not_in(flt.value)
    if op is Operator.IS_NULL:
        return column.is_(None)
    if op is Operator.IS_NOT_NULL:
        return column.is_not(None)
    return _COMPARISONS[op](column, flt.value)


def _having_clause(query: Any, args: tuple, prefix: str):
    if not isinstance(query, str):
        if args:
            raise TypeError("placeholder arguments need a textual HAVING clause")
        return query
    head, *tails = query.split("?")
    if len(tails) != len(args):
        raise ValueError(
            f"HAVING clause has {len(tails)} placeholders but {len(args)} arguments"
        )
    names = [f"{prefix}_{number}" for number in range(len(args))]
    sql = head + "".join(f":{name}{tail}" for name, tail in zip(names, tails))
    return text(sql).bindparams(**dict(zip(names, args)))


class QueryBuilder:
    """Collects filters, eager loads, grouping, sorting and paging for a model."""

    def __init__(self, model) -> None:
        self._model = model
        self.filters: list[FilterField] = []
        self.preloads: list[PreloadConfig] = []
        self.sorts: list[SortConfig] = []
        self.pagination: Optional[PaginationConfig] = None
        self.distinct = False
        self.group_by: list[str] = []
        self.having: list[tuple[Any, tuple]] = []

    def apply_filters(self, filter_obj) -> "QueryBuilder":
        """Add a filter for every set field of a dataclass filter object.

        None, zero numbers and empty strings or collections leave a field out;
        an explicit ``False`` still applies.
        """
        if (
            filter_obj is None
            or isinstance(filter_obj, type)
            or not dataclasses.is_dataclass(filter_obj)
        ):
            return self
        for fld in dataclasses.fields(filter_obj):
            if fld.name.startswith("_"):
                continue
            spec = fld.metadata.get(_FILTER_KEY) or _FilterSpec()
            value = getattr(filter_obj, fld.name)
            if _is_unset_filter_value(value):
                continue
            column = spec.column or to_snake_case(fld.name)
            self.filters.append(FilterField(column, spec.operator, value))
        return self

    def add_filter(self, column_name, operator, value) -> "QueryBuilder":
        """Add one filter."""
        self.filters.append(FilterField(column_name, _as_operator(operator), value))
        return self

    def add_filters(self, filters) -> "QueryBuilder":
        """Add several filters."""
        self.filters.extend(filters)
        return self

    def add_preload(self, relationship, *args) -> "QueryBuilder":
        """Load a relationship eagerly, limited by optional SQL expressions."""
        self.preloads.append(PreloadConfig(relationship, tuple(args)))
        return self

    def add_custom_preload(self, relationship, custom) -> "QueryBuilder":
        """Load a relationship through a function that rewrites the statement."""
        self.preloads.append(PreloadConfig(relationship, custom_preload=custom))
        return self

    def add_sort(self, field, order) -> "QueryBuilder":
        """Sort by a column; sorts apply in the order they were added."""
        self.sorts.append(SortConfig(field, SortOrder(order)))
        return self

    def set_pagination(self, page, page_size) -> "QueryBuilder":
        """Return only the given 1-based page."""
        self.pagination = PaginationConfig(page, page_size)
        return self

    def set_distinct(self, distinct) -> "QueryBuilder":
        """Select distinct rows only."""
        self.distinct = distinct
        return self

    def add_group_by(self, *args) -> "QueryBuilder":
        """Group by the given columns."""
        self.group_by.extend(args)
        return self

    def add_having(self, query, *args) -> "QueryBuilder":
        """Add a HAVING condition: an expression, or text with ``?`` placeholders."""
        self.having.append((query, tuple(args)))
        return self

    def _column(self, name: str):
        columns = self._model.__table__.c
        if name not in columns:
            raise ValueError(f"unknown column {name!r} on {self._model.__name__}")
        return columns[name]

    def _preload_option(self, config: PreloadConfig):
        relationships = inspect(self._model).relationships
        if config.relationship not in relationships:
            raise ValueError(
                f"unknown relationship {config.relationship!r} on {self._model.__name__}"
            )
        attribute = getattr(self._model, config.relationship)
        if config.conditions:
            attribute = attribute.and_(*config.conditions)
        return selectinload(attribute)

    def build(self) -> Select:
        """Return the SELECT statement for everything configured so far."""
        statement = select(self._model)
        if self.distinct:
            statement = statement.distinct()

        for flt in self.filters:
            statement = statement.where(_criterion(self._column(flt.column_name), flt))

        for config in self.preloads:
            if config.custom_preload is not None:
                statement = config.custom_preload(statement)
            else:
                statement = statement.options(self._preload_option(config))

        if self.group_by:
            statement = statement.group_by(*(self._column(name) for name in self.group_by))

        for position, (query, args) in enumerate(self.having):
            statement = statement.having(_having_clause(query, args, f"having_{position}"))

        for sort in self.sorts:
            column = self._column(sort.field)
            statement = statement.order_by(
                column.asc() if sort.order is SortOrder.ASC else column.desc()
            )

        if self.pagination is not None:
            offset = (self.pagination.page - 1) * self.pagination.page_size
            statement = statement.offset(offset).limit(self.pagination.page_size)

        return statement