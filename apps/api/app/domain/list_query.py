"""List query parsing and execution.

Raw query-string pairs are parsed into a typed ``ListQuerySpec`` (filter
conditions over a fixed operator set, projection, sort keys and pagination)
which is then translated into the document store's native query form.

Reserved keys ``select``, ``sort``, ``page`` and ``limit`` never become filters.
Every other key is a filter: ``field=value`` for equality or
``field[op]=value`` with ``op`` in ``gt|gte|lt|lte|in``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
import math
import re
from typing import Any, Protocol

from app.errors import ApiError
from app.schemas.envelope import Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 25
STORAGE_OPERATOR_SIGIL = "$"
RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})

_OPERATOR_KEY_PATTERN = re.compile(r"^(?P<field>[^\[\]]+)\[(?P<operator>[^\[\]]*)\]$")


class FilterOperator(str, Enum):
    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"

    @property
    def storage_operator(self) -> str:
        return f"{STORAGE_OPERATOR_SIGIL}{self.value}"


# Operators a client may spell out in brackets; equality is the bare form.
_BRACKET_OPERATORS: dict[str, FilterOperator] = {
    operator.value: operator for operator in FilterOperator if operator is not FilterOperator.EQ
}


@dataclass(frozen=True, slots=True)
class FilterCondition:
    field: str
    operator: FilterOperator
    value: str | tuple[str, ...]


@dataclass(frozen=True, slots=True)
class SortKey:
    field: str
    descending: bool = False

    @property
    def direction(self) -> int:
        return -1 if self.descending else 1


DEFAULT_SORT: tuple[SortKey, ...] = (SortKey("created_at", descending=True),)


@dataclass(frozen=True, slots=True)
class ListQuerySpec:
    filters: tuple[FilterCondition, ...] = ()
    projection: tuple[str, ...] = ()
    sort: tuple[SortKey, ...] = DEFAULT_SORT
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def storage_filter(self) -> dict[str, Any]:
        """Translate conditions into ``{field: {"$op": value}}`` form."""
        translated: dict[str, dict[str, Any]] = {}
        for condition in self.filters:
            operand: Any = list(condition.value) if isinstance(condition.value, tuple) else condition.value
            translated.setdefault(condition.field, {})[condition.operator.storage_operator] = operand
        return translated

    def storage_sort(self) -> list[tuple[str, int]]:
        return [(key.field, key.direction) for key in self.sort]


@dataclass(slots=True)
class ListResult:
    items: list[dict[str, Any]]
    pagination: Pagination

    @property
    def count(self) -> int:
        return len(self.items)


class Listable(Protocol):
    """Anything the list executor can count and page through."""

    def count(self, criteria: Mapping[str, Any]) -> int: ...

    def find(
        self,
        criteria: Mapping[str, Any],
        *,
        projection: Sequence[str] | None = None,
        sort: Sequence[tuple[str, int]] | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[dict[str, Any]]: ...


def _split_csv(raw: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _positive_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    text = raw.strip()
    if not (text.isascii() and text.isdigit()):
        return default
    value = int(text)
    return value if value > 0 else default


def _parse_sort(raw: str | None) -> tuple[SortKey, ...]:
    if raw is None:
        return DEFAULT_SORT
    keys = tuple(
        SortKey(token[1:], descending=True) if token.startswith("-") else SortKey(token)
        for token in _split_csv(raw)
        if token.lstrip("-")
    )
    return keys or DEFAULT_SORT


@dataclass(slots=True)
class _FilterAccumulator:
    equalities: dict[str, list[str]] = field(default_factory=dict)
    conditions: list[FilterCondition] = field(default_factory=list)

    def add(self, key: str, value: str) -> None:
        match = _OPERATOR_KEY_PATTERN.match(key)
        if match is None:
            self.equalities.setdefault(key, []).append(value)
            return

        field_name = match.group("field")
        operator = _BRACKET_OPERATORS.get(match.group("operator"))
        if operator is None:
            raise ApiError(
                status_code=400,
                code="BAD_REQUEST",
                message=f"Unsupported filter operator {match.group('operator')}",
            )
        if operator is FilterOperator.IN:
            self.conditions.append(FilterCondition(field_name, operator, _split_csv(value)))
        else:
            self.conditions.append(FilterCondition(field_name, operator, value))

    def build(self) -> tuple[FilterCondition, ...]:
        equalities = [
            FilterCondition(name, FilterOperator.EQ, values[0])
            if len(values) == 1
            else FilterCondition(name, FilterOperator.IN, tuple(values))
            for name, values in self.equalities.items()
        ]
        return tuple(equalities + self.conditions)


def parse_list_query(params: Iterable[tuple[str, str]]) -> ListQuerySpec:
    """Build a ``ListQuerySpec`` from raw query-string pairs."""
    reserved: dict[str, str] = {}
    accumulator = _FilterAccumulator()
    for key, value in params:
        if key in RESERVED_PARAMS:
            reserved[key] = value
            continue
        accumulator.add(key, value)

    select = reserved.get("select")
    return ListQuerySpec(
        filters=accumulator.build(),
        projection=_split_csv(select) if select else (),
        sort=_parse_sort(reserved.get("sort")),
        page=_positive_int(reserved.get("page"), DEFAULT_PAGE),
        limit=_positive_int(reserved.get("limit"), DEFAULT_LIMIT),
    )


def execute_list_query(
    source: Listable,
    spec: ListQuerySpec,
    *,
    populate: Callable[[list[dict[str, Any]]], list[dict[str, Any]]] | None = None,
) -> ListResult:
    """Count every match, then fetch the requested page.

    The count and the page are two independent reads; a concurrent write in
    between can make ``total_records`` disagree with the page contents.
    """
    criteria = spec.storage_filter()
    total_records = source.count(criteria)
    items = source.find(
        criteria,
        projection=spec.projection or None,
        sort=spec.storage_sort(),
        skip=spec.offset,
        limit=spec.limit,
    )
    if populate is not None:
        items = populate(items)

    return ListResult(
        items=items,
        pagination=Pagination(
            page=spec.page,
            offset=spec.offset,
            limit=spec.limit,
            total_records=total_records,
            total_pages=math.ceil(total_records / spec.limit),
        ),
    )
