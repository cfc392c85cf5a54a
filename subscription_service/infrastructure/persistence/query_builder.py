"""Incremental construction of the filtered price aggregate."""

from __future__ import annotations

import operator
from typing import Any, Callable, Dict, List, Tuple

from sqlalchemy import Select, Table, func, literal_column, select

_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": operator.eq,
    ">=": operator.ge,
    "<=": operator.le,
}


class SummaryQueryBuilder:
    """Accumulates optional predicates and renders one parameterized SELECT.

    Predicates are kept in append order and every value is bound, never
    interpolated, so the statement's placeholders line up with
    :meth:`parameters`. ``None`` values add nothing.
    """

    def __init__(self, table: Table) -> None:
        self._table = table
        self._predicates: List[Tuple[str, str, Any]] = []

    def where_equal(self, column: str, value: Any) -> "SummaryQueryBuilder":
        return self._add(column, "=", value)

    def where_at_least(self, column: str, value: Any) -> "SummaryQueryBuilder":
        return self._add(column, ">=", value)

    def where_at_most(self, column: str, value: Any) -> "SummaryQueryBuilder":
        return self._add(column, "<=", value)

    def _add(self, column: str, op: str, value: Any) -> "SummaryQueryBuilder":
        if value is None:
            return self
        if column not in self._table.c:
            raise ValueError(f"Unknown column {column!r} for table {self._table.name}")
        self._predicates.append((column, op, value))
        return self

    def parameters(self) -> List[Any]:
        return [value for _, _, value in self._predicates]

    def build(self) -> Select:
        stmt = select(
            func.coalesce(func.sum(self._table.c.price), literal_column("0"))
        ).select_from(self._table)
        for column, op, value in self._predicates:
            stmt = stmt.where(_OPERATORS[op](self._table.c[column], value))
        return stmt
