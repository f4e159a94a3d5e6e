from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping

from sqlalchemy import and_, asc, desc, or_
from sqlalchemy.orm import Query
from sqlalchemy.sql.expression import ColumnElement, FromClause

from querykit.schemas.query import ListParams
from querykit.services.columns import ColumnAllowList
from querykit.services.ordering import OrderDirective, compile_order
from querykit.services.pagination import compute_page_range
from querykit.services.predicates import LIKE_ESCAPE, Combinator, Predicate, compile_predicates

_LOG = logging.getLogger("querykit.sql")


@dataclass
class ListResult:
    rows: List[Any] = field(default_factory=list)
    total: int = 0
    start: int = 0
    end: int = -1


def _column(columns, identifier: str):
    """Look up a column on a mapped class, a table/subquery, or a plain mapping."""
    if isinstance(columns, Mapping):
        col = columns.get(identifier)
    elif isinstance(columns, FromClause):
        col = columns.c.get(identifier)
    else:
        col = getattr(columns, identifier, None)
    if col is None:
        raise LookupError(f"column {identifier!r} is in the allow-list but not in the query source")
    return col


def predicate_to_sql(predicate: Predicate, columns) -> ColumnElement:
    # ilike renders as LOWER(col) LIKE LOWER(:pattern) where the dialect has no ILIKE.
    return _column(columns, predicate.column).ilike(predicate.like_pattern(), escape=LIKE_ESCAPE)


def combine_predicates(
    predicates: Iterable[Predicate],
    columns,
    *,
    combinator: Combinator | str,
) -> ColumnElement | None:
    combinator = Combinator(combinator)
    expressions = [predicate_to_sql(p, columns) for p in predicates]
    if not expressions:
        return None
    if len(expressions) == 1:
        return expressions[0]
    if combinator is Combinator.AND:
        return and_(*expressions)
    return or_(*expressions)


def order_to_sql(directive: OrderDirective, columns) -> ColumnElement:
    col = _column(columns, directive.column)
    return desc(col) if directive.descending else asc(col)


def apply_list_query(
    query: Query,
    columns,
    allow_list: ColumnAllowList,
    params: ListParams,
    *,
    combinator: Combinator | str,
    logger: logging.Logger | None = None,
) -> ListResult:
    """Filter, order, count and slice ``query`` according to ``params``.

    Raises ``ValidationError`` when a clause names a field outside ``allow_list``
    and ``ValueError`` for an unknown ``combinator``.
    """
    log = logger or _LOG
    combinator = Combinator(combinator)
    predicates = compile_predicates(params.filters, allow_list, logger=log)
    directives = compile_order(params.order_by, allow_list, logger=log)

    condition = combine_predicates(predicates, columns, combinator=combinator)
    if condition is not None:
        query = query.filter(condition)
    for directive in directives:
        query = query.order_by(order_to_sql(directive, columns))

    total = query.count()
    page = compute_page_range(params.page_size, params.offset, total)
    log.debug(
        "list query predicates=%d order=%d combinator=%s total=%d page=%s",
        len(predicates),
        len(directives),
        combinator.value,
        total,
        tuple(page),
    )
    if page.is_empty:
        return ListResult(rows=[], total=total, start=page.start, end=page.end)
    rows = query.offset(page.start).limit(page.end - page.start + 1).all()
    return ListResult(rows=rows, total=total, start=page.start, end=page.end)
