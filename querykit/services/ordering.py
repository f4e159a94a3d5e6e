from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List

from querykit.schemas.query import OrderClause
from querykit.services.columns import ORDER_BY_OPERATION, ColumnAllowList, resolve_column

_LOG = logging.getLogger("querykit.order")


@dataclass(frozen=True)
class OrderDirective:
    column: str
    descending: bool = False


def compile_order(
    clauses: Iterable[OrderClause],
    allow_list: ColumnAllowList,
    *,
    logger: logging.Logger | None = None,
) -> List[OrderDirective]:
    log = logger or _LOG
    return [
        OrderDirective(
            column=resolve_column(clause.name, allow_list, ORDER_BY_OPERATION, logger=log),
            descending=clause.descending,
        )
        for clause in clauses
    ]
