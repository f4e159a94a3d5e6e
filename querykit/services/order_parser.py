from __future__ import annotations

import logging
from typing import Iterable, List

from querykit.core.errors import ValidationError
from querykit.schemas.query import OrderClause
from querykit.services.columns import ORDER_BY_OPERATION

ASC = "asc"
DESC = "desc"

_LOG = logging.getLogger("querykit.order")


def parse_order_by(expr: str, *, logger: logging.Logger | None = None) -> List[OrderClause]:
    """Parse ``name [asc|desc], ...``; a missing direction means ascending."""
    log = logger or _LOG
    if not expr or not expr.strip():
        return []

    clauses: List[OrderClause] = []
    for element in expr.split(","):
        parts = element.strip().split()
        if not parts or len(parts) > 2:
            log.debug("rejected orderBy clause %r", element)
            raise ValidationError(f"invalid order by: {element}", operation=ORDER_BY_OPERATION)
        descending = False
        if len(parts) == 2:
            if parts[1] == DESC:
                descending = True
            elif parts[1] != ASC:
                log.debug("rejected orderBy direction %r", parts[1])
                raise ValidationError(f"invalid order by: {element}", operation=ORDER_BY_OPERATION)
        clauses.append(OrderClause(name=parts[0], descending=descending))
    return clauses


def format_order_by(clauses: Iterable[OrderClause]) -> str:
    return ", ".join(f"{c.name} {DESC if c.descending else ASC}" for c in clauses)
