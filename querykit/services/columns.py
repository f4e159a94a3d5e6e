from __future__ import annotations

import logging
from typing import Mapping

from querykit.core.errors import ValidationError

ColumnAllowList = Mapping[str, str]

FILTER_OPERATION = "filter"
ORDER_BY_OPERATION = "orderBy"

_LOG = logging.getLogger("querykit.columns")


def resolve_column(
    name: str,
    allow_list: ColumnAllowList,
    operation: str,
    *,
    logger: logging.Logger | None = None,
) -> str:
    """Map a client-facing field name to its storage identifier.

    Unknown names and names mapped to an empty identifier are rejected the same way:
    the allow-list is the only thing standing between query parameters and column names.
    """
    log = logger or _LOG
    if name not in allow_list:
        log.debug("%s: unknown attribute %r", operation, name)
        raise ValidationError(f"{operation}: no such attribute: {name}", operation=operation)
    column = allow_list[name]
    if not column:
        log.debug("%s: attribute %r is not usable", operation, name)
        raise ValidationError(f"{operation}: cannot use attribute: {name}", operation=operation)
    return column
