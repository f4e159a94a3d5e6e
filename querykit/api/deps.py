from __future__ import annotations

from fastapi import HTTPException, Query

from querykit.core.config import settings
from querykit.core.errors import ValidationError
from querykit.schemas.query import ListParams
from querykit.services.filter_parser import parse_filter
from querykit.services.order_parser import parse_order_by


def _check_length(param: str, raw: str) -> None:
    if len(raw) > settings.MAX_FILTER_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f'Parameter "{param}" is longer than {settings.MAX_FILTER_LENGTH} characters',
        )


def get_list_params(
    filter_expr: str = Query("", alias="filter"),
    order_by: str = Query("", alias="orderBy"),
    page_size: int | None = Query(None, alias="pageSize"),
    offset: int = Query(0),
) -> ListParams:
    _check_length("filter", filter_expr)
    _check_length("orderBy", order_by)
    if page_size is None:
        page_size = settings.DEFAULT_PAGE_SIZE
    if settings.MAX_PAGE_SIZE > 0 and not 0 < page_size <= settings.MAX_PAGE_SIZE:
        # pageSize=0 means "everything", which a configured cap forbids.
        raise HTTPException(status_code=400, detail=f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}")
    try:
        return ListParams(
            filters=parse_filter(filter_expr),
            order_by=parse_order_by(order_by),
            page_size=page_size,
            offset=offset,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
