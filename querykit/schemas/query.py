from typing import List

from pydantic import BaseModel, ConfigDict, Field


class FilterClause(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    value: str = Field(min_length=1)


class OrderClause(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    descending: bool = False


class ListParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    filters: List[FilterClause] = []
    order_by: List[OrderClause] = []
    page_size: int = 0
    offset: int = 0
