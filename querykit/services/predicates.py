from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterable, List, Mapping

from querykit.schemas.query import FilterClause
from querykit.services.columns import FILTER_OPERATION, ColumnAllowList, resolve_column

WILDCARD = "*"
LIKE_ESCAPE = "\\"

_LOG = logging.getLogger("querykit.filter")


class Combinator(str, enum.Enum):
    OR = "or"
    AND = "and"


@lru_cache(maxsize=1024)
def _compile_glob(pattern: str) -> re.Pattern:
    body = ".*".join(re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(body, re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class Predicate:
    """Case-insensitive glob match of ``pattern`` against a resolved column.

    ``*`` is the only wildcard and the pattern is anchored at both ends.
    """

    column: str
    pattern: str

    def like_pattern(self) -> str:
        escaped = (
            self.pattern.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
            .replace("%", LIKE_ESCAPE + "%")
            .replace("_", LIKE_ESCAPE + "_")
        )
        return escaped.replace(WILDCARD, "%")

    def regex(self) -> re.Pattern:
        return _compile_glob(self.pattern)

    def matches(self, text: Any) -> bool:
        if text is None:
            return False
        return self.regex().fullmatch(str(text)) is not None


def _pattern_for(value: str) -> str:
    if WILDCARD in value:
        return value
    # Plain values are substring matches; a full match is a substring of itself.
    return f"{WILDCARD}{value}{WILDCARD}"


def compile_predicates(
    clauses: Iterable[FilterClause],
    allow_list: ColumnAllowList,
    *,
    logger: logging.Logger | None = None,
) -> List[Predicate]:
    log = logger or _LOG
    predicates: List[Predicate] = []
    for clause in clauses:
        column = resolve_column(clause.name, allow_list, FILTER_OPERATION, logger=log)
        predicates.append(Predicate(column=column, pattern=_pattern_for(clause.value)))
    return predicates


def evaluate(
    predicates: Iterable[Predicate],
    record: Mapping[str, Any],
    *,
    combinator: Combinator | str,
) -> bool:
    """Apply predicates to a record keyed by column identifier; an empty list matches.

    Raises ``ValueError`` for a combinator other than ``"or"`` or ``"and"``.
    """
    combinator = Combinator(combinator)
    results = [p.matches(record.get(p.column)) for p in predicates]
    if not results:
        return True
    if combinator is Combinator.AND:
        return all(results)
    return any(results)
