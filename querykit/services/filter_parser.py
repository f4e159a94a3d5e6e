from __future__ import annotations

import logging
import re
from typing import Iterable, List

from querykit.core.errors import ValidationError
from querykit.schemas.query import FilterClause
from querykit.services.columns import FILTER_OPERATION

OR_TOKEN = "OR"

# Spaces and tabs around '=' are dropped so that "a = b" tokenizes like "a=b".
_EQUALS_RE = re.compile(r"[ \t]*=[ \t]*")

_LOG = logging.getLogger("querykit.filter")


def _invalid(expr: str, log: logging.Logger, reason: str) -> ValidationError:
    log.debug("rejected filter %r: %s", expr, reason)
    return ValidationError(f"filter: invalid filter request: {expr}", operation=FILTER_OPERATION)


def parse_filter(expr: str, *, logger: logging.Logger | None = None) -> List[FilterClause]:
    """Parse ``name=value [OR name=value ...]`` into an ordered list of clauses.

    Values may span several words; they are rejoined with single spaces. The list is flat:
    whether the clauses are OR'd or AND'd is decided by whoever executes them.
    """
    log = logger or _LOG
    if not expr or not expr.strip():
        return []

    tokens = _EQUALS_RE.sub("=", expr).split()

    clauses: List[FilterClause] = []
    name: str | None = None
    words: List[str] = []
    for index, token in enumerate(tokens):
        if "=" in token:
            parts = token.split("=")
            if name is not None:
                raise _invalid(expr, log, "missing OR between clauses")
            if len(parts) != 2 or not parts[0] or not parts[1]:
                raise _invalid(expr, log, f"malformed selector {token!r}")
            name, words = parts[0], [parts[1]]
        elif token == OR_TOKEN:
            if name is None or index == len(tokens) - 1:
                raise _invalid(expr, log, "OR without a clause on both sides")
            clauses.append(FilterClause(name=name, value=" ".join(words)))
            name, words = None, []
        else:
            if name is None:
                raise _invalid(expr, log, f"value {token!r} without a name")
            words.append(token)

    if name is not None:
        clauses.append(FilterClause(name=name, value=" ".join(words)))
    return clauses


def format_filter(clauses: Iterable[FilterClause]) -> str:
    return f" {OR_TOKEN} ".join(f"{c.name}={c.value}" for c in clauses)
