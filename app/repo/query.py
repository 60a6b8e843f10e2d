from __future__ import annotations
from typing import Any, Iterable, Mapping

from app.domain.errors import BadRequestError, UnknownFieldError
from app.domain.models import Page, Sort, SortOrder
from app.repo.resolvers import Clause, QueryResolver, SortResolver

MATCH_ALL: Clause = {"match_all": {}}


def query_from_args(resolver: QueryResolver, filter: Mapping[str, Any] | None) -> Clause:
    """
    Build one engine query from a flat filter map.
    Empty -> match_all; one key -> its clause; several -> bool/must (AND).
    Every key is resolved before anything is returned, so an unknown key
    never reaches the engine.
    """
    if not filter:
        return dict(MATCH_ALL)
    clauses: list[Clause] = []
    for key, value in filter.items():
        build = resolver.get(key)
        if build is None:
            raise UnknownFieldError(key, kind="filter")
        clauses.append(build(value))
    if len(clauses) == 1:
        return clauses[0]
    return {"bool": {"must": clauses}}


def sorts_to_es_sorts(
    resolver: SortResolver,
    sorts: Iterable[Sort] | None,
    default_field: str,
) -> list[Clause]:
    # first entry is the primary key; order is preserved as given
    sorts = list(sorts or [])
    if not sorts:
        return [_with_order(resolver[default_field](), SortOrder.desc)]
    out: list[Clause] = []
    for s in sorts:
        build = resolver.get(s.field_name)
        if build is None:
            raise UnknownFieldError(s.field_name, kind="sort")
        out.append(_with_order(build(), s.order))
    return out


def _with_order(clause: Clause, order: SortOrder) -> Clause:
    ((field, opts),) = clause.items()
    return {field: {**opts, "order": order.value}}


def check_page(page: Page) -> Page:
    if page.offset is not None and page.offset < 0:
        raise BadRequestError(f"page offset must be non-negative, got {page.offset}")
    if page.limit is not None and page.limit < 0:
        raise BadRequestError(f"page size must be non-negative, got {page.limit}")
    return page


def apply_page(request: dict[str, Any], page: Page) -> dict[str, Any]:
    """Set from_/size on the request kwargs; an empty page keeps engine defaults."""
    check_page(page)
    if page.is_empty():
        return request
    if page.offset is not None:
        request["from_"] = page.offset
    if page.limit is not None:
        request["size"] = page.limit
    return request


def has_next(total_hits: int, page: Page) -> bool:
    limit = page.limit
    if not limit:
        return False
    offset = page.offset or 0
    return (total_hits - offset) > limit
