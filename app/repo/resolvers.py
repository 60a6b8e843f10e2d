# app/repo/resolvers.py
"""
Field resolver tables: logical field name -> engine clause constructor.

Query tables map a field to `value -> query clause`, sort tables map a field
to `() -> sort clause` (the caller applies the direction). Tables are built
once at import and exposed read-only.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Any, Callable, Mapping

from app.config import settings
from app.domain import fields as F

Clause = dict[str, Any]
QueryResolver = Mapping[str, Callable[[Any], Clause]]
SortResolver = Mapping[str, Callable[[], Clause]]


def term(field: str) -> Callable[[Any], Clause]:
    def build(value: Any) -> Clause:
        return {"term": {field: value}}
    return build


def multi_match_all(fields: tuple[str, ...], minimum_should_match: str) -> Callable[[Any], Clause]:
    # identifier that may live under any of several attributes
    def build(value: Any) -> Clause:
        return {"multi_match": {
            "query": value,
            "fields": list(fields),
            "minimum_should_match": minimum_should_match,
        }}
    return build


def fuzzy_match(field: str, minimum_should_match: str) -> Callable[[Any], Clause]:
    # free text: AND terms, but tolerate a few token misses
    def build(value: Any) -> Clause:
        return {"match": {field: {
            "query": value,
            "operator": "and",
            "minimum_should_match": minimum_should_match,
        }}}
    return build


def field_sort(field: str) -> Callable[[], Clause]:
    def build() -> Clause:
        return {field: {}}
    return build


def build_run_query_resolver(analysis_msm: str, text_msm: str) -> QueryResolver:
    return MappingProxyType({
        F.RUN_ID: term("runId"),
        F.SESSION_ID: term("sessionId"),
        F.STATE: term("state"),
        F.ANALYSIS_ID: multi_match_all(F.ANALYSIS_SEARCH_FIELDS, analysis_msm),
        F.REPOSITORY: fuzzy_match("repository", text_msm),
    })


def build_run_sort_resolver() -> SortResolver:
    return MappingProxyType({
        F.RUN_ID: field_sort("runId"),
        F.SESSION_ID: field_sort("sessionId"),
        F.STATE: field_sort("state"),
        F.START_TIME: field_sort("startTime"),
        F.COMPLETE_TIME: field_sort("completeTime"),
        F.REPOSITORY: field_sort("repository"),
    })


def build_task_query_resolver() -> QueryResolver:
    return MappingProxyType({
        F.RUN_ID: term("runId"),
        F.SESSION_ID: term("sessionId"),
        F.TASK_ID: term("taskId"),
        F.STATE: term("state"),
        F.TAG: term("tag"),
        F.NAME: term("name"),
        F.PROCESS: term("process"),
    })


def build_task_sort_resolver() -> SortResolver:
    return MappingProxyType({
        F.RUN_ID: field_sort("runId"),
        F.TASK_ID: field_sort("taskId"),
        F.STATE: field_sort("state"),
        F.NAME: field_sort("name"),
        F.SUBMIT_TIME: field_sort("submitTime"),
        F.START_TIME: field_sort("startTime"),
        F.COMPLETE_TIME: field_sort("completeTime"),
    })


RUN_QUERY_RESOLVER = build_run_query_resolver(
    settings.analysis_id_minimum_should_match, settings.text_minimum_should_match
)
RUN_SORT_RESOLVER = build_run_sort_resolver()
TASK_QUERY_RESOLVER = build_task_query_resolver()
TASK_SORT_RESOLVER = build_task_sort_resolver()
