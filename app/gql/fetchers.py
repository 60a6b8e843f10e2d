# app/gql/fetchers.py
from __future__ import annotations
from typing import Any

from ariadne import ObjectType, QueryType, ScalarType

from app.domain import fields as F
from app.domain.models import AggregationResult, Run, SearchResult, Sort, Task

query = QueryType()
run_type = ObjectType("Run")
task_type = ObjectType("Task")
analysis_type = ObjectType("Analysis")
workflow_type = ObjectType("Workflow")

json_scalar = ScalarType("JSON")
long_scalar = ScalarType("Long")


@json_scalar.serializer
def serialize_json(value: Any) -> Any:
    return value


@long_scalar.serializer
def serialize_long(value: Any) -> int:
    return int(value)


@long_scalar.value_parser
def parse_long(value: Any) -> int:
    return int(value)


# ---------- helpers ----------

def _clean(filter: dict[str, Any] | None) -> dict[str, Any]:
    # explicit nulls in an input object mean "not filtered"
    return {k: v for k, v in (filter or {}).items() if v is not None}


def _sorts(sorts: list[dict[str, Any]] | None) -> list[Sort]:
    return [Sort.model_validate(s) for s in sorts or []]


def run_to_dict(run: Run | None) -> dict[str, Any] | None:
    if run is None:
        return None
    return run.model_dump(by_alias=True)


def task_to_dict(task: Task) -> dict[str, Any]:
    return task.model_dump(by_alias=True)


def _search_result(result: SearchResult, to_dict) -> dict[str, Any]:
    return {
        "content": [to_dict(x) for x in result.items],
        "info": {"hasNextFrom": result.has_next, "totalHits": result.total_hits},
    }


def _aggregation(result: AggregationResult) -> dict[str, Any]:
    return {"totalHits": result.total_hits}


# ---------- Query ----------

@query.field("runs")
async def resolve_runs(_, info, filter=None, page=None, sorts=None):
    result = await info.context["runs"].search_runs(_clean(filter), page, _sorts(sorts))
    return _search_result(result, run_to_dict)


@query.field("aggregateRuns")
async def resolve_aggregate_runs(_, info, filter=None):
    return _aggregation(await info.context["runs"].aggregate_runs(_clean(filter)))


@query.field("tasks")
async def resolve_tasks(_, info, filter=None, page=None, sorts=None):
    result = await info.context["tasks"].search_tasks(_clean(filter), page, _sorts(sorts))
    return _search_result(result, task_to_dict)


@query.field("aggregateTasks")
async def resolve_aggregate_tasks(_, info, filter=None):
    return _aggregation(await info.context["tasks"].aggregate_tasks(_clean(filter)))


# ---------- nested ----------

@run_type.field("tasks")
async def resolve_run_tasks(run, info, page=None, **args):
    filter = _clean({F.TASK_ID: args.get("taskId"), F.STATE: args.get("state"), F.TAG: args.get("tag")})
    tasks = await info.context["tasks"].get_tasks(run["runId"], filter, page)
    return [task_to_dict(t) for t in tasks]


@task_type.field("run")
async def resolve_task_run(task, info):
    return run_to_dict(await info.context["runs"].get_run_by_id(task["runId"]))


@analysis_type.field("runs")
async def resolve_analysis_runs(analysis, info, page=None):
    runs = await info.context["runs"].get_runs_by_analysis_id(analysis["analysisId"], page)
    return [run_to_dict(r) for r in runs]


@workflow_type.field("run")
async def resolve_workflow_run(workflow, info):
    return run_to_dict(await info.context["runs"].get_run_by_id(workflow["runId"]))


bindables = [query, run_type, task_type, analysis_type, workflow_type, json_scalar, long_scalar]
