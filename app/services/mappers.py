from __future__ import annotations
from typing import Any, Iterable, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from app.domain.dtos import Log, RunRequest, RunResponse, RunStatus, TaskLog
from app.domain.errors import MalformedDocumentError
from app.domain.models import Run, State, Task

Hit = Mapping[str, Any]
M = TypeVar("M", bound=BaseModel)


def hits_of(response: Mapping[str, Any]) -> list[Hit]:
    return list(response.get("hits", {}).get("hits", []))


def total_hits_of(response: Mapping[str, Any]) -> int:
    total = response.get("hits", {}).get("total", 0)
    # ES 7+ returns {"value": n, "relation": "eq"}
    if isinstance(total, Mapping):
        return int(total.get("value", 0))
    return int(total or 0)


def _source(hit: Hit, required: Iterable[str]) -> dict[str, Any]:
    src = hit.get("_source") or {}
    for field in required:
        if src.get(field) is None:
            raise MalformedDocumentError(field, doc_id=hit.get("_id"))
    return dict(src)


def _parse(model: type[M], hit: Hit, required: Iterable[str]) -> M:
    src = _source(hit, required)
    try:
        return model.model_validate(src)
    except ValidationError as exc:
        # wrong-typed field in a stored document
        loc = exc.errors()[0]["loc"] if exc.errors() else ()
        field = ".".join(str(p) for p in loc) or model.__name__
        raise MalformedDocumentError(field, doc_id=hit.get("_id"), problem="has the wrong type") from exc


def hit_to_run(hit: Hit) -> Run:
    return _parse(Run, hit, ("runId",))


def hit_to_task(hit: Hit) -> Task:
    return _parse(Task, hit, ("runId", "taskId"))


def buckets_to_counts(buckets: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Terms buckets -> {key: doc_count}."""
    out: dict[str, int] = {}
    for b in buckets:
        key = b.get("key_as_string", b["key"])
        out[str(key)] = int(b["doc_count"])
    return out


# ---------- WES projections ----------

def _str_or_none(v: Any) -> str | None:
    return None if v is None else str(v)


def to_run_status(hit: Hit) -> RunStatus:
    run = hit_to_run(hit)
    return RunStatus(run_id=run.run_id, state=State.parse(run.state))


def task_to_log(task: Task) -> TaskLog:
    return TaskLog(
        name=task.name,
        cmd=[task.script] if task.script else None,
        start_time=_str_or_none(task.start_time),
        end_time=_str_or_none(task.complete_time),
        exit_code=task.exit,
        task_id=task.task_id,
        process=task.process,
        tag=task.tag,
        state=task.state,
        container=task.container,
        attempt=task.attempt,
        submit_time=_str_or_none(task.submit_time),
        workdir=task.workdir,
    )


def to_run_response(run_hit: Hit, task_hits: Iterable[Hit] = ()) -> RunResponse:
    """Run document plus its task documents flattened into a WES run log."""
    run = hit_to_run(run_hit)
    engine = run.engine_parameters
    request = RunRequest(
        workflow_url=run.repository or "",
        workflow_params=run.parameters,
        workflow_engine_parameters=engine.model_dump(by_alias=True, exclude_none=True) if engine else None,
    )
    run_log = Log(
        name=run.repository,
        cmd=[run.command_line] if run.command_line else None,
        start_time=_str_or_none(run.start_time),
        end_time=_str_or_none(run.complete_time),
        stderr=run.error_report,
        exit_code=run.exit_status,
    )
    return RunResponse(
        run_id=run.run_id,
        request=request,
        state=State.parse(run.state),
        run_log=run_log,
        task_logs=[task_to_log(hit_to_task(h)) for h in task_hits],
        outputs=(run_hit.get("_source") or {}).get("outputs"),
    )
