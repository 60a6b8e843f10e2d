from __future__ import annotations

import pytest
from elasticsearch import ConnectionError as EsConnectionError

from app.domain.errors import MalformedDocumentError, TransportError
from app.domain.models import Page, Sort
from app.repo.runs import RunRepository
from app.repo.tasks import TaskRepository
from app.services.runs import RunService
from app.services.tasks import TaskService


def _runs(n):
    return [{"runId": f"r{i}", "state": "COMPLETE"} for i in range(n)]


@pytest.mark.asyncio
async def test_search_runs_maps_hits_and_has_next(fake_es, es_resp):
    es = fake_es({"workflow": [es_resp(_runs(5), total=26)]})
    svc = RunService(RunRepository(es, "workflow"))

    result = await svc.search_runs({"state": "COMPLETE"}, {"from": 20, "size": 5},
                                   [Sort(field_name="runId", order="asc")])

    assert [r.run_id for r in result.items] == ["r0", "r1", "r2", "r3", "r4"]
    assert result.total_hits == 26
    assert result.has_next is True

    call = es.calls[0]
    assert call["index"] == "workflow"
    assert call["query"] == {"term": {"state": "COMPLETE"}}
    assert call["sort"] == [{"runId": {"order": "asc"}}]
    assert call["from_"] == 20 and call["size"] == 5


@pytest.mark.asyncio
async def test_search_runs_last_page_has_no_next(fake_es, es_resp):
    es = fake_es({"workflow": [es_resp(_runs(5), total=25)]})
    result = await RunService(RunRepository(es, "workflow")).search_runs(None, Page(offset=20, limit=5))
    assert result.has_next is False


@pytest.mark.asyncio
async def test_aggregate_runs_reports_total_only(fake_es, es_resp):
    es = fake_es({"workflow": [es_resp(_runs(2), total=42)]})
    agg = await RunService(RunRepository(es, "workflow")).aggregate_runs({"analysisId": "A"})
    assert agg.total_hits == 42
    assert "multi_match" in es.calls[0]["query"]


@pytest.mark.asyncio
async def test_state_counts_use_terms_aggregation(fake_es, es_resp):
    aggs = {"states": {"buckets": [{"key": "COMPLETE", "doc_count": 10}, {"key": "RUNNING", "doc_count": 3}]}}
    es = fake_es({"workflow": [es_resp([], total=13, aggs=aggs)]})
    counts = await RunService(RunRepository(es, "workflow")).get_state_counts()
    assert counts == {"COMPLETE": 10, "RUNNING": 3}
    assert es.calls[0]["aggs"] == {"states": {"terms": {"field": "state"}}}
    assert es.calls[0]["size"] == 0


@pytest.mark.asyncio
async def test_get_run_by_id_returns_none_when_absent(fake_es):
    svc = RunService(RunRepository(fake_es(), "workflow"))
    assert await svc.get_run_by_id("missing") is None


@pytest.mark.asyncio
async def test_malformed_hit_fails_whole_query(fake_es, es_resp):
    es = fake_es({"workflow": [es_resp([{"runId": "r1"}, {"state": "RUNNING"}])]})
    with pytest.raises(MalformedDocumentError):
        await RunService(RunRepository(es, "workflow")).search_runs(None)


@pytest.mark.asyncio
async def test_engine_failure_becomes_transport_error(fake_es):
    es = fake_es(error=EsConnectionError("connection refused"))
    with pytest.raises(TransportError):
        await RunService(RunRepository(es, "workflow")).search_runs(None)


@pytest.mark.asyncio
async def test_tasks_of_run_merge_run_id_into_filter(fake_es, es_resp):
    es = fake_es({"task": [es_resp([{"runId": "r1", "taskId": 1, "state": "COMPLETED"}])]})
    svc = TaskService(TaskRepository(es, "task"))

    tasks = await svc.get_tasks("r1", {"state": "COMPLETED", "runId": "other"})

    assert [t.task_id for t in tasks] == [1]
    assert es.calls[0]["query"] == {"bool": {"must": [
        {"term": {"state": "COMPLETED"}},
        {"term": {"runId": "r1"}},
    ]}}


@pytest.mark.asyncio
async def test_search_tasks_defaults(fake_es, es_resp):
    es = fake_es({"task": [es_resp([{"runId": "r1", "taskId": 7}], total=1)]})
    result = await TaskService(TaskRepository(es, "task")).search_tasks({})
    assert result.total_hits == 1
    assert result.has_next is False
    assert es.calls[0]["query"] == {"match_all": {}}
    assert es.calls[0]["sort"] == [{"startTime": {"order": "desc"}}]
