import httpx
from elasticsearch import ConnectionError as EsConnectionError


def test_service_info(make_client, fake_es, es_resp):
    aggs = {"states": {"buckets": [{"key": "COMPLETE", "doc_count": 10}, {"key": "RUNNING", "doc_count": 3}]}}
    c = make_client(fake_es({"workflow": [es_resp([], total=13, aggs=aggs)]}))

    r = c.get("/ga4gh/wes/v1/service-info")
    assert r.status_code == 200
    body = r.json()
    assert body["system_state_counts"] == {"COMPLETE": 10, "RUNNING": 3}
    assert "supported_wes_versions" in body


def test_list_runs(make_client, fake_es, es_resp):
    runs = [{"runId": "r1", "state": "COMPLETE"}, {"runId": "r2", "state": "QUEUED"}]
    c = make_client(fake_es({"workflow": [es_resp(runs, total=5)]}))

    body = c.get("/ga4gh/wes/v1/runs", params={"page_size": 2}).json()
    assert body["runs"] == [
        {"run_id": "r1", "state": "COMPLETE"},
        {"run_id": "r2", "state": "QUEUED"},
    ]
    assert body["next_page_token"] == "2"


def test_run_log_and_status(make_client, fake_es, es_resp):
    es = fake_es({
        "workflow": [es_resp([{"runId": "r1", "state": "RUNNING", "repository": "repo"}])],
        "task": [es_resp([{"runId": "r1", "taskId": 1, "name": "align"}])],
    })
    c = make_client(es)

    log = c.get("/ga4gh/wes/v1/runs/r1").json()
    assert log["run_id"] == "r1"
    assert log["state"] == "RUNNING"
    assert log["task_logs"][0]["name"] == "align"

    status = c.get("/ga4gh/wes/v1/runs/r1/status").json()
    assert status == {"run_id": "r1", "state": "RUNNING"}


def test_missing_run_is_404(make_client, fake_es):
    c = make_client(fake_es())
    r = c.get("/ga4gh/wes/v1/runs/nope/status")
    assert r.status_code == 404
    assert r.json()["error"] == "NotFound"


def test_bad_page_token_is_400(make_client, fake_es):
    c = make_client(fake_es())
    r = c.get("/ga4gh/wes/v1/runs", params={"page_token": "xyz"})
    assert r.status_code == 400
    assert r.json()["error"] == "BadRequest"


def test_malformed_document_is_500(make_client, fake_es, es_resp):
    c = make_client(fake_es({"workflow": [es_resp([{"state": "RUNNING"}])]}))
    r = c.get("/ga4gh/wes/v1/runs")
    assert r.status_code == 500
    assert r.json()["error"] == "MalformedDocument"


def test_wrong_typed_document_field_is_500(make_client, fake_es, es_resp):
    c = make_client(fake_es({"workflow": [es_resp([{"runId": "r1", "exitStatus": "SIGKILL"}])]}))
    r = c.get("/ga4gh/wes/v1/runs/r1")
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "MalformedDocument"
    assert "exitStatus" in body["detail"]


def test_engine_down_is_502(make_client, fake_es):
    c = make_client(fake_es(error=EsConnectionError("refused")))
    r = c.get("/ga4gh/wes/v1/runs")
    assert r.status_code == 502
    assert r.json()["error"] == "Transport"


def test_post_and_cancel_run(make_client, fake_es):
    def handler(request: httpx.Request):
        if request.url.path == "/runs":
            return httpx.Response(200, json={"run_id": "wes-1"})
        return httpx.Response(200, json={"run_id": request.url.path.split("/")[2]})

    c = make_client(fake_es(), handler)
    r = c.post("/ga4gh/wes/v1/runs", json={"workflow_url": "icgc-argo/sanger-wgs-variant-calling"})
    assert r.status_code == 200
    assert r.json() == {"run_id": "wes-1"}

    r = c.post("/ga4gh/wes/v1/runs/wes-1/cancel")
    assert r.json() == {"run_id": "wes-1"}


def test_cancel_unknown_run_is_404(make_client, fake_es):
    c = make_client(fake_es())
    r = c.post("/ga4gh/wes/v1/runs/nope/cancel")
    assert r.status_code == 404
