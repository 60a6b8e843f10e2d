from __future__ import annotations
import logging
from typing import Any

import httpx

from app.domain.dtos import RunId, RunRequest
from app.domain.errors import BadRequestError, NotFoundError, TransportError

log = logging.getLogger("workflow_search")


class WorkflowManagementClient:
    """
    Forwards run submission and cancellation to the workflow-management
    service. One request per call, no retries.
    """
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def _request(self, method: str, url: str, json: Any | None = None) -> httpx.Response:
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.HTTPError as e:
            log.warning("[wm] %s %s failed: %s", method, url, e)
            raise TransportError(f"workflow management unreachable: {e}") from e
        if resp.status_code >= 500:
            raise TransportError(f"workflow management HTTP {resp.status_code}: {resp.text}")
        if resp.status_code == 404:
            raise NotFoundError("Run")
        if resp.status_code in (400, 422):
            raise BadRequestError(resp.text)
        if resp.status_code >= 400:
            raise TransportError(f"workflow management HTTP {resp.status_code}: {resp.text}")
        return resp

    async def run(self, request: RunRequest) -> RunId:
        r = await self._request("POST", "/runs", json=request.model_dump(exclude_none=True))
        out = RunId(**r.json())
        log.info("[wm] submitted run_id=%s workflow_url=%s", out.run_id, request.workflow_url)
        return out

    async def cancel(self, run_id: str) -> RunId:
        r = await self._request("POST", f"/runs/{run_id}/cancel")
        log.info("[wm] cancel requested run_id=%s", run_id)
        return RunId(**r.json())

    async def aclose(self) -> None:
        await self._client.aclose()
