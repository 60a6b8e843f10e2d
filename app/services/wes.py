from __future__ import annotations
import logging

from app.config import ServiceInfoSettings
from app.domain import fields as F
from app.domain.dtos import (
    DefaultWorkflowEngineParameter, RunId, RunListResponse, RunRequest,
    RunResponse, RunStatus, ServiceInfo,
)
from app.domain.errors import BadRequestError, NotFoundError
from app.domain.models import Page, Sort, SortOrder
from app.repo.query import has_next
from app.repo.runs import RunRepository
from app.repo.tasks import TaskRepository
from app.services.mappers import hits_of, to_run_response, to_run_status, total_hits_of
from app.services.workflow_management import WorkflowManagementClient

log = logging.getLogger("workflow_search")

TASK_LOG_PAGE = Page(offset=0, limit=1000)
TASK_LOG_SORT = [Sort(field_name=F.TASK_ID, order=SortOrder.asc)]


class WesRunService:
    def __init__(
        self,
        runs: RunRepository,
        tasks: TaskRepository,
        workflow_management: WorkflowManagementClient,
        service_info: ServiceInfoSettings,
        default_page_size: int = F.ES_PAGE_DEFAULT_SIZE,
    ):
        self.runs = runs
        self.tasks = tasks
        self.wm = workflow_management
        self.service_info = service_info
        self.default_page_size = default_page_size

    async def _run_hit(self, run_id: str):
        response = await self.runs.get_runs({F.RUN_ID: run_id}, Page(offset=0, limit=1))
        hits = hits_of(response)
        if not hits:
            raise NotFoundError("Run")
        return hits[0]

    async def get_run_log(self, run_id: str) -> RunResponse:
        run_hit = await self._run_hit(run_id)
        return to_run_response(run_hit, await self._all_task_hits(run_id))

    async def _all_task_hits(self, run_id: str) -> list:
        """Every task of the run, one page after another until none remain."""
        page = TASK_LOG_PAGE
        out: list = []
        while True:
            response = await self.tasks.get_tasks({F.RUN_ID: run_id}, page, TASK_LOG_SORT)
            hits = hits_of(response)
            out.extend(hits)
            if not hits or not has_next(total_hits_of(response), page):
                break
            page = Page(offset=page.offset + page.limit, limit=page.limit)
        log.debug("[wes.run_log] run_id=%s tasks=%d", run_id, len(out))
        return out

    async def get_run_status(self, run_id: str) -> RunStatus:
        return to_run_status(await self._run_hit(run_id))

    async def list_runs(self, page_size: int | None = None, page_token: str | None = None) -> RunListResponse:
        size = self.default_page_size if page_size is None else page_size
        try:
            offset = int(page_token) if page_token else 0
        except ValueError:
            raise BadRequestError(f"page_token must be numeric, got '{page_token}'")
        page = Page(offset=offset, limit=size)

        response = await self.runs.get_runs(None, page)
        total = total_hits_of(response)
        runs = [to_run_status(h) for h in hits_of(response)]
        next_token = str(offset + size) if has_next(total, page) else ""
        return RunListResponse(runs=runs, next_page_token=next_token)

    async def get_service_info(self) -> ServiceInfo:
        info = self.service_info
        return ServiceInfo(
            workflow_type_versions=info.workflow_type_versions,
            supported_wes_versions=info.supported_wes_versions,
            supported_filesystem_protocols=info.supported_filesystem_protocols,
            workflow_engine_versions=info.workflow_engine_versions,
            default_workflow_engine_parameters=[
                DefaultWorkflowEngineParameter(**p.model_dump()) for p in info.default_workflow_engine_parameters
            ],
            system_state_counts=await self.runs.get_aggregated_run_state_counts(),
            auth_instructions_url=info.auth_instructions_url,
            contact_info_url=info.contact_info_url,
            tags=info.tags,
        )

    async def run(self, request: RunRequest) -> RunId:
        return await self.wm.run(request)

    async def cancel(self, run_id: str) -> RunId:
        return await self.wm.cancel(run_id)
