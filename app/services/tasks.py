from __future__ import annotations
from typing import Any, Mapping

from app.domain import fields as F
from app.domain.models import AggregationResult, Page, SearchResult, Sort, Task
from app.repo.query import has_next
from app.repo.tasks import TaskRepository
from app.services.mappers import hit_to_task, hits_of, total_hits_of


class TaskService:
    def __init__(self, repo: TaskRepository):
        self.repo = repo

    async def search_tasks(
        self,
        filter: Mapping[str, Any] | None,
        page: Page | dict | None = None,
        sorts: list[Sort] | None = None,
    ) -> SearchResult[Task]:
        page = Page.of(page)
        response = await self.repo.get_tasks(filter, page, sorts)
        total = total_hits_of(response)
        tasks = [hit_to_task(h) for h in hits_of(response)]
        return SearchResult[Task](items=tasks, has_next=has_next(total, page), total_hits=total)

    async def aggregate_tasks(self, filter: Mapping[str, Any] | None) -> AggregationResult:
        response = await self.repo.get_tasks(filter, Page(), None)
        return AggregationResult(total_hits=total_hits_of(response))

    async def get_tasks(
        self,
        run_id: str | None,
        filter: Mapping[str, Any] | None = None,
        page: Page | dict | None = None,
    ) -> list[Task]:
        """Tasks of one run; `run_id` wins over a runId in `filter`."""
        merged: dict[str, Any] = dict(filter or {})
        if run_id is not None:
            merged[F.RUN_ID] = run_id
        response = await self.repo.get_tasks(merged, Page.of(page), None)
        return [hit_to_task(h) for h in hits_of(response)]
