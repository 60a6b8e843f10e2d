from __future__ import annotations
from typing import Any, Mapping

from app.domain import fields as F
from app.domain.models import AggregationResult, Page, Run, SearchResult, Sort
from app.repo.runs import RunRepository
from app.services.mappers import hit_to_run, hits_of, total_hits_of
from app.repo.query import has_next


class RunService:
    def __init__(self, repo: RunRepository):
        self.repo = repo

    async def search_runs(
        self,
        filter: Mapping[str, Any] | None,
        page: Page | dict | None = None,
        sorts: list[Sort] | None = None,
    ) -> SearchResult[Run]:
        page = Page.of(page)
        response = await self.repo.get_runs(filter, page, sorts)
        total = total_hits_of(response)
        runs = [hit_to_run(h) for h in hits_of(response)]
        return SearchResult[Run](items=runs, has_next=has_next(total, page), total_hits=total)

    async def aggregate_runs(self, filter: Mapping[str, Any] | None) -> AggregationResult:
        response = await self.repo.get_runs(filter, Page(), None)
        return AggregationResult(total_hits=total_hits_of(response))

    async def get_run_by_id(self, run_id: str) -> Run | None:
        response = await self.repo.get_runs({F.RUN_ID: run_id}, Page(offset=0, limit=1), None)
        hits = hits_of(response)
        return hit_to_run(hits[0]) if hits else None

    async def get_runs_by_analysis_id(self, analysis_id: str, page: Page | dict | None = None) -> list[Run]:
        response = await self.repo.get_runs({F.ANALYSIS_ID: analysis_id}, Page.of(page), None)
        return [hit_to_run(h) for h in hits_of(response)]

    async def get_state_counts(self) -> dict[str, int]:
        return await self.repo.get_aggregated_run_state_counts()
