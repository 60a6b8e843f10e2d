from __future__ import annotations
import logging

from app.domain import fields as F
from app.repo.base import IndexRepository
from app.repo.query import MATCH_ALL
from app.repo.resolvers import RUN_QUERY_RESOLVER, RUN_SORT_RESOLVER
from app.services.mappers import buckets_to_counts

log = logging.getLogger("workflow_search")


class RunRepository(IndexRepository):
    query_resolver = RUN_QUERY_RESOLVER
    sort_resolver = RUN_SORT_RESOLVER
    default_sort_field = F.START_TIME

    get_runs = IndexRepository.search

    async def get_aggregated_run_state_counts(self) -> dict[str, int]:
        """Number of runs per state, keyed by state name."""
        request = {
            "query": dict(MATCH_ALL),
            "size": 0,
            "aggs": {F.STATES_AGGREGATION: {"terms": {"field": F.STATE}}},
        }
        response = await self.execute(request)
        buckets = response["aggregations"][F.STATES_AGGREGATION]["buckets"]
        counts = buckets_to_counts(buckets)
        log.info("[runs.states] %s", counts)
        return counts
