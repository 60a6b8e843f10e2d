from __future__ import annotations
import logging
from typing import Any, Mapping

from elasticsearch import ApiError, AsyncElasticsearch
from elasticsearch import TransportError as EsTransportError

from app.domain.errors import TransportError
from app.domain.models import Page, Sort
from app.repo.query import apply_page, query_from_args, sorts_to_es_sorts
from app.repo.resolvers import QueryResolver, SortResolver

log = logging.getLogger("workflow_search")


class IndexRepository:
    """
    One index, one long-lived client. Assembles query + sort + page into a
    single request and awaits it; interpreting the response is up to callers.
    """
    query_resolver: QueryResolver
    sort_resolver: SortResolver
    default_sort_field: str

    def __init__(self, client: AsyncElasticsearch, index: str):
        self.client = client
        self.index = index

    def build_request(
        self,
        filter: Mapping[str, Any] | None,
        page: Page | None = None,
        sorts: list[Sort] | None = None,
    ) -> dict[str, Any]:
        request: dict[str, Any] = {
            "query": query_from_args(self.query_resolver, filter),
            "sort": sorts_to_es_sorts(self.sort_resolver, sorts, self.default_sort_field),
            "track_total_hits": True,
        }
        return apply_page(request, Page.of(page))

    async def search(
        self,
        filter: Mapping[str, Any] | None,
        page: Page | None = None,
        sorts: list[Sort] | None = None,
    ):
        request = self.build_request(filter, page, sorts)
        return await self.execute(request)

    async def execute(self, request: dict[str, Any]):
        log.debug("[es.search] index=%s request=%s", self.index, request)
        try:
            return await self.client.search(index=self.index, **request)
        except (ApiError, EsTransportError) as exc:
            log.warning("[es.search] index=%s failed: %s", self.index, exc)
            raise TransportError(f"search on '{self.index}' failed: {exc}") from exc
