from __future__ import annotations

from app.domain import fields as F
from app.repo.base import IndexRepository
from app.repo.resolvers import TASK_QUERY_RESOLVER, TASK_SORT_RESOLVER


class TaskRepository(IndexRepository):
    query_resolver = TASK_QUERY_RESOLVER
    sort_resolver = TASK_SORT_RESOLVER
    default_sort_field = F.START_TIME

    get_tasks = IndexRepository.search
