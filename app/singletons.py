# app/singletons.py
from __future__ import annotations
import logging

import httpx
from elasticsearch import AsyncElasticsearch

from app.config import settings
from app.repo.runs import RunRepository
from app.repo.tasks import TaskRepository
from app.services.runs import RunService
from app.services.tasks import TaskService
from app.services.wes import WesRunService
from app.services.workflow_management import WorkflowManagementClient

log = logging.getLogger("workflow_search")


def make_es_client() -> AsyncElasticsearch:
    kwargs = {}
    if settings.elasticsearch_username:
        kwargs["basic_auth"] = (settings.elasticsearch_username, settings.elasticsearch_password or "")
    return AsyncElasticsearch(hosts=[settings.elasticsearch_host], **kwargs)


def make_wm_http() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.workflow_management_url,
        timeout=settings.workflow_management_timeout_s,
    )


def wire(es_client, wm_http: httpx.AsyncClient) -> None:
    """(Re)build repositories and services around the given clients."""
    global es_singleton, wm_singleton, run_repo_singleton, task_repo_singleton
    global run_service_singleton, task_service_singleton, wes_service_singleton

    es_singleton = es_client
    wm_singleton = WorkflowManagementClient(wm_http)
    run_repo_singleton = RunRepository(es_client, settings.workflow_index)
    task_repo_singleton = TaskRepository(es_client, settings.task_index)
    run_service_singleton = RunService(run_repo_singleton)
    task_service_singleton = TaskService(task_repo_singleton)
    wes_service_singleton = WesRunService(
        run_repo_singleton,
        task_repo_singleton,
        wm_singleton,
        settings.service_info,
        default_page_size=settings.default_page_size,
    )
    log.info("[wire] runs=%s tasks=%s es=%s", settings.workflow_index, settings.task_index,
             es_client.__class__.__name__)


# singletons
wire(make_es_client(), make_wm_http())

def get_run_service() -> RunService: return run_service_singleton
def get_task_service() -> TaskService: return task_service_singleton
def get_wes_service() -> WesRunService: return wes_service_singleton


async def close_clients() -> None:
    close = getattr(es_singleton, "close", None)
    if close is not None:
        await close()
    await wm_singleton.aclose()
