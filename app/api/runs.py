from fastapi import APIRouter, Depends, Query
from app.domain.dtos import RunId, RunListResponse, RunRequest, RunResponse, RunStatus
from app.services.wes import WesRunService
from app.singletons import get_wes_service

router = APIRouter(prefix="/ga4gh/wes/v1/runs", tags=["wes"])

@router.get("", response_model=RunListResponse)
async def list_runs(
    page_size: int | None = Query(None, ge=0),
    page_token: str | None = Query(None),
    svc: WesRunService = Depends(get_wes_service),
):
    return await svc.list_runs(page_size, page_token)

@router.post("", response_model=RunId)
async def post_run(body: RunRequest, svc: WesRunService = Depends(get_wes_service)):
    return await svc.run(body)

@router.get("/{run_id}", response_model=RunResponse)
async def get_run_log(run_id: str, svc: WesRunService = Depends(get_wes_service)):
    return await svc.get_run_log(run_id)

@router.get("/{run_id}/status", response_model=RunStatus)
async def get_run_status(run_id: str, svc: WesRunService = Depends(get_wes_service)):
    return await svc.get_run_status(run_id)

@router.post("/{run_id}/cancel", response_model=RunId)
async def cancel_run(run_id: str, svc: WesRunService = Depends(get_wes_service)):
    return await svc.cancel(run_id)
