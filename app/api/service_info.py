# app/api/service_info.py
from __future__ import annotations
from fastapi import APIRouter, Depends
from app.domain.dtos import ServiceInfo
from app.services.wes import WesRunService
from app.singletons import get_wes_service

router = APIRouter(prefix="/ga4gh/wes/v1", tags=["wes"])

@router.get("/service-info", response_model=ServiceInfo)
async def get_service_info(svc: WesRunService = Depends(get_wes_service)):
    return await svc.get_service_info()
