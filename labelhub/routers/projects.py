from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from labelhub.domain.handlers import get_handler_url

from ._deps import get_labeling_service

router = APIRouter(prefix="/projects", tags=["projects"])
logger = logging.getLogger(__name__)


@router.get("/check")
def project_name_check(request: Request, name: str = ""):
    svc = get_labeling_service(request)
    result = svc.check_project_name(name)
    if not result.available:
        logger.warning('Project Name "%s" already exists.', name)
    return {"name": result.value, "available": result.available}


@router.get("/handler")
def handler_url(item_type: str = "", label_type: str = ""):
    return {"handler_url": get_handler_url(item_type, label_type)}


@router.get("/{name}")
def project_detail(name: str, request: Request):
    return get_labeling_service(request).get_project(name).to_dict()


@router.delete("/{name}")
def project_delete(name: str, request: Request):
    get_labeling_service(request).delete_project(name)
    return {"ok": True}


@router.get("/{name}/dashboard")
def project_dashboard(name: str, request: Request):
    return get_labeling_service(request).get_dashboard_contents(name).to_dict()


@router.get("/{name}/tasks/{index}")
def task_detail(name: str, index: str, request: Request):
    return get_labeling_service(request).get_task(name, index).to_dict()
