from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from ._deps import get_labeling_service

router = APIRouter(prefix="/assignments", tags=["assignments"])
logger = logging.getLogger(__name__)


@router.get("/{project}/{task_index}/{worker_id}")
def assignment_current(project: str, task_index: str, worker_id: str, request: Request):
    svc = get_labeling_service(request)
    return svc.get_assignment(project, task_index, worker_id).to_dict()


@router.post("/{project}/{task_index}/{worker_id}", status_code=201)
def assignment_create(project: str, task_index: str, worker_id: str, request: Request):
    svc = get_labeling_service(request)
    assignment = svc.create_assignment(project, task_index, worker_id)
    svc.save_assignment(assignment)
    logger.info("Created assignment %s/%s for worker %s", project, task_index, worker_id)
    return assignment.to_dict()
