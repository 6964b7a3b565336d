from __future__ import annotations

from fastapi import Request

from labelhub.services.labeling_service import LabelingService


def get_labeling_service(request: Request) -> LabelingService:
    svc = getattr(getattr(request.app, "state", None), "labeling_service", None)
    if not svc:
        raise RuntimeError("LabelingService not configured")
    return svc
