"""
FastAPI routers grouped by domain (projects, assignments).

Each module exposes an APIRouter included by ``labelhub.app.create_app``.
Handlers fetch the LabelingService from ``app.state`` and leave error mapping
to the exception handler installed by the app.
"""
