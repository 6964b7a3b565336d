from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from labelhub.app import create_app  # noqa: E402
from labelhub.core.config import Settings  # noqa: E402
from labelhub.db import create_tables  # noqa: E402
from labelhub.domain.models import Assignment, Project, ProjectOptions, Task  # noqa: E402
from labelhub.repositories import FileStorageBackend, SQLStorageBackend  # noqa: E402


@pytest.fixture()
def backend(tmp_path):
    return FileStorageBackend(tmp_path / "data")


@pytest.fixture()
def client(tmp_path, backend):
    settings = Settings(
        app_env="test",
        use_remote_backend=False,
        data_dir=tmp_path / "data",
        database_url="",
        log_level="DEBUG",
    )
    return TestClient(create_app(settings=settings, backend=backend))


def _seed(backend, name="demo"):
    options = ProjectOptions(name=name, item_type="image", label_type="box2d")
    backend.save_project(Project(options=options, task_indices=["0000", "0001"]))
    for index in (1, 0):
        backend.save_task(Task(project_options=options, index=index))


def test_check_name_available_and_duplicate(client, backend, caplog):
    resp = client.get("/projects/check", params={"name": "demo project"})
    assert resp.status_code == 200
    assert resp.json() == {"name": "demo_project", "available": True}

    _seed(backend, name="demo_project")
    with caplog.at_level(logging.WARNING):
        resp = client.get("/projects/check", params={"name": "demo project"})
    assert resp.json() == {"name": "", "available": False}
    assert "already exists" in caplog.text


def test_handler_lookup(client):
    resp = client.get("/projects/handler", params={"item_type": "pointcloud", "label_type": "box3d"})
    assert resp.json() == {"handler_url": "3d_labeling"}


def test_dashboard(client, backend):
    _seed(backend)
    resp = client.get("/projects/demo/dashboard")
    assert resp.status_code == 200
    body = resp.json()
    assert body["project"]["projectOptions"]["name"] == "demo"
    assert [t["index"] for t in body["tasks"]] == [0, 1]


def test_missing_project_is_404(client):
    resp = client.get("/projects/ghost")
    assert resp.status_code == 404
    assert resp.json()["entity"] == "project"


def test_delete_project_twice(client, backend):
    _seed(backend)
    assert client.delete("/projects/demo").json() == {"ok": True}
    assert client.delete("/projects/demo").status_code == 200
    assert client.get("/projects/demo").status_code == 404


def test_create_then_resolve_assignment(client, backend):
    _seed(backend)
    resp = client.post("/assignments/demo/0001/w1")
    assert resp.status_code == 201
    created = resp.json()
    assert created["workerId"] == "w1"
    assert created["labels"] == []

    resp = client.get("/assignments/demo/0001/w1")
    assert resp.status_code == 200
    assert resp.json() == created

    task = backend.load_task("demo", "0001")
    backend.save_submission(Assignment(task=task, worker_id="w1", labels=[{"id": 9}], submit_time=77))
    assert client.get("/assignments/demo/0001/w1").json()["labels"] == [{"id": 9}]


def test_assignment_for_missing_task_is_404(client, backend):
    _seed(backend)
    assert client.post("/assignments/demo/0099/w1").status_code == 404
    assert client.get("/assignments/demo/0099/w1").status_code == 404


def test_check_empty_name_is_400(client):
    resp = client.get("/projects/check", params={"name": ""})
    assert resp.status_code == 400
    assert resp.json()["entity"] == "project"


def test_remote_backend_uses_injected_settings(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(
        app_env="test",
        use_remote_backend=True,
        data_dir=tmp_path / "unused",
        database_url=f"sqlite:///{tmp_path / 'remote.db'}",
        log_level="DEBUG",
    )
    app = create_app(settings=settings)
    backend = app.state.labeling_service.backend
    assert isinstance(backend, SQLStorageBackend)
    create_tables.create_all(backend.engine)
    client = TestClient(app)

    assert client.get("/projects/ghost").status_code == 404

    _seed(backend)
    resp = client.get("/projects/demo/dashboard")
    assert resp.status_code == 200
    assert [t["index"] for t in resp.json()["tasks"]] == [0, 1]
    backend.engine.dispose()
