"""
Submission recency behaves the same on the file and SQL backends.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from labelhub.db import create_tables  # noqa: E402
from labelhub.domain.models import Assignment, ProjectOptions, Task  # noqa: E402
from labelhub.repositories import FileStorageBackend, SQLStorageBackend  # noqa: E402


@pytest.fixture(params=["file", "sql"])
def backend(request, tmp_path):
    if request.param == "file":
        yield FileStorageBackend(tmp_path / "data")
        return
    sql_backend = SQLStorageBackend(f"sqlite:///{tmp_path / 'submissions.db'}")
    create_tables.create_all(sql_backend.engine)
    yield sql_backend
    sql_backend.engine.dispose()


def _task() -> Task:
    return Task(project_options=ProjectOptions(name="demo", label_type="box2d"), index=0)


def test_submission_without_time_is_stamped_and_latest(backend):
    backend.save_submission(Assignment(task=_task(), worker_id="w1", submit_time=100, user_agent="older"))
    backend.save_submission(Assignment(task=_task(), worker_id="w1", user_agent="newer_no_time"))

    latest = backend.latest_submission("demo", "0000", "w1")
    assert latest.user_agent == "newer_no_time"
    assert latest.submit_time > 100

    listed = backend.list_submissions("demo", "0000", "w1")
    assert [s.user_agent for s in listed] == ["older", "newer_no_time"]


def test_save_submission_leaves_caller_object_untouched(backend):
    submission = Assignment(task=_task(), worker_id="w1")
    backend.save_submission(submission)
    assert submission.submit_time == 0
    assert backend.latest_submission("demo", "0000", "w1").submit_time > 0
