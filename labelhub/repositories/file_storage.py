"""
Local filesystem backend.

Layout under the data directory::

    {project}/project.json
    {project}/tasks/{index}.json
    {project}/assignments/{task_index}/{worker_id}.json
    {project}/submissions/{task_index}/{worker_id}/{YYYY-MM-DD_hh-mm-ss}.json

Listings are ordered by file name; submission names embed their submit time
so that name order is chronological. Same-second submissions get a
zero-padded ``_NNNN`` counter after the time.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable, TypeVar

from labelhub.core.utils import format_id, format_time, path_stem
from labelhub.domain.errors import (
    BackendUnavailableError,
    DecodeError,
    InvalidArgumentError,
    NotFoundError,
    WriteError,
)
from labelhub.domain.models import Assignment, Project, Task

from .base import StorageBackend

logger = logging.getLogger(__name__)

JSON_SUFFIX = ".json"

T = TypeVar("T")


def _component(value: str, what: str) -> str:
    """Validate a single path component taken from caller input."""
    if not value or value in (".", "..") or "/" in value or "\\" in value or "\x00" in value:
        raise InvalidArgumentError(f"invalid {what}: {value!r}", entity=what, key=value)
    return value


class FileStorageBackend(StorageBackend):
    """Stores every record as a JSON file below ``data_dir``."""

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = Path(data_dir)

    # -------------------------- paths --------------------------
    def _project_dir(self, name: str) -> Path:
        return self.data_dir / _component(name, "project")

    def _tasks_dir(self, project_name: str) -> Path:
        return self._project_dir(project_name) / "tasks"

    def _assignment_path(self, project_name: str, task_index: str, worker_id: str) -> Path:
        return (
            self._project_dir(project_name)
            / "assignments"
            / _component(task_index, "task")
            / (_component(worker_id, "worker") + JSON_SUFFIX)
        )

    def _submissions_dir(self, project_name: str, task_index: str, worker_id: str) -> Path:
        return (
            self._project_dir(project_name)
            / "submissions"
            / _component(task_index, "task")
            / _component(worker_id, "worker")
        )

    # -------------------------- io helpers --------------------------
    def _read(self, path: Path, entity: str, key: str, decode: Callable[[Any], T]) -> T:
        try:
            with path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as exc:
            raise NotFoundError(f"{entity} {key!r} not found", entity=entity, key=key) from exc
        except json.JSONDecodeError as exc:
            raise DecodeError(f"{entity} {key!r} is not valid JSON", entity=entity, key=key) from exc
        except OSError as exc:
            raise BackendUnavailableError(f"cannot read {path}: {exc}", entity=entity, key=key) from exc
        try:
            return decode(payload)
        except DecodeError as exc:
            exc.key = key
            raise

    def _write(self, path: Path, payload: dict, entity: str, key: str) -> None:
        """Write to a temp file next to ``path`` and atomically move it in place."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_fd, temp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        except OSError as exc:
            raise WriteError(f"cannot write {entity} {key!r}: {exc}", entity=entity, key=key) from exc
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, path)
        except (OSError, TypeError, ValueError) as exc:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise WriteError(f"cannot write {entity} {key!r}: {exc}", entity=entity, key=key) from exc
        logger.debug("Wrote %s %s to %s", entity, key, path)

    @staticmethod
    def _json_files(directory: Path) -> list[Path]:
        """Record files in ``directory`` sorted by name; empty when it does not exist."""
        try:
            names = sorted(os.listdir(directory))
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise BackendUnavailableError(f"cannot list {directory}: {exc}") from exc
        return [
            directory / name
            for name in names
            if len(name) > len(JSON_SUFFIX) and name.endswith(JSON_SUFFIX)
        ]

    # -------------------------- projects --------------------------
    def load_project(self, name: str) -> Project:
        path = self._project_dir(name) / "project.json"
        return self._read(path, "project", name, Project.from_dict)

    def save_project(self, project: Project) -> None:
        path = self._project_dir(project.name) / "project.json"
        self._write(path, project.to_dict(), "project", project.name)

    def delete_project(self, name: str) -> None:
        project_dir = self._project_dir(name)
        if not project_dir.exists():
            return
        try:
            shutil.rmtree(project_dir)
        except FileNotFoundError:
            return
        except OSError as exc:
            raise WriteError(f"cannot delete project {name!r}: {exc}", entity="project", key=name) from exc
        logger.info("Deleted project directory %s", project_dir)

    def project_exists(self, name: str) -> bool:
        try:
            entries = os.listdir(self.data_dir)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise BackendUnavailableError(
                f"cannot list {self.data_dir}: {exc}", entity="project", key=name
            ) from exc
        return any(path_stem(entry) == name for entry in entries)

    # -------------------------- tasks --------------------------
    def load_task(self, project_name: str, index: str) -> Task:
        path = self._tasks_dir(project_name) / (_component(index, "task") + JSON_SUFFIX)
        return self._read(path, "task", f"{project_name}/{index}", Task.from_dict)

    def save_task(self, task: Task) -> None:
        index = format_id(task.index)
        path = self._tasks_dir(task.project_name) / (index + JSON_SUFFIX)
        self._write(path, task.to_dict(), "task", f"{task.project_name}/{index}")

    def list_tasks(self, project_name: str) -> list[Task]:
        return [
            self._read(path, "task", f"{project_name}/{path.stem}", Task.from_dict)
            for path in self._json_files(self._tasks_dir(project_name))
        ]

    # -------------------------- assignments --------------------------
    def load_assignment(self, project_name: str, task_index: str, worker_id: str) -> Assignment:
        path = self._assignment_path(project_name, task_index, worker_id)
        key = f"{project_name}/{task_index}/{worker_id}"
        return self._read(path, "assignment", key, Assignment.from_dict)

    def save_assignment(self, assignment: Assignment) -> None:
        project_name = assignment.task.project_name
        task_index = format_id(assignment.task.index)
        path = self._assignment_path(project_name, task_index, assignment.worker_id)
        key = f"{project_name}/{task_index}/{assignment.worker_id}"
        self._write(path, assignment.to_dict(), "assignment", key)

    # -------------------------- submissions --------------------------
    def _write_submission(self, submission: Assignment) -> None:
        project_name = submission.task.project_name
        task_index = format_id(submission.task.index)
        directory = self._submissions_dir(project_name, task_index, submission.worker_id)
        stem = format_time(submission.submit_time)
        path = directory / (stem + JSON_SUFFIX)
        counter = 1
        while path.exists():
            path = directory / f"{stem}_{counter:04d}{JSON_SUFFIX}"
            counter += 1
        key = f"{project_name}/{task_index}/{submission.worker_id}/{path.stem}"
        self._write(path, submission.to_dict(), "submission", key)

    def list_submissions(self, project_name: str, task_index: str, worker_id: str) -> list[Assignment]:
        directory = self._submissions_dir(project_name, task_index, worker_id)
        return [self._read_submission(path, project_name, task_index, worker_id) for path in self._json_files(directory)]

    def latest_submission(self, project_name: str, task_index: str, worker_id: str) -> Assignment | None:
        files = self._json_files(self._submissions_dir(project_name, task_index, worker_id))
        if not files:
            return None
        return self._read_submission(files[-1], project_name, task_index, worker_id)

    def _read_submission(self, path: Path, project_name: str, task_index: str, worker_id: str) -> Assignment:
        key = f"{project_name}/{task_index}/{worker_id}/{path.stem}"
        return self._read(path, "submission", key, Assignment.from_dict)
