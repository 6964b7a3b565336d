"""
Project/task/assignment use cases on top of a storage backend.

Routers call these accessors instead of touching a backend directly. Errors
from the backend propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from labelhub.core.utils import record_timestamp
from labelhub.domain.errors import InvalidArgumentError, StorageError
from labelhub.domain.models import (
    Assignment,
    DashboardContents,
    Project,
    ProjectNameCheck,
    Task,
)
from labelhub.domain.taxonomy import with_default_taxonomy
from labelhub.repositories.base import StorageBackend

logger = logging.getLogger(__name__)


def normalize_project_name(name: str) -> str:
    return name.replace(" ", "_")


class LabelingService:
    """Entity accessors bound to one storage backend."""

    def __init__(self, backend: StorageBackend) -> None:
        self.backend = backend

    # -------------------------- projects --------------------------
    def get_project(self, name: str) -> Project:
        return self.backend.load_project(name)

    def delete_project(self, name: str) -> None:
        self.backend.delete_project(name)

    def check_project_name(self, raw_name: str) -> ProjectNameCheck:
        """Normalize ``raw_name`` and report whether a project already uses it.

        A failing existence lookup (for instance a data directory or table that
        does not exist yet) counts as available.
        """
        if not raw_name:
            raise InvalidArgumentError("Empty project name", entity="project", key=raw_name)
        name = normalize_project_name(raw_name)
        try:
            exists = self.backend.project_exists(name)
        except StorageError as exc:
            logger.warning("Project name lookup for %r failed, treating as available: %s", name, exc)
            exists = False
        return ProjectNameCheck(name=name, available=not exists)

    def get_dashboard_contents(self, project_name: str) -> DashboardContents:
        project = self.get_project(project_name)
        tasks = self.list_tasks_in_project(project_name)
        return DashboardContents(project=project, tasks=tasks)

    # -------------------------- tasks --------------------------
    def get_task(self, project_name: str, index: str) -> Task:
        return self.backend.load_task(project_name, index)

    def list_tasks_in_project(self, project_name: str) -> list[Task]:
        """Tasks of the project in ascending index order, for either backend."""
        if not project_name:
            raise InvalidArgumentError("Empty project name", entity="project", key=project_name)
        tasks = self.backend.list_tasks(project_name)
        return sorted(tasks, key=lambda task: task.index)

    # -------------------------- assignments --------------------------
    def get_assignment(self, project_name: str, task_index: str, worker_id: str) -> Assignment:
        """Latest submission for the triple, else the original assignment."""
        submission = self.backend.latest_submission(project_name, task_index, worker_id)
        if submission is not None:
            return submission
        return self.backend.load_assignment(project_name, task_index, worker_id)

    def create_assignment(self, project_name: str, task_index: str, worker_id: str) -> Assignment:
        """Build a fresh assignment for the task. Nothing is persisted here."""
        task = self.get_task(project_name, task_index)
        task = replace(task, project_options=with_default_taxonomy(task.project_options))
        assignment = Assignment(task=task, worker_id=worker_id, start_time=record_timestamp())
        assignment.initialize()
        return assignment

    def save_assignment(self, assignment: Assignment) -> None:
        self.backend.save_assignment(assignment)
