"""Storage backend interface.

Services depend on this interface only; the filesystem and SQL
implementations are selected once at startup by
``labelhub.repositories.get_storage_backend``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace

from labelhub.core.utils import record_timestamp
from labelhub.domain.models import Assignment, Project, Task


def assignment_key(project_name: str, task_index: str, worker_id: str) -> str:
    """Composite key of an assignment and of its submissions."""
    return project_name + task_index + worker_id


class StorageBackend(ABC):
    """Per-entity get/put/delete/list primitives.

    Implementations raise the kinds in ``labelhub.domain.errors`` and never
    retry or swallow backend failures.
    """

    # -------------------------- projects --------------------------
    @abstractmethod
    def load_project(self, name: str) -> Project:
        """Return the project. Raises NotFoundError / DecodeError."""
        ...

    @abstractmethod
    def save_project(self, project: Project) -> None:
        ...

    @abstractmethod
    def delete_project(self, name: str) -> None:
        """Remove storage owned directly by the project. Missing projects are not an error."""
        ...

    @abstractmethod
    def project_exists(self, name: str) -> bool:
        ...

    # -------------------------- tasks --------------------------
    @abstractmethod
    def load_task(self, project_name: str, index: str) -> Task:
        ...

    @abstractmethod
    def save_task(self, task: Task) -> None:
        ...

    @abstractmethod
    def list_tasks(self, project_name: str) -> list[Task]:
        """All tasks of a project; empty when the project has no task storage yet."""
        ...

    # -------------------------- assignments --------------------------
    @abstractmethod
    def load_assignment(self, project_name: str, task_index: str, worker_id: str) -> Assignment:
        ...

    @abstractmethod
    def save_assignment(self, assignment: Assignment) -> None:
        """Persist an assignment. Raises WriteError when the backend rejects it."""
        ...

    # -------------------------- submissions --------------------------
    def save_submission(self, submission: Assignment) -> None:
        """Append a submission; one without a submit time gets the current time."""
        if not submission.submit_time:
            submission = replace(submission, submit_time=record_timestamp())
        self._write_submission(submission)

    @abstractmethod
    def _write_submission(self, submission: Assignment) -> None:
        ...

    @abstractmethod
    def list_submissions(self, project_name: str, task_index: str, worker_id: str) -> list[Assignment]:
        """Submissions for the triple, oldest first."""
        ...

    def latest_submission(self, project_name: str, task_index: str, worker_id: str) -> Assignment | None:
        submissions = self.list_submissions(project_name, task_index, worker_id)
        return submissions[-1] if submissions else None
