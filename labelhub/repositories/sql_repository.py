"""Remote backend: one SQL table per record type, backed by SQLAlchemy."""
from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from sqlalchemy import delete, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from labelhub.core.utils import format_id
from labelhub.db.models import AssignmentItem, ProjectItem, SubmissionItem, TaskItem
from labelhub.db.session import build_engine, build_sessionmaker, session_scope
from labelhub.domain.errors import (
    BackendUnavailableError,
    DecodeError,
    InvalidArgumentError,
    NotFoundError,
    WriteError,
)
from labelhub.domain.models import Assignment, Project, Task

from .base import StorageBackend, assignment_key

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _decode(payload: Any, decode: Callable[[Any], T], key: str) -> T:
    try:
        return decode(payload)
    except DecodeError as exc:
        exc.key = key
        raise


def _task_number(index: str) -> int:
    try:
        return int(index)
    except (TypeError, ValueError) as exc:
        raise InvalidArgumentError(f"task index must be numeric, got {index!r}", entity="task", key=index) from exc


class SQLStorageBackend(StorageBackend):
    """Point lookups by primary key; listings are filtered selects with no ordering."""

    def __init__(self, database_url: str) -> None:
        self.engine = build_engine(database_url)
        self.session_factory = build_sessionmaker(self.engine)

    def session(self):
        return session_scope(self.session_factory)

    # -------------------------- projects --------------------------
    def load_project(self, name: str) -> Project:
        try:
            with self.session() as session:
                item = session.get(ProjectItem, name)
                payload = item.data if item else None
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="project", key=name) from exc
        if payload is None:
            raise NotFoundError(f"project {name!r} not found", entity="project", key=name)
        return _decode(payload, Project.from_dict, name)

    def save_project(self, project: Project) -> None:
        try:
            with self.session() as session:
                session.merge(ProjectItem(project_name=project.name, data=project.to_dict()))
                session.commit()
        except SQLAlchemyError as exc:
            raise WriteError(str(exc), entity="project", key=project.name) from exc

    def delete_project(self, name: str) -> None:
        # tasks, assignments and submissions of the project are left in place
        try:
            with self.session() as session:
                session.execute(delete(ProjectItem).where(ProjectItem.project_name == name))
                session.commit()
        except SQLAlchemyError as exc:
            raise WriteError(str(exc), entity="project", key=name) from exc
        logger.info("Deleted project item %s", name)

    def project_exists(self, name: str) -> bool:
        try:
            with self.session() as session:
                return session.get(ProjectItem, name) is not None
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="project", key=name) from exc

    # -------------------------- tasks --------------------------
    def load_task(self, project_name: str, index: str) -> Task:
        key = f"{project_name}/{index}"
        number = _task_number(index)
        try:
            with self.session() as session:
                item = session.get(TaskItem, (project_name, number))
                payload = item.data if item else None
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="task", key=key) from exc
        if payload is None:
            raise NotFoundError(f"task {key!r} not found", entity="task", key=key)
        return _decode(payload, Task.from_dict, key)

    def save_task(self, task: Task) -> None:
        key = f"{task.project_name}/{format_id(task.index)}"
        try:
            with self.session() as session:
                session.merge(TaskItem(project_name=task.project_name, index=task.index, data=task.to_dict()))
                session.commit()
        except SQLAlchemyError as exc:
            raise WriteError(str(exc), entity="task", key=key) from exc

    def list_tasks(self, project_name: str) -> list[Task]:
        try:
            with self.session() as session:
                if not inspect(session.get_bind()).has_table(TaskItem.__tablename__):
                    return []
                stmt = select(TaskItem.index, TaskItem.data).where(TaskItem.project_name == project_name)
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="task", key=project_name) from exc
        return [_decode(data, Task.from_dict, f"{project_name}/{format_id(index)}") for index, data in rows]

    # -------------------------- assignments --------------------------
    def load_assignment(self, project_name: str, task_index: str, worker_id: str) -> Assignment:
        key = assignment_key(project_name, task_index, worker_id)
        try:
            with self.session() as session:
                item = session.get(AssignmentItem, key)
                payload = item.data if item else None
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="assignment", key=key) from exc
        if payload is None:
            raise NotFoundError(f"assignment {key!r} not found", entity="assignment", key=key)
        return _decode(payload, Assignment.from_dict, key)

    def save_assignment(self, assignment: Assignment) -> None:
        key = assignment_key(assignment.task.project_name, format_id(assignment.task.index), assignment.worker_id)
        try:
            with self.session() as session:
                session.merge(AssignmentItem(primary_key=key, data=assignment.to_dict()))
                session.commit()
        except SQLAlchemyError as exc:
            raise WriteError(str(exc), entity="assignment", key=key) from exc

    # -------------------------- submissions --------------------------
    def _write_submission(self, submission: Assignment) -> None:
        key = assignment_key(submission.task.project_name, format_id(submission.task.index), submission.worker_id)
        entity = SubmissionItem(primary_key=key, submit_time=submission.submit_time, data=submission.to_dict())
        try:
            with self.session() as session:
                session.add(entity)
                session.commit()
        except SQLAlchemyError as exc:
            raise WriteError(str(exc), entity="submission", key=key) from exc

    def list_submissions(self, project_name: str, task_index: str, worker_id: str) -> list[Assignment]:
        key = assignment_key(project_name, task_index, worker_id)
        stmt = select(SubmissionItem.id, SubmissionItem.submit_time, SubmissionItem.data).where(
            SubmissionItem.primary_key == key
        )
        try:
            with self.session() as session:
                rows = session.execute(stmt).all()
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="submission", key=key) from exc
        # select order is unspecified; recency comes from submit_time, then insertion id
        rows = sorted(rows, key=lambda row: (row.submit_time, row.id))
        return [_decode(row.data, Assignment.from_dict, key) for row in rows]

    def latest_submission(self, project_name: str, task_index: str, worker_id: str) -> Assignment | None:
        key = assignment_key(project_name, task_index, worker_id)
        stmt = (
            select(SubmissionItem.data)
            .where(SubmissionItem.primary_key == key)
            .order_by(SubmissionItem.submit_time.desc(), SubmissionItem.id.desc())
            .limit(1)
        )
        try:
            with self.session() as session:
                payload = session.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise BackendUnavailableError(str(exc), entity="submission", key=key) from exc
        if payload is None:
            return None
        return _decode(payload, Assignment.from_dict, key)
