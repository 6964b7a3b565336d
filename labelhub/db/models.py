"""SQLAlchemy tables for the remote backend.

Each table keeps the identity columns needed for lookups plus the full record
as a JSON document, the same shape the local backend writes to disk.
"""
from __future__ import annotations

from sqlalchemy import BigInteger, Column, Integer, String, JSON

from .session import Base


class ProjectItem(Base):
    __tablename__ = "project"

    project_name = Column(String(255), primary_key=True)
    data = Column(JSON, nullable=False)


class TaskItem(Base):
    __tablename__ = "task"

    project_name = Column(String(255), primary_key=True)
    index = Column(Integer, primary_key=True, autoincrement=False)
    data = Column(JSON, nullable=False)


class AssignmentItem(Base):
    __tablename__ = "assignment"

    # project name + task index + worker id
    primary_key = Column(String(512), primary_key=True)
    data = Column(JSON, nullable=False)


class SubmissionItem(Base):
    __tablename__ = "submission"

    id = Column(Integer, primary_key=True, autoincrement=True)
    primary_key = Column(String(512), nullable=False)
    submit_time = Column(BigInteger, nullable=False, default=0)
    data = Column(JSON, nullable=False)
