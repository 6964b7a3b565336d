"""Domain records and their JSON mapping.

Records serialize to camelCase dictionaries, the shape shared by the project
files on disk, the JSON columns of the SQL backend and the HTTP responses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .errors import DecodeError


def _require(data: Any, key: str, entity: str) -> Any:
    if not isinstance(data, Mapping):
        raise DecodeError(f"{entity} record must be an object", entity=entity)
    if key not in data:
        raise DecodeError(f"{entity} record is missing '{key}'", entity=entity)
    return data[key]


def _as_list(value: Any, key: str, entity: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise DecodeError(f"{entity} field '{key}' must be a list", entity=entity)
    return list(value)


def _as_int(value: Any, key: str, entity: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"{entity} field '{key}' must be an integer", entity=entity) from exc


@dataclass(frozen=True)
class Category:
    name: str
    subcategories: tuple["Category", ...] = ()

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "subcategories": [sub.to_dict() for sub in self.subcategories] or None,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Category":
        name = _require(data, "name", "category")
        subs = _as_list(data.get("subcategories"), "subcategories", "category")
        return cls(name=str(name), subcategories=tuple(cls.from_dict(sub) for sub in subs))


@dataclass(frozen=True)
class Attribute:
    name: str
    tool_type: str = ""
    tag_text: str = ""
    tag_prefix: str = ""
    tag_suffixes: tuple[str, ...] | None = None
    values: tuple[str, ...] | None = None
    button_colors: tuple[str, ...] | None = None

    def to_dict(self) -> dict:
        def _opt(seq):
            return list(seq) if seq is not None else None

        return {
            "name": self.name,
            "toolType": self.tool_type,
            "tagText": self.tag_text,
            "tagPrefix": self.tag_prefix,
            "tagSuffixes": _opt(self.tag_suffixes),
            "values": _opt(self.values),
            "buttonColors": _opt(self.button_colors),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Attribute":
        name = _require(data, "name", "attribute")

        def _opt(key):
            value = data.get(key)
            return tuple(_as_list(value, key, "attribute")) if value is not None else None

        return cls(
            name=str(name),
            tool_type=data.get("toolType") or "",
            tag_text=data.get("tagText") or "",
            tag_prefix=data.get("tagPrefix") or "",
            tag_suffixes=_opt("tagSuffixes"),
            values=_opt("values"),
            button_colors=_opt("buttonColors"),
        )


@dataclass
class ProjectOptions:
    """Configuration shared by a project and every task cut from it."""

    name: str
    item_type: str = ""
    label_type: str = ""
    task_size: int = 0
    handler_url: str = ""
    page_title: str = ""
    categories: list[Category] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    instructions_url: str = ""
    demo_mode: bool = False

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "itemType": self.item_type,
            "labelType": self.label_type,
            "taskSize": self.task_size,
            "handlerUrl": self.handler_url,
            "pageTitle": self.page_title,
            "categories": [c.to_dict() for c in self.categories],
            "attributes": [a.to_dict() for a in self.attributes],
            "instructionsUrl": self.instructions_url,
            "demoMode": self.demo_mode,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectOptions":
        name = _require(data, "name", "project options")
        return cls(
            name=str(name),
            item_type=data.get("itemType") or "",
            label_type=data.get("labelType") or "",
            task_size=_as_int(data.get("taskSize") or 0, "taskSize", "project options"),
            handler_url=data.get("handlerUrl") or "",
            page_title=data.get("pageTitle") or "",
            categories=[
                Category.from_dict(c)
                for c in _as_list(data.get("categories"), "categories", "project options")
            ],
            attributes=[
                Attribute.from_dict(a)
                for a in _as_list(data.get("attributes"), "attributes", "project options")
            ],
            instructions_url=data.get("instructionsUrl") or "",
            demo_mode=bool(data.get("demoMode", False)),
        )


@dataclass
class Project:
    options: ProjectOptions
    task_indices: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.options.name

    def to_dict(self) -> dict:
        return {"projectOptions": self.options.to_dict(), "taskIndices": list(self.task_indices)}

    @classmethod
    def from_dict(cls, data: Any) -> "Project":
        options = ProjectOptions.from_dict(_require(data, "projectOptions", "project"))
        indices = _as_list(data.get("taskIndices"), "taskIndices", "project")
        return cls(options=options, task_indices=[str(i) for i in indices])


@dataclass
class Task:
    project_options: ProjectOptions
    index: int
    items: list[dict] = field(default_factory=list)

    @property
    def project_name(self) -> str:
        return self.project_options.name

    def to_dict(self) -> dict:
        return {
            "projectOptions": self.project_options.to_dict(),
            "index": self.index,
            "items": list(self.items),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Task":
        options = ProjectOptions.from_dict(_require(data, "projectOptions", "task"))
        index = _as_int(_require(data, "index", "task"), "index", "task")
        return cls(
            project_options=options,
            index=index,
            items=_as_list(data.get("items"), "items", "task"),
        )


@dataclass
class Assignment:
    """A worker's work on one task; submissions share this shape."""

    task: Task
    worker_id: str
    labels: list[dict] | None = None
    tracks: list[dict] | None = None
    events: list[dict] | None = None
    start_time: int = 0
    submit_time: int = 0
    num_labeled_items: int = 0
    user_agent: str = ""
    ip_info: dict = field(default_factory=dict)

    def initialize(self) -> None:
        """Reset the mutable containers to empty."""
        self.labels = []
        self.tracks = []
        self.events = []

    def to_dict(self) -> dict:
        return {
            "task": self.task.to_dict(),
            "workerId": self.worker_id,
            "labels": self.labels,
            "tracks": self.tracks,
            "events": self.events,
            "startTime": self.start_time,
            "submitTime": self.submit_time,
            "numLabeledItems": self.num_labeled_items,
            "userAgent": self.user_agent,
            "ipInfo": dict(self.ip_info),
        }

    @classmethod
    def from_dict(cls, data: Any) -> "Assignment":
        task = Task.from_dict(_require(data, "task", "assignment"))
        worker_id = _require(data, "workerId", "assignment")

        def _opt_list(key):
            value = data.get(key)
            return _as_list(value, key, "assignment") if value is not None else None

        ip_info = data.get("ipInfo") or {}
        if not isinstance(ip_info, Mapping):
            raise DecodeError("assignment field 'ipInfo' must be an object", entity="assignment")
        return cls(
            task=task,
            worker_id=str(worker_id),
            labels=_opt_list("labels"),
            tracks=_opt_list("tracks"),
            events=_opt_list("events"),
            start_time=_as_int(data.get("startTime") or 0, "startTime", "assignment"),
            submit_time=_as_int(data.get("submitTime") or 0, "submitTime", "assignment"),
            num_labeled_items=_as_int(data.get("numLabeledItems") or 0, "numLabeledItems", "assignment"),
            user_agent=data.get("userAgent") or "",
            ip_info=dict(ip_info),
        )


@dataclass
class DashboardContents:
    project: Project
    tasks: list[Task]

    def to_dict(self) -> dict:
        return {"project": self.project.to_dict(), "tasks": [t.to_dict() for t in self.tasks]}


@dataclass(frozen=True)
class ProjectNameCheck:
    """Outcome of a project name availability check."""

    name: str
    available: bool

    @property
    def value(self) -> str:
        """Normalized name when available, empty string when already taken."""
        return self.name if self.available else ""

