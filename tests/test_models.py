from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from labelhub.domain import taxonomy  # noqa: E402
from labelhub.domain.errors import DecodeError  # noqa: E402
from labelhub.domain.handlers import NO_VALID_HANDLER, get_handler_url  # noqa: E402
from labelhub.domain.models import (  # noqa: E402
    Assignment,
    Attribute,
    Category,
    Project,
    ProjectNameCheck,
    ProjectOptions,
    Task,
)


def test_project_dict_round_trip_keeps_taxonomy():
    options = ProjectOptions(
        name="street",
        item_type="image",
        label_type="segmentation",
        task_size=10,
        categories=list(taxonomy.SEG2D_CATEGORIES[:2]),
        attributes=list(taxonomy.BOX2D_ATTRIBUTES),
        demo_mode=True,
    )
    project = Project(options=options, task_indices=["0000", "0001"])
    assert Project.from_dict(project.to_dict()) == project


def test_assignment_keeps_unset_containers_as_none():
    task = Task(project_options=ProjectOptions(name="p"), index=3, items=[{"url": "a.jpg"}])
    assignment = Assignment(task=task, worker_id="w1", start_time=10)
    payload = assignment.to_dict()
    assert payload["labels"] is None
    assert payload["workerId"] == "w1"
    assert Assignment.from_dict(payload) == assignment


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {},
        {"projectOptions": {}},
        {"projectOptions": {"name": "p", "categories": "nope"}},
        {"projectOptions": {"name": "p", "taskSize": "ten"}},
    ],
)
def test_project_decode_errors(payload):
    with pytest.raises(DecodeError):
        Project.from_dict(payload)


def test_task_requires_index():
    with pytest.raises(DecodeError):
        Task.from_dict({"projectOptions": {"name": "p"}})


def test_category_serializes_leaf_without_subcategories():
    assert Category("car").to_dict() == {"name": "car", "subcategories": None}
    nested = Category("human", (Category("person"),))
    assert Category.from_dict(nested.to_dict()) == nested


def test_project_name_check_legacy_value():
    assert ProjectNameCheck(name="My_Project", available=True).value == "My_Project"
    assert ProjectNameCheck(name="My_Project", available=False).value == ""


def test_default_tables_return_fresh_lists():
    first = taxonomy.default_categories("box2d")
    first.clear()
    assert len(taxonomy.default_categories("box2d")) == len(taxonomy.BOX2D_CATEGORIES) == 10
    assert taxonomy.default_categories("lane")[0].name == "road curb"
    assert taxonomy.default_categories("unknown") == []


def test_default_attributes_by_label_type():
    names = [a.name for a in taxonomy.default_attributes("box2d")]
    assert names == ["Occluded", "Truncated", "Traffic Light Color"]
    assert taxonomy.default_attributes("segmentation") == [Attribute(name="")]


def test_with_default_taxonomy_only_fills_missing_fields():
    own = [Category("cat")]
    options = ProjectOptions(name="p", label_type="box2d", categories=own)
    filled = taxonomy.with_default_taxonomy(options)
    assert filled.categories == own
    assert len(filled.attributes) == 3
    assert options.attributes == []


@pytest.mark.parametrize(
    "item_type,label_type,expected",
    [
        ("image", "box2d", "2d_labeling"),
        ("image", "lane", "2d_labeling"),
        ("video", "segmentation", "2d_labeling"),
        ("video", "lane", NO_VALID_HANDLER),
        ("pointcloud", "box3d", "3d_labeling"),
        ("pointcloud", "box2d", NO_VALID_HANDLER),
        ("audio", "box2d", NO_VALID_HANDLER),
    ],
)
def test_get_handler_url(item_type, label_type, expected):
    assert get_handler_url(item_type, label_type) == expected
