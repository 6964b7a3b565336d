"""Default label categories and attributes.

Used when a project omits its own category or attribute configuration. The
tables are tuples of frozen records; use the ``default_*`` helpers to get a
fresh list that callers may mutate.
"""
from __future__ import annotations

from dataclasses import replace

from .models import Attribute, Category, ProjectOptions


def _leaves(*names: str) -> tuple[Category, ...]:
    return tuple(Category(name) for name in names)


BOX2D_CATEGORIES: tuple[Category, ...] = _leaves(
    "person",
    "rider",
    "car",
    "truck",
    "bus",
    "train",
    "motor",
    "bike",
    "traffic sign",
    "traffic light",
)

SEG2D_CATEGORIES: tuple[Category, ...] = (
    Category("void", _leaves("unlabeled", "dynamic", "ego vehicle", "ground", "static")),
    Category("flat", _leaves("parking", "rail track", "road", "sidewalk")),
    Category(
        "construction",
        _leaves("bridge", "building", "bus stop", "fence", "garage", "guard rail", "tunnel", "wall"),
    ),
    Category(
        "object",
        _leaves(
            "banner",
            "billboard",
            "fire hydrant",
            "lane divider",
            "mail box",
            "parking sign",
            "pole",
            "polegroup",
            "street light",
            "traffic cone",
            "traffic device",
            "traffic light",
            "traffic sign",
            "traffic sign frame",
            "trash can",
        ),
    ),
    Category("nature", _leaves("terrain", "vegetation")),
    Category("sky", _leaves("sky")),
    Category("human", _leaves("person", "rider")),
    Category(
        "vehicle",
        _leaves("bicycle", "bus", "car", "caravan", "motorcycle", "trailer", "train", "truck"),
    ),
)

LANE2D_CATEGORIES: tuple[Category, ...] = _leaves(
    "road curb",
    "double white",
    "double yellow",
    "double other",
    "single white",
    "single yellow",
    "single other",
    "crosswalk",
)

BOX2D_ATTRIBUTES: tuple[Attribute, ...] = (
    Attribute(name="Occluded", tool_type="switch", tag_text="o"),
    Attribute(name="Truncated", tool_type="switch", tag_text="t"),
    Attribute(
        name="Traffic Light Color",
        tool_type="list",
        tag_prefix="t",
        tag_suffixes=("", "g", "y", "r"),
        values=("NA", "G", "Y", "R"),
        button_colors=("white", "green", "yellow", "red"),
    ),
)

# keeps the labeling UI from seeing an empty attribute list
DUMMY_ATTRIBUTES: tuple[Attribute, ...] = (Attribute(name=""),)

_CATEGORIES_BY_LABEL_TYPE = {
    "box2d": BOX2D_CATEGORIES,
    "segmentation": SEG2D_CATEGORIES,
    "lane": LANE2D_CATEGORIES,
}


def default_categories(label_type: str) -> list[Category]:
    """Default categories for a label type; empty for unknown types."""
    return list(_CATEGORIES_BY_LABEL_TYPE.get(label_type, ()))


def default_attributes(label_type: str) -> list[Attribute]:
    """Default attributes for a label type (box2d table, or the dummy entry)."""
    if label_type == "box2d":
        return list(BOX2D_ATTRIBUTES)
    return list(DUMMY_ATTRIBUTES)


def with_default_taxonomy(options: ProjectOptions) -> ProjectOptions:
    """Fill missing categories/attributes from the default tables."""
    categories = options.categories or default_categories(options.label_type)
    attributes = options.attributes or default_attributes(options.label_type)
    return replace(options, categories=list(categories), attributes=list(attributes))
