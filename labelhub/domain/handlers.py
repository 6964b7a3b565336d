"""Map an item type / label type pair to the labeling page that serves it."""
from __future__ import annotations

NO_VALID_HANDLER = "NO_VALID_HANDLER"

_HANDLERS = {
    "image": {"box2d": "2d_labeling", "segmentation": "2d_labeling", "lane": "2d_labeling"},
    "video": {"box2d": "2d_labeling", "segmentation": "2d_labeling"},
    "pointcloud": {"box3d": "3d_labeling"},
}


def get_handler_url(item_type: str | None, label_type: str | None) -> str:
    """Return the handler for the pair, or NO_VALID_HANDLER when unsupported."""
    return _HANDLERS.get(item_type or "", {}).get(label_type or "", NO_VALID_HANDLER)
