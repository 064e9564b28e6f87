"""
Item loading for the CLI and batch runs.

Items come from a YAML or JSON document holding a list of mappings (or a
mapping with an "items" list). Each entry needs id, latitude and longitude;
every other key is kept as the item payload.
"""

from pathlib import Path
from typing import Any, Dict, List

import yaml

from geomarker_cluster.geometry.shapes import GeoItem

_REQUIRED_KEYS = ("id", "latitude", "longitude")


def item_from_dict(data: Dict[str, Any]) -> GeoItem:
    """
    Build a GeoItem from one mapping.

    Coordinates are converted to float but not range-checked; the region
    filter drops out-of-range items.

    Raises:
        ValueError: If a required key is missing or not numeric
    """
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise ValueError(f"Item missing required fields: {', '.join(missing)}")

    try:
        latitude = float(data["latitude"])
        longitude = float(data["longitude"])
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid coordinates for item {data['id']!r}: {e}") from e

    payload = {k: v for k, v in data.items() if k not in _REQUIRED_KEYS}
    return GeoItem(
        id=str(data["id"]),
        latitude=latitude,
        longitude=longitude,
        payload=payload or None,
    )


def load_items(path: str) -> List[GeoItem]:
    """
    Load items from a YAML/JSON file.

    Args:
        path: Path to the document

    Returns:
        Items in document order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Items file not found: {path}")

    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML/JSON in {path}: {e}")

    if isinstance(data, dict):
        data = data.get("items")
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of items")

    items = []
    for index, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"Item #{index} in {path} is not a mapping")
        items.append(item_from_dict(entry))
    return items
