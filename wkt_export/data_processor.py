import json
import re
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Any, Dict, Iterator, List, Optional

from .config import WKT_COLUMN, WriterOptions
from .geometry_converter import extract_point_coords, geojson_to_wkt


_NON_IDENTIFIER = re.compile(r"[^0-9a-z]+")


def clean_property_key(key: str) -> str:
    """Lower-case column name with every run of other characters folded to one "_"."""
    cleaned = _NON_IDENTIFIER.sub("_", str(key).strip().lower()).strip("_")
    return cleaned or "property"


def process_property_value(value: Any) -> Any:
    if isinstance(value, list):
        if all(isinstance(item, (str, int, float)) for item in value):
            return ", ".join(str(item) for item in value)
        return json.dumps(value)

    if isinstance(value, dict):
        return json.dumps(value)

    return value


def process_feature(
    feature: Dict, date: str, options: Optional[WriterOptions] = None
) -> Dict[str, Any]:
    row = {}

    properties = feature.get("properties") or {}
    for key, value in properties.items():
        row[clean_property_key(key)] = process_property_value(value)

    geometry = feature.get("geometry")
    if isinstance(geometry, dict) and geometry:
        wkt = geojson_to_wkt(geometry, options)
        if wkt:
            row[WKT_COLUMN] = wkt

        row["geometry_geojson"] = json.dumps(geometry)
        row["geometry_type"] = geometry.get("type")

        longitude, latitude = extract_point_coords(geometry)
        if longitude is not None:
            row["longitude"] = longitude
            row["latitude"] = latitude

    row["source_date"] = date
    row["load_timestamp"] = datetime.now(timezone.utc).isoformat()

    return row


def process_features_batch(
    features: List[Dict],
    date: str,
    chunk_size: int,
    options: Optional[WriterOptions] = None,
) -> Iterator[List[Dict[str, Any]]]:
    for i in range(0, len(features), chunk_size):
        chunk = features[i : i + chunk_size]
        yield [process_feature(feature, date, options) for feature in chunk]


def extract_date_from_path(path: str) -> str:
    for part in PurePath(path).parts:
        try:
            datetime.strptime(part, "%Y-%m-%d")
            return part
        except ValueError:
            continue
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def get_table_name_from_path(path: str) -> str:
    filename = PurePath(path).name
    for suffix in (".geojson", ".json", ".csv"):
        if filename.lower().endswith(suffix):
            filename = filename[: -len(suffix)]
            break
    return filename.replace("-", "_").replace(" ", "_").lower()
