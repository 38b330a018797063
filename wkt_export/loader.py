"""
Input loading for the WKT export pipeline.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import geopandas as gpd
import pandas as pd

from .config import DEFAULT_CSV_COLUMN, DEFAULT_CSV_DELIMITER

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _as_feature_collection(data: Dict[str, Any]) -> Dict[str, Any]:
    kind = data.get("type")
    if kind == "FeatureCollection":
        return data
    if kind == "Feature":
        return {"type": "FeatureCollection", "features": [data]}
    # Bare geometry
    return {
        "type": "FeatureCollection",
        "features": [{"type": "Feature", "properties": {}, "geometry": data}],
    }


def load_geojson(path: PathLike) -> Dict[str, Any]:
    """
    Load a GeoJSON file as a FeatureCollection.

    A bare Feature or a bare geometry is wrapped into a FeatureCollection so
    callers always get a "features" list.

    Args:
        path: Path to the GeoJSON file

    Returns:
        dict: The FeatureCollection
    """
    file_path = Path(path)
    logger.info(f"Loading GeoJSON: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except RecursionError as e:
            raise ValueError(f"{file_path} nests too deeply to be parsed") from e

    if not isinstance(data, dict):
        raise ValueError(f"{file_path} does not contain a GeoJSON object")
    return _as_feature_collection(data)


def load_csv_features(
    path: PathLike,
    column: str = DEFAULT_CSV_COLUMN,
    delimiter: str = DEFAULT_CSV_DELIMITER,
) -> List[Dict[str, Any]]:
    """
    Load a CSV file whose ``column`` holds one GeoJSON geometry per row.

    The remaining columns become feature properties. Rows whose geometry cannot
    be parsed are skipped with a warning.

    Args:
        path: Path to the CSV file
        column: Name of the GeoJSON geometry column
        delimiter: Field delimiter

    Returns:
        list: GeoJSON features
    """
    file_path = Path(path)
    df = pd.read_csv(file_path, delimiter=delimiter, encoding="utf-8", engine="python")
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found in {file_path}")

    features = []
    skipped = 0
    for _, record in df.iterrows():
        try:
            geometry = json.loads(record[column])
        except (TypeError, ValueError):
            skipped += 1
            continue
        if not isinstance(geometry, dict):
            skipped += 1
            continue

        properties = {
            key: (None if pd.isna(value) else value)
            for key, value in record.items()
            if key != column
        }
        features.append({"type": "Feature", "properties": properties, "geometry": geometry})

    if skipped:
        logger.warning(f"Skipped {skipped} rows with unreadable geometry in {file_path}")
    logger.info(f"Loaded {len(features)} features from {file_path}")
    return features


def load_geodataframe(path: PathLike) -> gpd.GeoDataFrame:
    """Read any vector file geopandas understands."""
    file_path = Path(path)
    logger.info(f"Loading layer: {file_path}")
    return gpd.read_file(file_path)


def geodataframe_to_features(gdf: gpd.GeoDataFrame) -> List[Dict[str, Any]]:
    """
    Convert a GeoDataFrame to GeoJSON features.

    Args:
        gdf: The GeoDataFrame

    Returns:
        list: GeoJSON features, in row order
    """
    geojson_data = json.loads(gdf.to_json())
    return geojson_data.get("features", [])
