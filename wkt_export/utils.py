"""
Utility functions shared by the loaders and the command line.
"""

import functools
import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, TypeVar, Union

import pyproj
from shapely.geometry import mapping, shape
from shapely.ops import transform

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CRS(Enum):
    """
    Coordinate Reference Systems the exports are usually reprojected between.
    """

    EPSG_4326 = "4326"  # WGS 84
    EPSG_2154 = "2154"  # RGF93 / Lambert-93
    EPSG_3857 = "3857"  # Pseudo-Mercator

    @property
    def code(self) -> str:
        return f"EPSG:{self.value}"


def crs_code(crs: Union[CRS, str, int]) -> str:
    """
    Normalize a CRS given as a CRS member, "EPSG:xxxx", "xxxx" or an int.

    Returns:
        str: The "EPSG:xxxx" form understood by pyproj.
    """
    if isinstance(crs, CRS):
        return crs.code
    text = str(crs).strip()
    if text.upper().startswith("EPSG:"):
        return f"EPSG:{text[5:]}"
    return f"EPSG:{text}"


def reproject_geojson(
    geom_dict: Dict[str, Any],
    from_crs: Union[CRS, str, int],
    to_crs: Union[CRS, str, int],
) -> Dict[str, Any]:
    """
    Reproject a GeoJSON geometry mapping.

    Parameters:
        geom_dict (dict): A geometry dictionary (GeoJSON / __geo_interface__).
        from_crs: The source CRS.
        to_crs: The target CRS.

    Returns:
        dict: The reprojected geometry as a GeoJSON mapping.
    """
    source, target = crs_code(from_crs), crs_code(to_crs)
    if source == target:
        return geom_dict

    transformer = pyproj.Transformer.from_crs(source, target, always_xy=True)
    geom_obj = shape(geom_dict)
    return mapping(transform(transformer.transform, geom_obj))


def timed(func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to measure and log function execution time.

    Args:
        func: The function to time

    Returns:
        The wrapped function with timing
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        elapsed_time = time.time() - start_time
        logger.info(f"Function {func.__name__} executed in {elapsed_time:.3f} seconds")
        return result

    return wrapper
