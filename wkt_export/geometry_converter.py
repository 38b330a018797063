import logging
from typing import Any, Dict, Optional, Sequence, Tuple

from .config import WriterOptions
from .errors import (
    GeometryConversionError,
    NullGeometryError,
    UnsupportedGeometryKindError,
    WktError,
)
from .geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from .writer import to_wkt

logger = logging.getLogger(__name__)


def _point(c: Sequence[float]) -> Point:
    if not c:
        return Point()
    return Point(tuple(float(v) for v in c))


def _line(coords: Sequence[Sequence[float]]) -> LineString:
    return LineString(tuple(_point(c) for c in coords))


def _polygon(rings: Sequence[Sequence[Sequence[float]]]) -> Polygon:
    if not rings:
        return Polygon()
    return Polygon(_line(rings[0]), tuple(_line(ring) for ring in rings[1:]))


_GEOJSON_BUILDERS = {
    "POINT": _point,
    "LINESTRING": _line,
    "POLYGON": _polygon,
    "MULTIPOINT": lambda c: MultiPoint(tuple(_point(p) for p in c)),
    "MULTILINESTRING": lambda c: MultiLineString(tuple(_line(line) for line in c)),
    "MULTIPOLYGON": lambda c: MultiPolygon(tuple(_polygon(p) for p in c)),
}


def _build_collection(root, members_of, build_member) -> GeometryCollection:
    """
    Build a (possibly deeply nested) collection without recursion.

    ``members_of(value)`` returns the members of a collection value and None for
    anything else; ``build_member`` converts a non-collection value.
    """
    _done = object()
    built_root: list = []
    stack = [(iter(members_of(root)), built_root)]
    while stack:
        members, built = stack[-1]
        member = next(members, _done)
        if member is _done:
            stack.pop()
            if stack:
                stack[-1][1].append(GeometryCollection(tuple(built)))
            continue

        nested = members_of(member)
        if nested is None:
            built.append(build_member(member))
        else:
            stack.append((iter(nested), []))
    return GeometryCollection(tuple(built_root))


def _geojson_members(geometry):
    if not isinstance(geometry, dict):
        return None
    if str(geometry.get("type", "")).upper() != "GEOMETRYCOLLECTION":
        return None
    members = geometry.get("geometries") or []
    if not isinstance(members, (list, tuple)):
        raise GeometryConversionError(
            f"GeometryCollection members must be a list, got {type(members).__name__}"
        )
    return members


def _geojson_simple(geometry: Optional[Dict[str, Any]]) -> Geometry:
    if geometry is None:
        raise NullGeometryError("GeoJSON geometry")
    if not isinstance(geometry, dict):
        raise GeometryConversionError(
            f"GeoJSON geometry must be a mapping, got {type(geometry).__name__}"
        )

    builder = _GEOJSON_BUILDERS.get(str(geometry.get("type", "")).upper())
    if builder is None:
        raise UnsupportedGeometryKindError(geometry.get("type") or "<missing type>")

    coords = geometry.get("coordinates") or []
    try:
        return builder(coords)
    except (TypeError, IndexError, ValueError) as e:
        raise GeometryConversionError(
            f"Malformed {geometry.get('type')} coordinates: {e}"
        ) from e


def from_geojson(geometry: Optional[Dict[str, Any]]) -> Geometry:
    """
    Build a geometry from a GeoJSON geometry mapping.

    Missing or empty coordinates give the empty geometry of the declared type.
    Nested GeometryCollections are unfolded on an explicit stack, so their depth
    is not bounded by the recursion limit.
    """
    if _geojson_members(geometry) is None:
        return _geojson_simple(geometry)
    return _build_collection(geometry, _geojson_members, _geojson_simple)


def _shapely_members(geom):
    if getattr(geom, "geom_type", None) == "GeometryCollection":
        return geom.geoms
    return None


def _shapely_simple(geom) -> Geometry:
    if geom is None:
        raise NullGeometryError("shapely geometry")

    geom_type = getattr(geom, "geom_type", None)
    if geom_type == "Point":
        return Point() if geom.is_empty else Point(tuple(geom.coords[0]))
    if geom_type in ("LineString", "LinearRing"):
        return LineString.from_coords(geom.coords)
    if geom_type == "Polygon":
        if geom.is_empty:
            return Polygon()
        return Polygon(
            LineString.from_coords(geom.exterior.coords),
            tuple(LineString.from_coords(ring.coords) for ring in geom.interiors),
        )
    if geom_type == "MultiPoint":
        return MultiPoint(tuple(_shapely_simple(g) for g in geom.geoms))
    if geom_type == "MultiLineString":
        return MultiLineString(tuple(_shapely_simple(g) for g in geom.geoms))
    if geom_type == "MultiPolygon":
        return MultiPolygon(tuple(_shapely_simple(g) for g in geom.geoms))

    raise UnsupportedGeometryKindError(geom_type or type(geom).__name__)


def from_shapely(geom) -> Geometry:
    """Convert a shapely geometry, keeping Z values when present."""
    if _shapely_members(geom) is None:
        return _shapely_simple(geom)
    return _build_collection(geom, _shapely_members, _shapely_simple)


def geojson_to_wkt(
    geometry: Optional[Dict], options: Optional[WriterOptions] = None
) -> Optional[str]:
    if not geometry:
        return None

    try:
        return to_wkt(from_geojson(geometry), options)
    except WktError as e:
        logger.warning(f"Could not convert geometry to WKT: {e}")
        return None


def extract_point_coords(geometry: Dict) -> Tuple[Optional[float], Optional[float]]:
    """Longitude and latitude of a GeoJSON Point; (None, None) for anything else."""
    if not isinstance(geometry, dict) or str(geometry.get("type", "")).upper() != "POINT":
        return None, None
    try:
        point = _point(geometry.get("coordinates") or [])
    except (TypeError, ValueError):
        return None, None
    if point.is_empty():
        return None, None
    return point[0], point[1]
