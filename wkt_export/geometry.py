"""
Immutable geometry model consumed by the WKT writer.

Every class exposes ``geom_type`` and ``is_empty()``; members are stored as
tuples so their order is fixed for the lifetime of the value.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterable, Sequence, Tuple


class GeometryType(Enum):
    """Closed set of geometry kinds; the value is the WKT keyword."""

    POINT = "POINT"
    LINESTRING = "LINESTRING"
    POLYGON = "POLYGON"
    MULTIPOINT = "MULTIPOINT"
    MULTILINESTRING = "MULTILINESTRING"
    MULTIPOLYGON = "MULTIPOLYGON"
    GEOMETRYCOLLECTION = "GEOMETRYCOLLECTION"


Coordinate = Sequence[float]

# X and Y; any further ordinates (Z, M, ...) are written as given
MIN_ORDINATES = 2


def _freeze(instance, name: str, values: Iterable) -> None:
    object.__setattr__(instance, name, tuple(values))


class Geometry:
    """Base class of all geometry kinds."""

    geom_type: ClassVar[GeometryType]

    def is_empty(self) -> bool:
        raise NotImplementedError


@dataclass(frozen=True)
class Point(Geometry):
    ordinates: Tuple[float, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.POINT

    def __post_init__(self):
        _freeze(self, "ordinates", self.ordinates)
        count = len(self.ordinates)
        if count and count < MIN_ORDINATES:
            raise ValueError(
                f"A point needs at least {MIN_ORDINATES} ordinates, got {count}"
            )

    @property
    def num_ordinates(self) -> int:
        return len(self.ordinates)

    def __getitem__(self, index: int) -> float:
        return self.ordinates[index]

    def is_empty(self) -> bool:
        return not self.ordinates


@dataclass(frozen=True)
class LineString(Geometry):
    vertices: Tuple[Point, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.LINESTRING

    def __post_init__(self):
        _freeze(self, "vertices", self.vertices)
        for vertex in self.vertices:
            if vertex is not None and vertex.is_empty():
                raise ValueError("LineString vertices must not be empty points")

    @classmethod
    def from_coords(cls, coords: Iterable[Coordinate]) -> "LineString":
        return cls(tuple(Point(tuple(c)) for c in coords))

    @property
    def num_points(self) -> int:
        return len(self.vertices)

    def is_empty(self) -> bool:
        return not self.vertices


@dataclass(frozen=True)
class Polygon(Geometry):
    """Exterior ring plus zero or more interior rings (holes)."""

    exterior: LineString = field(default_factory=LineString)
    interiors: Tuple[LineString, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.POLYGON

    def __post_init__(self):
        _freeze(self, "interiors", self.interiors)

    @classmethod
    def from_coords(
        cls,
        shell: Iterable[Coordinate],
        holes: Iterable[Iterable[Coordinate]] = (),
    ) -> "Polygon":
        return cls(
            LineString.from_coords(shell),
            tuple(LineString.from_coords(hole) for hole in holes),
        )

    def is_empty(self) -> bool:
        return self.exterior is None or self.exterior.is_empty()


@dataclass(frozen=True)
class MultiPoint(Geometry):
    points: Tuple[Point, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.MULTIPOINT

    def __post_init__(self):
        _freeze(self, "points", self.points)

    @classmethod
    def from_coords(cls, coords: Iterable[Coordinate]) -> "MultiPoint":
        return cls(tuple(Point(tuple(c)) for c in coords))

    def __getitem__(self, index: int) -> Point:
        return self.points[index]

    def is_empty(self) -> bool:
        return not self.points


@dataclass(frozen=True)
class MultiLineString(Geometry):
    line_strings: Tuple[LineString, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.MULTILINESTRING

    def __post_init__(self):
        _freeze(self, "line_strings", self.line_strings)

    @classmethod
    def from_coords(cls, lines: Iterable[Iterable[Coordinate]]) -> "MultiLineString":
        return cls(tuple(LineString.from_coords(line) for line in lines))

    def __getitem__(self, index: int) -> LineString:
        return self.line_strings[index]

    def is_empty(self) -> bool:
        return not self.line_strings


@dataclass(frozen=True)
class MultiPolygon(Geometry):
    polygons: Tuple[Polygon, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.MULTIPOLYGON

    def __post_init__(self):
        _freeze(self, "polygons", self.polygons)

    @classmethod
    def from_coords(cls, polygons: Iterable[Sequence[Iterable[Coordinate]]]) -> "MultiPolygon":
        members = []
        for rings in polygons:
            rings = list(rings)
            if not rings:
                members.append(Polygon())
            else:
                members.append(Polygon.from_coords(rings[0], rings[1:]))
        return cls(tuple(members))

    def __getitem__(self, index: int) -> Polygon:
        return self.polygons[index]

    def is_empty(self) -> bool:
        return not self.polygons


@dataclass(frozen=True)
class GeometryCollection(Geometry):
    """Heterogeneous members, collections included."""

    geometries: Tuple[Geometry, ...] = ()

    geom_type: ClassVar[GeometryType] = GeometryType.GEOMETRYCOLLECTION

    def __post_init__(self):
        _freeze(self, "geometries", self.geometries)

    def __getitem__(self, index: int) -> Geometry:
        return self.geometries[index]

    def __len__(self) -> int:
        return len(self.geometries)

    def is_empty(self) -> bool:
        return not self.geometries
