"""
Configuration module for the WKT export package.
This file defines the writer options and the defaults used by the loaders,
the feature processor and the command line.
"""

import typing as t
from dataclasses import dataclass
from enum import Enum


class NonFinitePolicy(Enum):
    """What to do with NaN / infinite ordinates."""

    RAISE = "raise"
    LITERAL = "literal"


class RenderStrategy(Enum):
    """How nested geometry collections are traversed."""

    RECURSIVE = "recursive"
    STACK = "stack"


# Literals written for non-finite ordinates under NonFinitePolicy.LITERAL
NAN_LITERAL = "NaN"
POSITIVE_INFINITY_LITERAL = "Inf"
NEGATIVE_INFINITY_LITERAL = "-Inf"


@dataclass(frozen=True)
class WriterOptions:
    # Digits kept after the decimal point; None keeps the exact shortest value
    precision: t.Optional[int] = None
    non_finite: NonFinitePolicy = NonFinitePolicy.RAISE
    strategy: RenderStrategy = RenderStrategy.STACK

    def __post_init__(self):
        if self.precision is not None and self.precision < 0:
            raise ValueError(f"precision must be >= 0, got {self.precision}")


DEFAULT_OPTIONS = WriterOptions()

# Feature processing
CHUNK_SIZE = 5000
WKT_COLUMN = "geometry_wkt"

# CSV inputs carry one GeoJSON geometry string per row
DEFAULT_CSV_COLUMN = "geo_shape"
DEFAULT_CSV_DELIMITER = ";"

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
