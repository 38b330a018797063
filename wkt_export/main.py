#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point.

Reads GeoJSON, GeoJSON-in-CSV or any vector file geopandas can open, and
writes either one WKT string per line or a CSV of processed feature rows.
"""

import argparse
import logging
import time
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .config import (
    CHUNK_SIZE,
    DEFAULT_CSV_COLUMN,
    DEFAULT_CSV_DELIMITER,
    LOG_FORMAT,
    NonFinitePolicy,
    RenderStrategy,
    WriterOptions,
)
from .data_processor import extract_date_from_path, process_features_batch
from .errors import WktError
from .geometry import Geometry
from .geometry_converter import from_geojson
from .loader import (
    geodataframe_to_features,
    load_csv_features,
    load_geodataframe,
    load_geojson,
)
from .saver import save_rows_to_csv, write_wkt_lines
from .utils import reproject_geojson, timed

logger = logging.getLogger(__name__)

GEOJSON_SUFFIXES = (".geojson", ".json")


class ExportPipeline:
    """Load features, optionally reproject them, and write WKT output."""

    def __init__(
        self,
        input_path: Path,
        output_path: Path,
        output_format: str = "wkt",
        options: Optional[WriterOptions] = None,
        csv_column: str = DEFAULT_CSV_COLUMN,
        delimiter: str = DEFAULT_CSV_DELIMITER,
        from_crs: Optional[str] = None,
        to_crs: Optional[str] = None,
        date: Optional[str] = None,
        chunk_size: int = CHUNK_SIZE,
    ):
        """
        Initialize the pipeline.

        Args:
            input_path: GeoJSON, CSV or other vector file to read
            output_path: File to write
            output_format: "wkt" for one WKT per line, "csv" for feature rows
            options: Writer options injected into every conversion
            csv_column: GeoJSON geometry column of CSV inputs
            delimiter: Field delimiter of CSV inputs
            from_crs: Source CRS when reprojecting
            to_crs: Target CRS when reprojecting
            date: Source date stamped on CSV rows
            chunk_size: Features processed per batch
        """
        self.input_path = Path(input_path)
        self.output_path = Path(output_path)
        self.output_format = output_format
        self.options = options or WriterOptions()
        self.csv_column = csv_column
        self.delimiter = delimiter
        self.from_crs = from_crs
        self.to_crs = to_crs
        self.date = date or extract_date_from_path(str(self.input_path))
        self.chunk_size = chunk_size
        self.written = 0

    def load_features(self) -> List[Dict]:
        suffix = self.input_path.suffix.lower()
        if suffix == ".csv":
            return load_csv_features(self.input_path, self.csv_column, self.delimiter)
        if suffix in GEOJSON_SUFFIXES:
            return load_geojson(self.input_path).get("features", [])
        return geodataframe_to_features(load_geodataframe(self.input_path))

    def reproject(self, features: List[Dict]) -> List[Dict]:
        if not (self.from_crs and self.to_crs):
            return features

        logger.info(f"Reprojecting {len(features)} features: {self.from_crs} -> {self.to_crs}")
        for index, feature in enumerate(features):
            geometry = feature.get("geometry")
            if not geometry:
                continue
            try:
                feature["geometry"] = reproject_geojson(geometry, self.from_crs, self.to_crs)
            except Exception as e:
                logger.warning(f"Could not reproject feature #{index}: {e}")
                feature["geometry"] = None
        return features

    def iter_geometries(self, features: List[Dict]) -> Iterator[Geometry]:
        for index, feature in enumerate(features):
            try:
                yield from_geojson(feature.get("geometry"))
            except WktError as e:
                logger.warning(f"Skipping feature #{index}: {e}")

    @timed
    def write(self, features: List[Dict]) -> int:
        if self.output_format == "csv":
            rows = []
            for batch in process_features_batch(
                features, self.date, self.chunk_size, self.options
            ):
                rows.extend(batch)
                logger.info(f"Progress: {len(rows)}/{len(features)}")
            save_rows_to_csv(rows, self.output_path)
            return len(rows)

        return write_wkt_lines(self.iter_geometries(features), self.output_path, self.options)

    def run(self) -> bool:
        """
        Run the export.

        Returns:
            bool: True when at least one feature was written
        """
        start_time = time.time()
        try:
            features = self.load_features()
        except (OSError, ValueError, KeyError, RuntimeError) as e:
            logger.error(f"Failed to read {self.input_path}: {e}")
            return False

        if not features:
            logger.warning(f"No features in {self.input_path}")
            return False

        try:
            self.written = self.write(self.reproject(features))
        except WktError as e:
            logger.error(f"Export aborted: {e}")
            return False

        elapsed = time.time() - start_time
        logger.info(f"=== Exported {self.written} features in {elapsed:.2f} seconds ===")
        return self.written > 0


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert vector geometries to Well-Known Text."
    )
    parser.add_argument("input", type=Path, help="GeoJSON, CSV or vector file to read")
    parser.add_argument("output", type=Path, help="File to write")
    parser.add_argument(
        "--format",
        choices=["wkt", "csv"],
        default="wkt",
        help="One WKT per line, or a CSV of feature rows (default: wkt)",
    )
    parser.add_argument(
        "--csv-column",
        default=DEFAULT_CSV_COLUMN,
        help=f"GeoJSON geometry column of CSV inputs (default: {DEFAULT_CSV_COLUMN})",
    )
    parser.add_argument(
        "--delimiter",
        default=DEFAULT_CSV_DELIMITER,
        help=f"Field delimiter of CSV inputs (default: {DEFAULT_CSV_DELIMITER})",
    )
    parser.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Digits kept after the decimal point (default: exact)",
    )
    parser.add_argument(
        "--strategy",
        choices=[s.value for s in RenderStrategy],
        default=RenderStrategy.STACK.value,
        help="Traversal of nested collections (default: stack)",
    )
    parser.add_argument(
        "--non-finite",
        choices=[p.value for p in NonFinitePolicy],
        default=NonFinitePolicy.RAISE.value,
        help="NaN / infinite ordinates: fail, or write NaN/Inf literals (default: raise)",
    )
    parser.add_argument("--from-crs", default=None, help="Source CRS, e.g. EPSG:2154")
    parser.add_argument("--to-crs", default=None, help="Target CRS, e.g. EPSG:4326")
    parser.add_argument(
        "--date", default=None, help="Source date for CSV rows (default: from path or today)"
    )
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=CHUNK_SIZE,
        help=f"Features processed per batch (default: {CHUNK_SIZE})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)
    if bool(args.from_crs) != bool(args.to_crs):
        parser.error("--from-crs and --to-crs must be given together")
    if args.precision is not None and args.precision < 0:
        parser.error("--precision must be >= 0")
    return args


def setup_logging(log_level: str) -> None:
    """
    Configure logging settings.

    Args:
        log_level: Logging level to use
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    options = WriterOptions(
        precision=args.precision,
        non_finite=NonFinitePolicy(args.non_finite),
        strategy=RenderStrategy(args.strategy),
    )
    pipeline = ExportPipeline(
        args.input,
        args.output,
        output_format=args.format,
        options=options,
        csv_column=args.csv_column,
        delimiter=args.delimiter,
        from_crs=args.from_crs,
        to_crs=args.to_crs,
        date=args.date,
        chunk_size=args.chunk_size,
    )

    success = pipeline.run()
    return 0 if success else 1


if __name__ == "__main__":
    raise SystemExit(main())
